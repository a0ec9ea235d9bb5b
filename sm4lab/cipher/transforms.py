"""Word-level SM4 primitives: rotation, tau (S-box layer), L and L'.

All functions take and return unsigned 32-bit ints; results are masked so
Python's unbounded ints never leak past 32 bits.
"""
from __future__ import annotations

from .constants import SBOX, WORD_MASK


def rotl32(x: int, n: int) -> int:
    """Rotate-left a 32-bit word by n bits."""
    n &= 31
    x &= WORD_MASK
    return ((x << n) & WORD_MASK) | (x >> (32 - n))


def tau(word: int) -> int:
    """Non-linear transform: S-box each byte, most significant byte first."""
    return (
        (SBOX[(word >> 24) & 0xFF] << 24)
        | (SBOX[(word >> 16) & 0xFF] << 16)
        | (SBOX[(word >> 8) & 0xFF] << 8)
        | SBOX[word & 0xFF]
    )


def linear_data(word: int) -> int:
    """L, the diffusion layer of the data rounds."""
    return word ^ rotl32(word, 2) ^ rotl32(word, 10) ^ rotl32(word, 18) ^ rotl32(word, 24)


def linear_key(word: int) -> int:
    """L', the diffusion layer of the key schedule."""
    return word ^ rotl32(word, 13) ^ rotl32(word, 23)


def t_data(x: int) -> int:
    return linear_data(tau(x))


def t_key(x: int) -> int:
    return linear_key(tau(x))
