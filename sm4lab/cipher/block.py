"""Single-block SM4 encryption and decryption.

Research / education only. Not hardened against timing or cache attacks.
"""
from __future__ import annotations

import struct
from typing import List, Sequence

from .constants import BLOCK_SIZE, ROUNDS
from .errors import InvalidInputLength, InvalidRoundKeys
from .transforms import t_data


class Block(bytes):
    """A bytes value that is exactly one 16-byte cipher block."""

    def __new__(cls, data=b""):
        obj = super().__new__(cls, data)
        if len(obj) != BLOCK_SIZE:
            raise InvalidInputLength(len(obj), what="Block")
        return obj

    def __repr__(self) -> str:
        return f"Block({self.hex()})"


def split_blocks(data: bytes) -> List[Block]:
    """Chunk a block-aligned buffer into Blocks."""
    if len(data) % BLOCK_SIZE != 0:
        raise InvalidInputLength(len(data))
    return [Block(data[i:i + BLOCK_SIZE]) for i in range(0, len(data), BLOCK_SIZE)]


def _crypt(block: bytes, round_keys: Sequence[int]) -> Block:
    if len(round_keys) != ROUNDS:
        raise InvalidRoundKeys(f"Round key schedule must hold {ROUNDS} words, got {len(round_keys)}")

    if not isinstance(block, Block):
        block = Block(block)
    x = list(struct.unpack(">4I", block))
    for i in range(ROUNDS):
        x.append(x[i] ^ t_data(x[i + 1] ^ x[i + 2] ^ x[i + 3] ^ round_keys[i]))

    # Final reverse transform R: output X35, X34, X33, X32.
    return Block(struct.pack(">4I", x[35], x[34], x[33], x[32]))


def encrypt_block(block: bytes, round_keys: Sequence[int]) -> Block:
    """Encrypt one 16-byte block with a 32-word schedule."""
    return _crypt(block, round_keys)


def decrypt_block(block: bytes, round_keys: Sequence[int]) -> Block:
    """Decrypt one 16-byte block: the encryption rounds with keys reversed."""
    return _crypt(block, list(reversed(round_keys)))
