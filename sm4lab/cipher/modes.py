"""ECB and CBC chaining over the SM4 block core.

Mode functions take an already expanded schedule so a message derives its
round keys once. Padding is applied before encryption and removed after
decryption; alignment is checked before any block is touched.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Union

from .block import Block, decrypt_block, encrypt_block, split_blocks
from .constants import BLOCK_SIZE
from .errors import InvalidInputLength, InvalidIVLength, UnsupportedMode
from .key_schedule import RoundKeys
from .padding import Padding, apply_padding, remove_padding


class Mode(str, Enum):
    ECB = "ECB"
    CBC = "CBC"

    @classmethod
    def parse(cls, value: Union["Mode", str]) -> "Mode":
        if isinstance(value, Mode):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedMode(value)

    @property
    def requires_iv(self) -> bool:
        return self is Mode.CBC


def xor_block(a: bytes, b: bytes) -> Block:
    return Block(bytes(x ^ y for x, y in zip(a, b)))


def _ciphertext_blocks(ciphertext: bytes, padding: Padding) -> List[Block]:
    if len(ciphertext) % BLOCK_SIZE != 0:
        raise InvalidInputLength(len(ciphertext), what="Ciphertext")
    if not ciphertext and padding is Padding.PKCS7:
        # PKCS#7 output always has at least one block
        raise InvalidInputLength(0, what="Ciphertext")
    return split_blocks(ciphertext)


def _check_iv(iv) -> Block:
    if iv is None:
        raise InvalidIVLength(None)
    if len(iv) != BLOCK_SIZE:
        raise InvalidIVLength(len(iv))
    return Block(iv)


# ============================================================================
# ECB
# ============================================================================

def ecb_encrypt(plaintext: bytes, round_keys: RoundKeys, padding: Union[Padding, str] = Padding.PKCS7) -> bytes:
    padded = apply_padding(plaintext, padding)
    return b"".join(encrypt_block(b, round_keys) for b in split_blocks(padded))


def ecb_decrypt(ciphertext: bytes, round_keys: RoundKeys, padding: Union[Padding, str] = Padding.PKCS7) -> bytes:
    padding = Padding.parse(padding)
    blocks = _ciphertext_blocks(ciphertext, padding)
    plain = b"".join(decrypt_block(b, round_keys) for b in blocks)
    return remove_padding(plain, padding)


# ============================================================================
# CBC
# ============================================================================

def cbc_encrypt(
    plaintext: bytes,
    round_keys: RoundKeys,
    iv: bytes,
    padding: Union[Padding, str] = Padding.PKCS7,
) -> bytes:
    prev = _check_iv(iv)
    padded = apply_padding(plaintext, padding)

    out: List[bytes] = []
    for block in split_blocks(padded):
        prev = encrypt_block(xor_block(block, prev), round_keys)
        out.append(prev)
    return b"".join(out)


def cbc_decrypt(
    ciphertext: bytes,
    round_keys: RoundKeys,
    iv: bytes,
    padding: Union[Padding, str] = Padding.PKCS7,
) -> bytes:
    prev = _check_iv(iv)
    padding = Padding.parse(padding)
    blocks = _ciphertext_blocks(ciphertext, padding)

    out: List[bytes] = []
    for block in blocks:
        out.append(xor_block(decrypt_block(block, round_keys), prev))
        # chain on the ciphertext just consumed, never on recovered plaintext
        prev = block
    return remove_padding(b"".join(out), padding)


@dataclass(frozen=True)
class ModeHandler:
    mode: Mode
    encrypt: Callable[..., bytes]
    decrypt: Callable[..., bytes]


MODES: Dict[Mode, ModeHandler] = {
    Mode.ECB: ModeHandler(Mode.ECB, ecb_encrypt, ecb_decrypt),
    Mode.CBC: ModeHandler(Mode.CBC, cbc_encrypt, cbc_decrypt),
}


def get_mode(mode: Union[Mode, str]) -> ModeHandler:
    return MODES[Mode.parse(mode)]
