"""Whole-message SM4 encryption facade.

Validates key and IV lengths, resolves mode and padding, and drives the
chaining layer. Errors from lower layers are re-raised unchanged.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .block import Block, decrypt_block, encrypt_block
from .constants import BLOCK_SIZE, KEY_SIZE
from .errors import InvalidIVLength, InvalidKeyLength
from .key_schedule import RoundKeys, expand_key
from .modes import Mode, get_mode
from .padding import Padding

logger = logging.getLogger(__name__)

ModeLike = Union[Mode, str]
PaddingLike = Union[Padding, str]


def _check_key(key: bytes) -> None:
    if key is None:
        raise InvalidKeyLength(0)
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key))


def _resolve(mode: ModeLike, padding: PaddingLike, iv: Optional[bytes]):
    mode = Mode.parse(mode)
    padding = Padding.parse(padding)
    if mode.requires_iv:
        if iv is None:
            raise InvalidIVLength(None)
        if len(iv) != BLOCK_SIZE:
            raise InvalidIVLength(len(iv))
    return mode, padding


def key_schedule(key: bytes) -> RoundKeys:
    """Expand a 16-byte key into its 32 round keys."""
    _check_key(key)
    return expand_key(key)


def _encrypt_with(round_keys: RoundKeys, plaintext: bytes, mode: Mode, iv, padding: Padding) -> bytes:
    handler = get_mode(mode)
    logger.debug("encrypt mode=%s padding=%s len=%d", mode.value, padding.value, len(plaintext))
    if mode.requires_iv:
        return handler.encrypt(plaintext, round_keys, iv, padding)
    return handler.encrypt(plaintext, round_keys, padding)


def _decrypt_with(round_keys: RoundKeys, ciphertext: bytes, mode: Mode, iv, padding: Padding) -> bytes:
    handler = get_mode(mode)
    logger.debug("decrypt mode=%s padding=%s len=%d", mode.value, padding.value, len(ciphertext))
    if mode.requires_iv:
        return handler.decrypt(ciphertext, round_keys, iv, padding)
    return handler.decrypt(ciphertext, round_keys, padding)


def encrypt(
    plaintext: bytes,
    key: bytes,
    mode: ModeLike = Mode.CBC,
    iv: Optional[bytes] = None,
    padding: PaddingLike = Padding.PKCS7,
) -> bytes:
    """Encrypt a whole message.

    Args:
        plaintext: Message bytes of any length.
        key: 16-byte key.
        mode: "ECB" or "CBC".
        iv: 16-byte IV, required for CBC and ignored for ECB.
        padding: "PKCS7", "ZERO" or "NONE".

    Returns:
        Ciphertext bytes, a multiple of 16 in length.

    Raises:
        InvalidKeyLength, UnsupportedMode, UnsupportedPadding,
        InvalidIVLength, InvalidInputLength.
    """
    _check_key(key)
    mode, padding = _resolve(mode, padding, iv)
    return _encrypt_with(expand_key(key), plaintext, mode, iv, padding)


def decrypt(
    ciphertext: bytes,
    key: bytes,
    mode: ModeLike = Mode.CBC,
    iv: Optional[bytes] = None,
    padding: PaddingLike = Padding.PKCS7,
) -> bytes:
    """Decrypt a whole message; see ``encrypt`` for the arguments.

    Additionally raises InvalidPadding when PKCS#7 verification fails.
    """
    _check_key(key)
    mode, padding = _resolve(mode, padding, iv)
    return _decrypt_with(expand_key(key), ciphertext, mode, iv, padding)


@dataclass(frozen=True)
class SM4Engine:
    """Engine bound to one key; the schedule is derived once and reused.

    Only the round keys are kept, not the key itself.
    """
    round_keys: RoundKeys = field(repr=False)

    @classmethod
    def from_key(cls, key: bytes) -> "SM4Engine":
        return cls(round_keys=key_schedule(key))

    def encrypt(
        self,
        plaintext: bytes,
        mode: ModeLike = Mode.CBC,
        iv: Optional[bytes] = None,
        padding: PaddingLike = Padding.PKCS7,
    ) -> bytes:
        mode, padding = _resolve(mode, padding, iv)
        return _encrypt_with(self.round_keys, plaintext, mode, iv, padding)

    def decrypt(
        self,
        ciphertext: bytes,
        mode: ModeLike = Mode.CBC,
        iv: Optional[bytes] = None,
        padding: PaddingLike = Padding.PKCS7,
    ) -> bytes:
        mode, padding = _resolve(mode, padding, iv)
        return _decrypt_with(self.round_keys, ciphertext, mode, iv, padding)

    def encrypt_block(self, block: bytes) -> Block:
        return encrypt_block(block, self.round_keys)

    def decrypt_block(self, block: bytes) -> Block:
        return decrypt_block(block, self.round_keys)


class SM4BlockCipher:
    """Stateless ``encrypt_block(block, key)`` adapter for the evaluation tools."""

    block_size_bits = BLOCK_SIZE * 8
    key_size_bits = KEY_SIZE * 8
    name = "SM4"

    def encrypt_block(self, plaintext_block: bytes, key: bytes) -> bytes:
        return encrypt_block(plaintext_block, key_schedule(key))

    def decrypt_block(self, ciphertext_block: bytes, key: bytes) -> bytes:
        return decrypt_block(ciphertext_block, key_schedule(key))
