"""SM4 block cipher engine: key schedule, block core, padding, ECB/CBC.

Research / education only. Do NOT use in production.
"""

from .constants import BLOCK_SIZE, KEY_SIZE, ROUNDS, SBOX, FK, CK
from .errors import (
    SM4Error,
    InvalidKeyLength,
    InvalidIVLength,
    InvalidInputLength,
    InvalidPadding,
    InvalidRoundKeys,
    UnsupportedMode,
    UnsupportedPadding,
)
from .key_schedule import RoundKeys, expand_key
from .block import Block, encrypt_block, decrypt_block, split_blocks
from .padding import Padding, pkcs7_pad, pkcs7_unpad, zero_pad, zero_unpad, apply_padding, remove_padding
from .modes import Mode, ecb_encrypt, ecb_decrypt, cbc_encrypt, cbc_decrypt, get_mode
from .engine import SM4Engine, SM4BlockCipher, encrypt, decrypt, key_schedule
from .options import CipherOptions

__all__ = [
    "BLOCK_SIZE",
    "KEY_SIZE",
    "ROUNDS",
    "SBOX",
    "FK",
    "CK",
    "SM4Error",
    "InvalidKeyLength",
    "InvalidIVLength",
    "InvalidInputLength",
    "InvalidPadding",
    "InvalidRoundKeys",
    "UnsupportedMode",
    "UnsupportedPadding",
    "RoundKeys",
    "expand_key",
    "Block",
    "encrypt_block",
    "decrypt_block",
    "split_blocks",
    "Padding",
    "pkcs7_pad",
    "pkcs7_unpad",
    "zero_pad",
    "zero_unpad",
    "apply_padding",
    "remove_padding",
    "Mode",
    "ecb_encrypt",
    "ecb_decrypt",
    "cbc_encrypt",
    "cbc_decrypt",
    "get_mode",
    "SM4Engine",
    "SM4BlockCipher",
    "encrypt",
    "decrypt",
    "key_schedule",
    "CipherOptions",
]
