"""Block padding schemes: PKCS#7, zero padding and none."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from .constants import BLOCK_SIZE
from .errors import InvalidInputLength, InvalidPadding, UnsupportedPadding


class Padding(str, Enum):
    PKCS7 = "PKCS7"
    ZERO = "ZERO"
    NONE = "NONE"

    @classmethod
    def parse(cls, value: Union["Padding", str]) -> "Padding":
        """Resolve an enum member or a case-insensitive name."""
        if isinstance(value, Padding):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "").replace("_", "")
            found = _ALIASES.get(key)
            if found is not None:
                return found
        raise UnsupportedPadding(value)


_ALIASES: Dict[str, Padding] = {
    "PKCS7": Padding.PKCS7,
    "PKCS#7": Padding.PKCS7,
    "PKCS5": Padding.PKCS7,
    "ZERO": Padding.ZERO,
    "ZEROPADDING": Padding.ZERO,
    "NONE": Padding.NONE,
    "NOPADDING": Padding.NONE,
}


def pkcs7_pad(data: bytes) -> bytes:
    pad_len = BLOCK_SIZE - (len(data) % BLOCK_SIZE)
    return bytes(data) + bytes([pad_len]) * pad_len


def pkcs7_unpad(data: bytes) -> bytes:
    """Strip PKCS#7 padding, checking every padding byte."""
    if not data:
        raise InvalidPadding()
    pad_len = data[-1]
    if pad_len == 0 or pad_len > BLOCK_SIZE or pad_len > len(data):
        raise InvalidPadding()
    bad = 0
    for b in data[-pad_len:]:
        bad |= b ^ pad_len
    if bad:
        raise InvalidPadding()
    return bytes(data[:-pad_len])


def zero_pad(data: bytes) -> bytes:
    rem = len(data) % BLOCK_SIZE
    if rem == 0:
        return bytes(data)
    return bytes(data) + b"\x00" * (BLOCK_SIZE - rem)


def zero_unpad(data: bytes) -> bytes:
    # Lossy: plaintext that ends in 0x00 loses those bytes too.
    return bytes(data).rstrip(b"\x00")


def apply_padding(data: bytes, padding: Union[Padding, str]) -> bytes:
    padding = Padding.parse(padding)
    if padding is Padding.PKCS7:
        return pkcs7_pad(data)
    if padding is Padding.ZERO:
        return zero_pad(data)
    if len(data) % BLOCK_SIZE != 0:
        raise InvalidInputLength(len(data), what="Unpadded plaintext")
    return bytes(data)


def remove_padding(data: bytes, padding: Union[Padding, str]) -> bytes:
    padding = Padding.parse(padding)
    if padding is Padding.PKCS7:
        return pkcs7_unpad(data)
    if padding is Padding.ZERO:
        return zero_unpad(data)
    return bytes(data)
