"""Text <-> bytes helpers around the engine: hex, Base64, UTF-8, key/IV material.

The engine itself is byte-in/byte-out; everything that deals with how keys,
IVs and ciphertext are written down lives here.
"""
from __future__ import annotations

import base64
import binascii
import re
import secrets
import string
from typing import Literal

from sm4lab.cipher.constants import BLOCK_SIZE, KEY_SIZE

MaterialFormat = Literal["hex", "text"]
OutputFormat = Literal["hex", "base64"]

_WS = re.compile(r"\s+")
PRINTABLE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


class CodecError(ValueError):
    """Malformed hex/Base64 input or an unknown format name."""


def bytes_to_hex(data: bytes) -> str:
    return bytes(data).hex()


def hex_to_bytes(text: str) -> bytes:
    """Parse hex, ignoring any whitespace."""
    cleaned = _WS.sub("", text)
    if len(cleaned) % 2 != 0:
        raise CodecError("Hex string must have an even number of digits")
    try:
        return bytes.fromhex(cleaned)
    except ValueError as e:
        raise CodecError(f"Invalid hex string: {e}") from e


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def base64_to_bytes(text: str) -> bytes:
    try:
        return base64.b64decode(_WS.sub("", text), validate=True)
    except (binascii.Error, ValueError) as e:
        raise CodecError(f"Invalid Base64 string: {e}") from e


def text_to_bytes(text: str) -> bytes:
    return text.encode("utf-8")


def bytes_to_text(data: bytes) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def encode_output(data: bytes, fmt: OutputFormat = "hex") -> str:
    fmt = fmt.lower()
    if fmt == "hex":
        return bytes_to_hex(data)
    if fmt == "base64":
        return bytes_to_base64(data)
    raise CodecError(f"Unknown output format: {fmt!r}")


def decode_input(text: str, fmt: OutputFormat = "hex") -> bytes:
    fmt = fmt.lower()
    if fmt == "hex":
        return hex_to_bytes(text.strip())
    if fmt == "base64":
        return base64_to_bytes(text.strip())
    raise CodecError(f"Unknown input format: {fmt!r}")


def parse_key_material(value: str, fmt: MaterialFormat = "hex") -> bytes:
    """Turn a key or IV as typed by a user into bytes.

    Length is not checked here; the engine rejects wrong sizes with its own
    typed errors.
    """
    fmt = fmt.lower()
    if fmt == "hex":
        return hex_to_bytes(value)
    if fmt == "text":
        return text_to_bytes(value)
    raise CodecError(f"Unknown key format: {fmt!r}")


def generate_key(length: int = KEY_SIZE) -> bytes:
    return secrets.token_bytes(length)


def generate_iv() -> bytes:
    return generate_key(BLOCK_SIZE)


def generate_printable(length: int = KEY_SIZE) -> str:
    """Random alphanumeric string, usable as a text-format key or IV."""
    return "".join(secrets.choice(PRINTABLE_ALPHABET) for _ in range(length))


def generate_material(fmt: MaterialFormat = "hex", length: int = KEY_SIZE) -> str:
    fmt = fmt.lower()
    if fmt == "hex":
        return generate_key(length).hex()
    if fmt == "text":
        return generate_printable(length)
    raise CodecError(f"Unknown key format: {fmt!r}")
