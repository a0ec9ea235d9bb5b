"""Error taxonomy for the SM4 engine.

Every error is a ``ValueError`` so callers that only care about bad input
can catch that, while callers that need the exact kind catch the subclass.
"""
from __future__ import annotations


class SM4Error(ValueError):
    """Base class for all engine errors."""


class InvalidKeyLength(SM4Error):
    def __init__(self, length: int):
        super().__init__(f"Key must be 16 bytes, got {length}")
        self.length = length


class InvalidIVLength(SM4Error):
    def __init__(self, length: int | None):
        if length is None:
            msg = "CBC mode requires a 16-byte IV, none given"
        else:
            msg = f"IV must be 16 bytes, got {length}"
        super().__init__(msg)
        self.length = length


class InvalidInputLength(SM4Error):
    def __init__(self, length: int, what: str = "Input"):
        super().__init__(f"{what} length must be a multiple of 16 bytes, got {length}")
        self.length = length


class InvalidRoundKeys(SM4Error):
    """A schedule that is not 32 unsigned 32-bit words."""


class InvalidPadding(SM4Error):
    # One message for every failed check; the kind is all a caller learns.
    def __init__(self):
        super().__init__("Invalid padding")


class UnsupportedMode(SM4Error):
    def __init__(self, mode: object):
        super().__init__(f"Unsupported mode: {mode!r}")
        self.mode = mode


class UnsupportedPadding(SM4Error):
    def __init__(self, padding: object):
        super().__init__(f"Unsupported padding: {padding!r}")
        self.padding = padding
