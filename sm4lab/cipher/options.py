from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field, field_validator

from .modes import Mode
from .padding import Padding


class CipherOptions(BaseModel):
    """Mode/padding selection as plain data (settings, CLI arguments).

    Values are normalized to their canonical upper-case names; unknown
    names fail validation.
    """

    mode: str = Field(default="CBC", description="ECB or CBC")
    padding: str = Field(default="PKCS7", description="PKCS7, ZERO or NONE")

    @field_validator("mode")
    @classmethod
    def _norm_mode(cls, v: str) -> str:
        return Mode.parse(v).value

    @field_validator("padding")
    @classmethod
    def _norm_padding(cls, v: str) -> str:
        return Padding.parse(v).value

    @classmethod
    def resolve(cls, mode: Union[Mode, str], padding: Union[Padding, str]) -> "CipherOptions":
        """Build from user input, raising UnsupportedMode / UnsupportedPadding directly."""
        return cls(mode=Mode.parse(mode).value, padding=Padding.parse(padding).value)

    @property
    def mode_enum(self) -> Mode:
        return Mode(self.mode)

    @property
    def padding_enum(self) -> Padding:
        return Padding(self.padding)

    @property
    def requires_iv(self) -> bool:
        return self.mode_enum.requires_iv
