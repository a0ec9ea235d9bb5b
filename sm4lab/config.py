from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from sm4lab.cipher.options import CipherOptions


class Settings(BaseModel):
    # Engine defaults (CLI / tools)
    cipher_options: CipherOptions = Field(default_factory=CipherOptions)
    output_format: Literal["hex", "base64"] = Field(default="hex")

    # Logging
    log_level: str = Field(default="WARNING")

    # Evaluation
    roundtrip_vectors: int = Field(default=200, ge=1, le=1_000_000)
    sac_trials: int = Field(default=50, ge=1, le=100_000)
    global_seed: int = Field(default=1337)

    # Paths
    runs_dir: str = Field(default="runs")

    @property
    def default_mode(self) -> str:
        return self.cipher_options.mode

    @property
    def default_padding(self) -> str:
        return self.cipher_options.padding

    @field_validator("output_format", mode="before")
    @classmethod
    def _lower_format(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def _level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        cipher_options={
            "mode": os.getenv("SM4LAB_DEFAULT_MODE", "CBC"),
            "padding": os.getenv("SM4LAB_DEFAULT_PADDING", "PKCS7"),
        },
        output_format=os.getenv("SM4LAB_OUTPUT_FORMAT", "hex"),
        log_level=os.getenv("SM4LAB_LOG_LEVEL", "WARNING"),
        roundtrip_vectors=int(os.getenv("SM4LAB_ROUNDTRIP_VECTORS", "200")),
        sac_trials=int(os.getenv("SM4LAB_SAC_TRIALS", "50")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        runs_dir=os.getenv("SM4LAB_RUNS_DIR", "runs"),
    )
