"""Differential and linear analysis of the SM4 S-box.

Computes the DDT maximum, the LAT maximum (as a Walsh coefficient) and
bijectivity, with structured result output.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Sequence

import numpy as np

from sm4lab.cipher.constants import SBOX

_PARITY = np.array([bin(i).count("1") & 1 for i in range(256)], dtype=np.int64)


@dataclass
class SBoxAnalysisResult:
    """Structured result of S-box differential/linear analysis."""
    name: str
    sbox_size: int              # 256 for an 8-bit S-box
    ddt_max: int                # Max DDT entry for dx != 0 (ideal: 2, SM4/AES: 4)
    lat_max_abs: int            # Max |Walsh coefficient| for non-zero masks
    nonlinearity: int           # (size - lat_max_abs) / 2
    is_bijective: bool
    fixed_points: int
    differential_uniformity: str  # "good" / "fair" / "poor"
    linearity: str              # "good" / "fair" / "poor"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else "NOT bijective"
        return (
            f"{self.name} ({self.sbox_size}-entry): "
            f"DDT_max={self.ddt_max} ({self.differential_uniformity}), "
            f"LAT_max={self.lat_max_abs} ({self.linearity}), "
            f"NL={self.nonlinearity}, {bij}"
        )


def ddt_max(sbox: Sequence[int]) -> int:
    """Max entry of the difference distribution table, excluding dx=0."""
    s = np.asarray(sbox, dtype=np.int64)
    n = len(s)
    x = np.arange(n)
    best = 0
    for dx in range(1, n):
        counts = np.bincount(s ^ s[x ^ dx], minlength=n)
        best = max(best, int(counts.max()))
    return best


def _walsh_hadamard(mat: np.ndarray) -> np.ndarray:
    out = mat.astype(np.int64)
    n = out.shape[1]
    h = 1
    while h < n:
        for i in range(0, n, 2 * h):
            a = out[:, i:i + h].copy()
            b = out[:, i + h:i + 2 * h].copy()
            out[:, i:i + h] = a + b
            out[:, i + h:i + 2 * h] = a - b
        h *= 2
    return out


def lat_max_abs(sbox: Sequence[int]) -> int:
    """Max |sum_x (-1)^(a.x ^ b.S(x))| over non-zero input/output masks."""
    s = np.asarray(sbox, dtype=np.int64)
    n = len(s)
    masks = np.arange(n)
    # row b: (-1)^(b . S(x)) for every x
    signs = 1 - 2 * _PARITY[np.bitwise_and.outer(masks, s)]
    walsh = _walsh_hadamard(signs)
    return int(np.abs(walsh[1:, 1:]).max())


def _rate_differential_uniformity(value: int) -> str:
    if value <= 4:
        return "good"
    if value <= 8:
        return "fair"
    return "poor"


def _rate_linearity(value: int) -> str:
    # 32 is the best known for 8-bit bijective S-boxes (AES, SM4)
    if value <= 32:
        return "good"
    if value <= 64:
        return "fair"
    return "poor"


def analyze_sbox(sbox: Sequence[int] = SBOX, name: str = "sm4.sbox") -> SBoxAnalysisResult:
    """Analyze an 8-bit S-box (the SM4 table by default)."""
    if len(sbox) != 256:
        raise ValueError("sbox must have 256 entries")

    ddt = ddt_max(sbox)
    lat = lat_max_abs(sbox)

    return SBoxAnalysisResult(
        name=name,
        sbox_size=len(sbox),
        ddt_max=ddt,
        lat_max_abs=lat,
        nonlinearity=(len(sbox) - lat) // 2,
        is_bijective=len(set(sbox)) == len(sbox),
        fixed_points=sum(1 for i, v in enumerate(sbox) if i == v),
        differential_uniformity=_rate_differential_uniformity(ddt),
        linearity=_rate_linearity(lat),
    )
