"""Strict Avalanche Criterion (SAC) for SM4.

For every input bit i and output bit j, estimate P(output bit j flips |
input bit i flips). An ideal cipher gives 0.5 in every cell.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from sm4lab.cipher.engine import SM4BlockCipher

INPUT_TYPES = ("plaintext", "key")


def _flip_bit(data: bytes, bit_index: int) -> bytes:
    # bit 0 is the most significant bit of byte 0
    byte_i, bit_i = divmod(bit_index, 8)
    if not 0 <= byte_i < len(data):
        raise IndexError("bit_index out of range")
    out = bytearray(data)
    out[byte_i] ^= 0x80 >> bit_i
    return bytes(out)


def _bits(data: bytes) -> np.ndarray:
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))


def hamming_distance(a: bytes, b: bytes) -> int:
    if len(a) != len(b):
        raise ValueError("hamming distance length mismatch")
    return int(np.count_nonzero(_bits(a) != _bits(b)))


@dataclass
class SACResult:
    """SAC matrix statistics for one perturbed input."""
    input_type: str             # "plaintext" or "key"
    num_trials: int
    num_input_bits: int
    num_output_bits: int
    per_input_bit_mean: List[float] = field(default_factory=list)
    global_mean: float = 0.0
    global_std: float = 0.0     # spread of per_input_bit_mean
    min_bit_prob: float = 0.0   # weakest cell of the matrix
    max_bit_prob: float = 0.0   # strongest cell
    sac_deviation: float = 0.0  # mean |cell - 0.5|

    @property
    def passes_sac(self) -> bool:
        return abs(self.global_mean - 0.5) < 0.05 and self.global_std < 0.05

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes_sac"] = self.passes_sac
        return d

    def summary(self) -> str:
        verdict = "PASS" if self.passes_sac else "FAIL"
        return (
            f"[{verdict}] SAC over {self.input_type} bits, {self.num_trials} trials: "
            f"mean={self.global_mean:.4f} std={self.global_std:.4f} "
            f"dev={self.sac_deviation:.4f} range=[{self.min_bit_prob:.4f}, {self.max_bit_prob:.4f}]"
        )


def compute_sac(
    cipher: Optional[SM4BlockCipher] = None,
    *,
    input_type: str = "plaintext",
    trials: int = 50,
    seed: int = 1337,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> SACResult:
    """Estimate the SAC matrix of ``cipher`` (SM4 by default).

    Each trial draws a random (plaintext, key) pair, encrypts it once, then
    re-encrypts with every single bit of ``input_type`` flipped in turn.

    Args:
        cipher: Anything with ``encrypt_block(block, key)`` and bit sizes.
        input_type: "plaintext" or "key".
        trials: Random pairs per input bit.
        seed: RNG seed.
        progress_callback: Optional callback(current_trial, total_trials).
    """
    if input_type not in INPUT_TYPES:
        raise ValueError(f"input_type must be 'plaintext' or 'key', got '{input_type}'")
    if trials < 1:
        raise ValueError("trials must be >= 1")

    cipher = cipher or SM4BlockCipher()
    block_bytes = cipher.block_size_bits // 8
    key_bytes = cipher.key_size_bits // 8
    n_in = cipher.block_size_bits if input_type == "plaintext" else cipher.key_size_bits
    n_out = cipher.block_size_bits

    rng = random.Random(seed)
    counts = np.zeros((n_in, n_out), dtype=np.int64)

    for t in range(trials):
        if progress_callback:
            progress_callback(t, trials)
        pt = rng.randbytes(block_bytes)
        key = rng.randbytes(key_bytes)
        base = _bits(cipher.encrypt_block(pt, key))
        for i in range(n_in):
            if input_type == "plaintext":
                ct = cipher.encrypt_block(_flip_bit(pt, i), key)
            else:
                ct = cipher.encrypt_block(pt, _flip_bit(key, i))
            counts[i] += _bits(ct) ^ base

    matrix = counts / trials
    per_bit = matrix.mean(axis=1)

    def r(v) -> float:
        return round(float(v), 6)

    return SACResult(
        input_type=input_type,
        num_trials=trials,
        num_input_bits=n_in,
        num_output_bits=n_out,
        per_input_bit_mean=[r(p) for p in per_bit],
        global_mean=r(matrix.mean()),
        global_std=r(per_bit.std()),
        min_bit_prob=r(matrix.min()),
        max_bit_prob=r(matrix.max()),
        sac_deviation=r(np.abs(matrix - 0.5).mean()),
    )
