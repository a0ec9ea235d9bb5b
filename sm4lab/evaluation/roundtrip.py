"""Roundtrip checks: D(E(P)) == P for every mode/padding pair.

Each pair gets its own stream of random (key, IV, plaintext) cases drawn
from a seeded RNG, so a failing case can be replayed from its index.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import itertools
import random
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from sm4lab.cipher.constants import BLOCK_SIZE, KEY_SIZE
from sm4lab.cipher.engine import SM4Engine
from sm4lab.cipher.modes import Mode
from sm4lab.cipher.padding import Padding


@dataclass(frozen=True)
class RoundtripCase:
    index: int
    key: bytes
    iv: Optional[bytes]
    plaintext: bytes


@dataclass
class RoundtripFailure:
    """One case that did not survive encrypt/decrypt."""
    vector_index: int
    stage: str               # "encrypt", "decrypt" or "compare"
    plaintext_hex: str
    key_hex: str
    iv_hex: Optional[str]
    ciphertext_hex: Optional[str] = None
    decrypted_hex: Optional[str] = None
    error: Optional[str] = None


@dataclass
class RoundtripResult:
    """Pass/fail tally for one mode/padding pair."""
    mode: str
    padding: str
    total_vectors: int
    passed: int = 0
    failed: int = 0
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def label(self) -> str:
        return f"{self.mode}/{self.padding}"

    @property
    def success_rate(self) -> float:
        if not self.total_vectors:
            return 0.0
        return self.passed / self.total_vectors

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0 and self.passed == self.total_vectors

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["label"] = self.label
        return d

    def summary(self) -> str:
        tag = "PASS" if self.is_perfect else "FAIL"
        return f"[{tag}] {self.label}: {self.passed}/{self.total_vectors} ok in {self.elapsed_seconds:.2f}s"


def _rand_plaintext(rng: random.Random, padding: Padding, max_blocks: int) -> bytes:
    if padding is Padding.NONE:
        n = BLOCK_SIZE * rng.randrange(0, max_blocks + 1)
    else:
        n = rng.randrange(0, BLOCK_SIZE * max_blocks + 1)
    pt = rng.randbytes(n)
    if padding is Padding.ZERO and pt.endswith(b"\x00"):
        # zero padding cannot round-trip trailing zeros
        pt = pt[:-1] + bytes([rng.randrange(1, 256)])
    return pt


def generate_cases(
    mode: Mode,
    padding: Padding,
    count: int,
    seed: int,
    max_blocks: int = 4,
) -> Iterator[RoundtripCase]:
    rng = random.Random(seed)
    for i in range(count):
        key = rng.randbytes(KEY_SIZE)
        iv = rng.randbytes(BLOCK_SIZE) if mode.requires_iv else None
        yield RoundtripCase(i, key, iv, _rand_plaintext(rng, padding, max_blocks))


def check_case(case: RoundtripCase, mode: Mode, padding: Padding) -> Optional[RoundtripFailure]:
    """Return None when the case roundtrips, otherwise what went wrong."""
    fail = RoundtripFailure(
        vector_index=case.index,
        stage="encrypt",
        plaintext_hex=case.plaintext.hex(),
        key_hex=case.key.hex(),
        iv_hex=case.iv.hex() if case.iv is not None else None,
    )
    try:
        engine = SM4Engine.from_key(case.key)
        ct = engine.encrypt(case.plaintext, mode=mode, iv=case.iv, padding=padding)
        fail.ciphertext_hex = ct.hex()
        fail.stage = "decrypt"
        back = engine.decrypt(ct, mode=mode, iv=case.iv, padding=padding)
    except Exception as exc:
        fail.error = f"{type(exc).__name__}: {exc}"
        return fail

    if back == case.plaintext:
        return None
    fail.stage = "compare"
    fail.decrypted_hex = back.hex()
    return fail


def run_roundtrip_tests(
    mode: Mode | str,
    padding: Padding | str,
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    max_blocks: int = 4,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Roundtrip ``num_vectors`` random messages through one mode/padding pair.

    Args:
        mode: "ECB" or "CBC".
        padding: "PKCS7", "ZERO" or "NONE".
        num_vectors: Number of random cases.
        seed: RNG seed; the same seed replays the same cases.
        max_blocks: Longest plaintext generated, in blocks.
        max_failures_recorded: Cap on failure details kept in the result.
    """
    mode = Mode.parse(mode)
    padding = Padding.parse(padding)
    result = RoundtripResult(mode=mode.value, padding=padding.value, total_vectors=num_vectors, seed=seed)

    start = time.perf_counter()
    for case in generate_cases(mode, padding, num_vectors, seed, max_blocks):
        failure = check_case(case, mode, padding)
        if failure is None:
            result.passed += 1
            continue
        result.failed += 1
        if len(result.failures) < max_failures_recorded:
            result.failures.append(failure)
    result.elapsed_seconds = round(time.perf_counter() - start, 4)
    return result


def run_all_combinations(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Every (mode, padding) pair, sorted by label."""
    pairs = list(itertools.product(Mode, Padding))
    out = []
    for idx, (mode, padding) in enumerate(pairs):
        if progress_callback:
            progress_callback(f"{mode.value}/{padding.value}", idx, len(pairs))
        out.append(run_roundtrip_tests(mode, padding, num_vectors=num_vectors, seed=seed))
    out.sort(key=lambda r: r.label)
    return out
