"""One report object for a whole evaluation run.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .avalanche import SACResult
from .roundtrip import RoundtripResult
from .sbox_analysis import SBoxAnalysisResult
from .vectors import KnownAnswerResult


def _kat_ok(k: KnownAnswerResult) -> bool:
    return k.passed and k.decrypt_passed


@dataclass
class EvaluationReport:
    timestamp: str = ""
    known_answer_results: List[KnownAnswerResult] = field(default_factory=list)
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    sac_results: List[SACResult] = field(default_factory=list)
    sbox_result: Optional[SBoxAnalysisResult] = None

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def all_pass(self) -> bool:
        """Correctness only; SAC and S-box figures are informational."""
        return not self.failing_checks()

    def failing_checks(self) -> List[str]:
        bad = [k.name for k in self.known_answer_results if not _kat_ok(k)]
        bad.extend(r.label for r in self.roundtrip_results if not r.is_perfect)
        return bad

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "known_answer": [k.to_dict() for k in self.known_answer_results],
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "sac": [s.to_dict() for s in self.sac_results],
            "sbox": self.sbox_result.to_dict() if self.sbox_result else None,
            "summary": {
                "known_answer_all_pass": all(_kat_ok(k) for k in self.known_answer_results),
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "sac_all_pass": all(s.passes_sac for s in self.sac_results),
                "failing_checks": self.failing_checks(),
            },
        }

    def to_summary(self) -> str:
        out = [f"SM4 evaluation @ {self.timestamp}", "-" * 50]

        def section(title: str, items: list, ok) -> None:
            if not items:
                return
            good = sum(1 for it in items if ok(it))
            out.append(f"\n{title}: {good}/{len(items)} pass")
            out.extend(f"  {it.summary()}" for it in items)

        section("Known-answer vectors", self.known_answer_results, _kat_ok)
        section("Roundtrip pairs", self.roundtrip_results, lambda r: r.is_perfect)
        section("SAC", self.sac_results, lambda s: s.passes_sac)
        if self.sbox_result:
            out.append(f"\nS-box\n  {self.sbox_result.summary()}")
        return "\n".join(out)
