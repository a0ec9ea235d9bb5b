"""Deterministic evaluation of the SM4 engine.

Provides known-answer vectors, algebraic unit testing (roundtrip
verification per mode/padding), statistical analysis (SAC) and S-box
DDT/LAT analysis, aggregated into a report.

Research / education only. Do NOT use in production.
"""

from .vectors import KnownAnswerVector, KnownAnswerResult, KNOWN_ANSWER_VECTORS, check_vector, run_known_answer_tests
from .roundtrip import (
    RoundtripCase,
    RoundtripFailure,
    RoundtripResult,
    check_case,
    generate_cases,
    run_all_combinations,
    run_roundtrip_tests,
)
from .avalanche import SACResult, compute_sac, hamming_distance
from .sbox_analysis import SBoxAnalysisResult, analyze_sbox, ddt_max, lat_max_abs
from .report import EvaluationReport

__all__ = [
    "KnownAnswerVector",
    "KnownAnswerResult",
    "KNOWN_ANSWER_VECTORS",
    "check_vector",
    "run_known_answer_tests",
    "RoundtripCase",
    "RoundtripResult",
    "check_case",
    "generate_cases",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "run_all_combinations",
    "SACResult",
    "compute_sac",
    "hamming_distance",
    "SBoxAnalysisResult",
    "analyze_sbox",
    "ddt_max",
    "lat_max_abs",
    "EvaluationReport",
]
