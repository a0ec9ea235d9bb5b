"""CLI entry point for a full SM4 evaluation run.

Usage:
    python scripts/run_evaluation.py                          # defaults from settings
    python scripts/run_evaluation.py --vectors 50 --sac-trials 10
    python scripts/run_evaluation.py --slow                   # include the 1e6-iteration vector

Writes report.json into a timestamped directory under --output-dir.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sm4lab.config import load_settings
from sm4lab.utils.repro import make_run_dir, set_global_seed, write_json, write_text
from sm4lab.evaluation import (
    EvaluationReport,
    analyze_sbox,
    compute_sac,
    run_all_combinations,
    run_known_answer_tests,
)

logger = logging.getLogger("run_evaluation")


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="SM4 evaluation runner")
    parser.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per mode/padding pair (default: {settings.roundtrip_vectors})",
    )
    parser.add_argument(
        "--sac-trials", type=int, default=settings.sac_trials,
        help=f"SAC trials per input bit (default: {settings.sac_trials})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Base random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=settings.runs_dir,
        help=f"Output directory (default: {settings.runs_dir})",
    )
    parser.add_argument(
        "--slow", action="store_true",
        help="Include the 1,000,000-iteration known-answer vector",
    )
    parser.add_argument(
        "--skip-sac", action="store_true",
        help="Skip SAC analysis",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    set_global_seed(args.seed)

    logger.info("Running known-answer vectors")
    kat = run_known_answer_tests(include_slow=args.slow)

    logger.info("Running roundtrip checks (%d vectors per pair)", args.vectors)
    roundtrip = run_all_combinations(
        num_vectors=args.vectors, seed=args.seed, progress_callback=_cli_progress,
    )

    sac = []
    if not args.skip_sac:
        for input_type in ("plaintext", "key"):
            logger.info("SAC analysis over %s bits (%d trials/bit)", input_type, args.sac_trials)
            sac.append(compute_sac(input_type=input_type, trials=args.sac_trials, seed=args.seed))

    logger.info("S-box analysis")
    report = EvaluationReport(
        known_answer_results=kat,
        roundtrip_results=roundtrip,
        sac_results=sac,
        sbox_result=analyze_sbox(),
    )

    paths = make_run_dir(args.output_dir, "sm4_evaluation")
    summary = report.to_summary()
    write_json(paths.report_json, report.to_dict())
    write_text(paths.summary_txt, summary)

    print(summary)
    print(f"\nReport saved to: {paths.report_json}")
    return 0 if report.all_pass else 1


if __name__ == "__main__":
    sys.exit(main())
