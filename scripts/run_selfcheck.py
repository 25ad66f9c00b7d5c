"""CLI entry point for the authcode self-check.

Usage:
    python scripts/run_selfcheck.py                          # default run
    python scripts/run_selfcheck.py --vectors 2000 --seed 7  # larger run
    python scripts/run_selfcheck.py --output-dir reports     # write JSON report

Exit code is 0 when every check passes, 1 otherwise.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sammanauth.config import load_settings
from sammanauth.evaluation.report import run_selfcheck
from sammanauth.utils.repro import report_path, write_json

logger = logging.getLogger("run_selfcheck")


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Authcode self-check: roundtrip, tamper, byte distribution")
    parser.add_argument(
        "--vectors", type=int, default=200,
        help="Vectors per check (default: 200)",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=None,
        help="Write the JSON report into this directory",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logger.info("Running self-check with %d vectors (seed=%d)", args.vectors, args.seed)
    report = run_selfcheck(num_vectors=args.vectors, seed=args.seed)
    print(report.to_summary())

    if args.output_dir:
        path = write_json(report_path(args.output_dir), report.to_dict())
        print(f"\nReport saved to: {path}")

    if not report.all_pass:
        logger.error("Failing checks: %s", ", ".join(report.failing_checks()))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
