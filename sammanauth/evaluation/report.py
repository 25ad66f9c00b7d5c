"""Structured self-check report.

Aggregates roundtrip, tamper and byte-distribution results into a single
serializable report for the CLI.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .distribution import DistributionResult, byte_distribution
from .roundtrip import RoundtripResult, run_roundtrip_tests
from .tamper import TamperResult, run_tamper_tests


@dataclass
class EvaluationReport:
    roundtrip: RoundtripResult
    tamper: TamperResult
    distribution: DistributionResult
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    @property
    def all_pass(self) -> bool:
        return not self.failing_checks()

    def failing_checks(self) -> List[str]:
        out: List[str] = []
        if not self.roundtrip.is_perfect:
            out.append("roundtrip")
        if not self.tamper.body_tamper_evident:
            out.append("tamper")
        if not self.tamper.wrong_key_rejected:
            out.append("wrong_key")
        if not self.distribution.looks_uniform:
            out.append("distribution")
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "roundtrip": self.roundtrip.to_dict(),
            "tamper": self.tamper.to_dict(),
            "distribution": self.distribution.to_dict(),
            "summary": {
                "all_pass": self.all_pass,
                "failing_checks": self.failing_checks(),
            },
        }

    def to_summary(self) -> str:
        lines = [f"Self-check report - {self.timestamp}", "=" * 50]
        lines.append(self.roundtrip.summary())
        lines.append(self.tamper.summary())
        lines.append(self.distribution.summary())
        return "\n".join(lines)


def run_selfcheck(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    timestamp: Optional[str] = None,
) -> EvaluationReport:
    return EvaluationReport(
        roundtrip=run_roundtrip_tests(num_vectors=num_vectors, seed=seed),
        tamper=run_tamper_tests(num_vectors=num_vectors, seed=seed),
        distribution=byte_distribution(num_tokens=num_vectors, seed=seed),
        timestamp=timestamp or "",
    )
