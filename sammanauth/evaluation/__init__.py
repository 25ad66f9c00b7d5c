"""Self-check harness for the authcode codec.

Roundtrip verification, tamper/wrong-key rejection and ciphertext byte
statistics, aggregated into one report.
"""

from .roundtrip import RoundtripResult, RoundtripFailure, run_roundtrip_tests
from .tamper import RegionStats, TamperResult, flip_token_bit, run_tamper_tests
from .distribution import DistributionResult, byte_distribution
from .report import EvaluationReport, run_selfcheck

__all__ = [
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "RegionStats",
    "TamperResult",
    "flip_token_bit",
    "run_tamper_tests",
    "DistributionResult",
    "byte_distribution",
    "EvaluationReport",
    "run_selfcheck",
]
