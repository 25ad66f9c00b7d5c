"""Roundtrip verification: decode(encode(P, K), K) == P.

Generates randomized payloads and keys (ASCII, multi-byte UTF-8, empty)
against a pinned clock and salt so every run is reproducible.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from sammanauth.cipher.authcode import decode_result, encode
from sammanauth.utils.repro import REFERENCE_NOW, rand_salt

_ALPHABET = (
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    " {}[]\":,.-_=+/\\\n\t"
    "éüßñ中文字世界ёж🙂🔑"
)


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip vector."""
    vector_index: int
    payload: str
    key: str
    ttl: int
    token: str
    decoded: Optional[str]
    error: Optional[str]     # DecodeError value or exception message


@dataclass
class RoundtripResult:
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] roundtrip: {self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def rand_text(rng: random.Random, max_len: int) -> str:
    n = rng.randrange(0, max_len + 1)
    return "".join(rng.choice(_ALPHABET) for _ in range(n))


def run_roundtrip_tests(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    max_payload_len: int = 256,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Run roundtrip verification across ``num_vectors`` random (payload, key) pairs.

    Args:
        num_vectors: Number of vectors to test.
        seed: Random seed for deterministic reproducibility.
        max_payload_len: Upper bound on payload length in characters.
        max_failures_recorded: Maximum number of failure details to keep.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        payload = rand_text(rng, max_payload_len)
        key = rand_text(rng, 32)
        ttl = rng.choice([0, -1, 30, 3600])
        salt = rand_salt(rng)
        token = ""

        try:
            token = encode(payload, key, ttl, now=REFERENCE_NOW, salt=salt)
            result = decode_result(token, key, now=REFERENCE_NOW)
            if result.ok and result.payload == payload:
                passed += 1
                continue
            decoded, error = result.payload, result.error.value if result.error else None
        except Exception as exc:
            decoded, error = None, f"{type(exc).__name__}: {exc}"

        failed += 1
        if len(failures) < max_failures_recorded:
            failures.append(RoundtripFailure(
                vector_index=i,
                payload=payload,
                key=key,
                ttl=ttl,
                token=token,
                decoded=decoded,
                error=error,
            ))

    elapsed = time.perf_counter() - start

    return RoundtripResult(
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
