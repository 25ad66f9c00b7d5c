"""Ciphertext byte-distribution check.

Encodes a constant payload under many keys and salts and tests the pooled
ciphertext bytes against a uniform distribution with a chi-square statistic.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, asdict
from typing import Any, Dict

import numpy as np

from sammanauth.cipher.authcode import encode, inspect_token
from sammanauth.utils.repro import REFERENCE_NOW, rand_salt

from .roundtrip import rand_text

_DOF = 255


def chi2_critical(dof: int, z: float = 3.0902) -> float:
    """Wilson-Hilferty approximation of the chi-square quantile (z=3.09 -> p=0.001)."""
    h = 2.0 / (9.0 * dof)
    return dof * (1.0 - h + z * math.sqrt(h)) ** 3


@dataclass
class DistributionResult:
    num_tokens: int
    total_bytes: int
    mean: float
    std: float
    chi2: float
    chi2_critical: float
    min_count: int
    max_count: int

    @property
    def looks_uniform(self) -> bool:
        return self.chi2 < self.chi2_critical

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["looks_uniform"] = self.looks_uniform
        return d

    def summary(self) -> str:
        status = "PASS" if self.looks_uniform else "FAIL"
        return (
            f"[{status}] byte distribution: n={self.total_bytes}, mean={self.mean:.2f}, "
            f"chi2={self.chi2:.1f} (critical {self.chi2_critical:.1f})"
        )


def byte_distribution(
    *,
    num_tokens: int = 200,
    payload_len: int = 64,
    seed: int = 1337,
) -> DistributionResult:
    rng = random.Random(seed)
    payload = "A" * payload_len
    chunks = []
    for _ in range(num_tokens):
        key = rand_text(rng, 24)
        token = encode(payload, key, 0, now=REFERENCE_NOW, salt=rand_salt(rng))
        chunks.append(np.frombuffer(inspect_token(token).ciphertext, dtype=np.uint8))

    data = np.concatenate(chunks) if chunks else np.zeros(0, dtype=np.uint8)
    counts = np.bincount(data, minlength=256)
    expected = data.size / 256.0
    chi2 = float(((counts - expected) ** 2 / expected).sum()) if data.size else 0.0

    return DistributionResult(
        num_tokens=num_tokens,
        total_bytes=int(data.size),
        mean=round(float(data.mean()) if data.size else 0.0, 4),
        std=round(float(data.std()) if data.size else 0.0, 4),
        chi2=round(chi2, 4),
        chi2_critical=round(chi2_critical(_DOF), 4),
        min_count=int(counts.min()),
        max_count=int(counts.max()),
    )
