"""Tamper-evidence and wrong-key rejection measurements.

Flipping one ciphertext bit flips exactly one frame bit, so flips are
bucketed by the frame region they land in:

- ``expiry`` (bytes 0-9): not covered by the checksum. A flip that turns a
  digit into another digit still verifies and changes only the lifetime.
- ``body`` (checksum + payload): every flip should be rejected.
"""
from __future__ import annotations

import base64
import random
from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Any, Dict

from sammanauth.cipher.authcode import decode_result, encode, inspect_token
from sammanauth.cipher.frame import EXPIRY_WIDTH
from sammanauth.utils.repro import REFERENCE_NOW, rand_salt

from .roundtrip import rand_text


@dataclass
class RegionStats:
    trials: int = 0
    rejected: int = 0
    errors: Dict[str, int] = field(default_factory=dict)

    @property
    def rejection_rate(self) -> float:
        return self.rejected / self.trials if self.trials else 0.0


@dataclass
class TamperResult:
    num_vectors: int
    expiry_region: RegionStats
    body_region: RegionStats
    wrong_key: RegionStats
    seed: int = 1337

    @property
    def body_tamper_evident(self) -> bool:
        return self.body_region.trials > 0 and self.body_region.rejected == self.body_region.trials

    @property
    def wrong_key_rejected(self) -> bool:
        return self.wrong_key.trials > 0 and self.wrong_key.rejected == self.wrong_key.trials

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["body_tamper_evident"] = self.body_tamper_evident
        d["wrong_key_rejected"] = self.wrong_key_rejected
        return d

    def summary(self) -> str:
        status = "PASS" if self.body_tamper_evident and self.wrong_key_rejected else "FAIL"
        return (
            f"[{status}] tamper: body {self.body_region.rejected}/{self.body_region.trials} rejected, "
            f"expiry {self.expiry_region.rejected}/{self.expiry_region.trials} rejected, "
            f"wrong key {self.wrong_key.rejected}/{self.wrong_key.trials} rejected"
        )


def flip_token_bit(token: str, bit_index: int) -> str:
    """Return ``token`` with one bit of its ciphertext flipped."""
    parts = inspect_token(token)
    byte_i, bit_i = divmod(bit_index, 8)
    if byte_i < 0 or byte_i >= len(parts.ciphertext):
        raise IndexError("bit_index out of range")
    body = bytearray(parts.ciphertext)
    body[byte_i] ^= 1 << bit_i
    return parts.salt + base64.b64encode(bytes(body)).decode("ascii").rstrip("=")


def _record(stats: RegionStats, errors: Counter, ok: bool, error_name: str) -> None:
    stats.trials += 1
    if not ok:
        stats.rejected += 1
        errors[error_name] += 1


def run_tamper_tests(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    max_payload_len: int = 128,
) -> TamperResult:
    rng = random.Random(seed)
    regions = {name: (RegionStats(), Counter()) for name in ("expiry", "body", "wrong_key")}

    for _ in range(num_vectors):
        payload = rand_text(rng, max_payload_len)
        key = rand_text(rng, 24)
        ttl = rng.choice([0, 3600])
        token = encode(payload, key, ttl, now=REFERENCE_NOW, salt=rand_salt(rng))

        n_bits = len(inspect_token(token).ciphertext) * 8
        bit = rng.randrange(0, n_bits)
        res = decode_result(flip_token_bit(token, bit), key, now=REFERENCE_NOW)
        region = "expiry" if bit // 8 < EXPIRY_WIDTH else "body"
        stats, errors = regions[region]
        _record(stats, errors, res.ok, res.error.value if res.error else "")

        other = key + rand_text(rng, 4) + "#"
        res = decode_result(token, other, now=REFERENCE_NOW)
        stats, errors = regions["wrong_key"]
        _record(stats, errors, res.ok, res.error.value if res.error else "")

    for stats, errors in regions.values():
        stats.errors = dict(errors)

    return TamperResult(
        num_vectors=num_vectors,
        expiry_region=regions["expiry"][0],
        body_region=regions["body"][0],
        wrong_key=regions["wrong_key"][0],
        seed=seed,
    )
