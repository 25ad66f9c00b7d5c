import sys
from pathlib import Path

import pytest

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sammanauth.evaluation import (
    EvaluationReport,
    byte_distribution,
    flip_token_bit,
    run_roundtrip_tests,
    run_selfcheck,
    run_tamper_tests,
)
from sammanauth.evaluation.distribution import chi2_critical
from sammanauth.cipher.authcode import encode, inspect_token
from sammanauth.utils.repro import report_path, write_json


def test_roundtrip_harness_is_perfect():
    result = run_roundtrip_tests(num_vectors=150, seed=7)
    assert result.total_vectors == 150
    assert result.is_perfect, result.failures
    assert result.success_rate == 1.0
    assert result.summary().startswith("[PASS]")


def test_roundtrip_harness_is_reproducible():
    a = run_roundtrip_tests(num_vectors=20, seed=99)
    b = run_roundtrip_tests(num_vectors=20, seed=99)
    assert (a.passed, a.failed) == (b.passed, b.failed)


def test_tamper_harness():
    result = run_tamper_tests(num_vectors=150, seed=3)
    assert result.body_region.trials + result.expiry_region.trials == 150
    assert result.body_tamper_evident
    assert result.wrong_key_rejected
    assert set(result.wrong_key.errors) == {"key_mismatch"}
    d = result.to_dict()
    assert d["body_tamper_evident"] is True


def test_flip_token_bit_changes_one_bit():
    token = encode("abc", "k", now=1_700_000_000, salt="abcd")
    flipped = flip_token_bit(token, 13)
    a = inspect_token(token).ciphertext
    b = inspect_token(flipped).ciphertext
    assert sum(bin(x ^ y).count("1") for x, y in zip(a, b)) == 1
    with pytest.raises(IndexError):
        flip_token_bit(token, len(a) * 8)


def test_chi2_critical_value():
    # Tabulated chi-square 0.999 quantile for 255 degrees of freedom is ~330.5
    assert abs(chi2_critical(255) - 330.5) < 1.0


def test_byte_distribution():
    result = byte_distribution(num_tokens=200, payload_len=64, seed=1337)
    assert result.total_bytes == 200 * (26 + 64)
    assert 120.0 < result.mean < 135.0
    assert result.chi2 < 1.25 * result.chi2_critical
    assert result.min_count > 0


def test_selfcheck_report(tmp_path):
    report = run_selfcheck(num_vectors=40, seed=5, timestamp="2026-01-01T00:00:00+00:00")
    assert isinstance(report, EvaluationReport)
    assert "roundtrip" not in report.failing_checks()
    assert "tamper" not in report.failing_checks()

    d = report.to_dict()
    assert set(d) == {"timestamp", "roundtrip", "tamper", "distribution", "summary"}
    assert d["timestamp"] == "2026-01-01T00:00:00+00:00"
    assert "Self-check report" in report.to_summary()

    path = write_json(report_path(tmp_path, "unit test"), d)
    assert path.exists()
    assert path.name.endswith("_unit_test.json")


def test_selfcheck_depends_only_on_seed():
    a = run_selfcheck(num_vectors=25, seed=21, timestamp="t").to_dict()
    b = run_selfcheck(num_vectors=25, seed=21, timestamp="t").to_dict()
    assert a["tamper"] == b["tamper"]
    assert a["distribution"] == b["distribution"]
    assert a["roundtrip"]["passed"] == b["roundtrip"]["passed"]
