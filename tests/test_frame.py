import sys
from pathlib import Path

import pytest

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sammanauth.cipher.frame import (
    HEADER_WIDTH,
    Frame,
    FrameError,
    build_frame,
    checksum,
    expiry_field,
    parse_frame,
)

KEY_B = "3bd42e9d024fb03a427c350615a24e43"  # derive_keys("secret").key_b


@pytest.mark.parametrize("expiry,expected", [
    (0, "0000000000"),
    (42, "0000000042"),
    (1_700_000_030, "1700000030"),
    (9_999_999_999, "9999999999"),
    (10_700_000_000, "1070000000"),
    (123_456_789_012_345, "1234567890"),
])
def test_expiry_field(expiry, expected):
    assert expiry_field(expiry) == expected


def test_checksum_known_value():
    assert checksum(b"hello", KEY_B) == "4f5025b9281e70d9"


def test_build_and_parse():
    raw = build_frame("héllo".encode("utf-8"), KEY_B, 1_700_000_030)
    assert raw[:10] == b"1700000030"
    assert len(raw) == HEADER_WIDTH + len("héllo".encode("utf-8"))

    frame = parse_frame(raw)
    assert frame.expiry == 1_700_000_030
    assert frame.payload.decode("utf-8") == "héllo"
    assert frame.verify(KEY_B)
    assert not frame.verify("0" * 32)


def test_no_expiry_is_live_forever():
    frame = parse_frame(build_frame(b"x", KEY_B, 0))
    assert frame.expiry == 0
    assert frame.is_live(10**12)


def test_is_live_is_strict():
    frame = parse_frame(build_frame(b"x", KEY_B, 100))
    assert frame.is_live(99)
    assert not frame.is_live(100)


def test_short_frame_rejected():
    with pytest.raises(FrameError):
        parse_frame(b"0" * (HEADER_WIDTH - 1))


def test_non_ascii_header_parses_but_expiry_is_invalid():
    frame = parse_frame(b"\xb2" * HEADER_WIDTH)
    assert not frame.verify(KEY_B)
    with pytest.raises(FrameError):
        _ = frame.expiry


def test_non_digit_expiry():
    frame = Frame(expiry_field="12345abcde", checksum="0" * 16, payload=b"")
    with pytest.raises(FrameError):
        frame.is_live(0)
