import sys
from pathlib import Path

import pytest

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sammanauth.cipher.keys import derive_keys, make_cryptkey, make_salt, md5_hex, microtime
from sammanauth.cipher.keystream import schedule, transform


# ---------------------------------------------------------------------------
# Key material
# ---------------------------------------------------------------------------

def test_md5_hex_accepts_str_and_bytes():
    assert md5_hex("secret") == "5ebe2294ecd0e0f08eab7690d2a6ee69"
    assert md5_hex(b"secret") == md5_hex("secret")
    assert md5_hex("é") == md5_hex("é".encode("utf-8"))


def test_derive_keys_splits_digest():
    keys = derive_keys("secret")
    assert keys.key_a == "5954ce09e3c70101c4e25df6026ddf37"
    assert keys.key_b == "3bd42e9d024fb03a427c350615a24e43"


@pytest.mark.parametrize("now,expected", [
    (1_700_000_000.25, "0.25 1700000000"),
    (1_700_000_000.0, "0 1700000000"),
    (1_700_000_000.5, "0.5 1700000000"),
])
def test_microtime_format(now, expected):
    assert microtime(now) == expected


def test_make_salt():
    assert make_salt(1_700_000_000.25) == "f9b3"
    assert len(make_salt(1.0, length=6)) == 6


def test_cryptkey_shape():
    ck = make_cryptkey(derive_keys("secret").key_a, "a1b2")
    assert len(ck) == 64
    assert ck.startswith(b"5954ce09e3c70101c4e25df6026ddf37")
    assert ck != make_cryptkey(derive_keys("secret").key_a, "a1b3")


# ---------------------------------------------------------------------------
# Keystream
# ---------------------------------------------------------------------------

def test_schedule_is_permutation():
    box = schedule(b"any key at all")
    assert len(box) == 256
    assert sorted(box) == list(range(256))


def test_schedule_depends_on_key():
    assert schedule(b"key-one") != schedule(b"key-two")


def test_schedule_rejects_empty_key():
    with pytest.raises(ValueError):
        schedule(b"")


def test_rc4_compatible_keystream():
    # With a single-pass KSA/PRGA this is plain RC4 ("Key"/"Plaintext" test vector).
    assert transform(b"Plaintext", b"Key").hex() == "bbf316e8d940af0ad3"


def test_transform_is_self_inverse():
    key = b"0123456789abcdef" * 4
    data = bytes(range(256)) * 3
    once = transform(data, key)
    assert once != data
    assert transform(once, key) == data


def test_transform_has_no_state_between_calls():
    key = b"k"
    assert transform(b"abc", key) == transform(b"abc", key)
    assert transform(b"", key) == b""
