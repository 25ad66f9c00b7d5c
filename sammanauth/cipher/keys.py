"""Key material for authcode tokens.

A passphrase is hashed once and split in half: the first half (re-hashed)
seeds the keystream, the second half (re-hashed) salts the frame checksum.
A short per-call salt is mixed into the keystream seed so that identical
inputs never produce identical tokens.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Union

SALT_LENGTH = 4


def md5_hex(data: Union[str, bytes]) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data).hexdigest()


@dataclass(frozen=True)
class KeyPair:
    key_a: str  # keystream half
    key_b: str  # checksum half


def derive_keys(key: str) -> KeyPair:
    digest = md5_hex(key)
    return KeyPair(key_a=md5_hex(digest[:16]), key_b=md5_hex(digest[16:]))


def microtime(now: float) -> str:
    """Render ``now`` as ``"<fraction> <seconds>"`` (e.g. ``"0.25 1700000000"``)."""
    ms = int(now * 1000)
    sec = ms // 1000
    return f"{(ms - sec * 1000) / 1000:g} {sec}"


def make_salt(now: float, length: int = SALT_LENGTH) -> str:
    return md5_hex(microtime(now))[-length:]


def make_cryptkey(key_a: str, salt: str) -> bytes:
    return (key_a + md5_hex(key_a + salt)).encode("ascii")
