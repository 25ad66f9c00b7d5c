"""Keyed, time-limited, reversible token codec ("authcode").

    token := salt (4 chars) || base64_without_padding(transform(frame))

The format is shared with PHP and JavaScript peers, so every byte of the
layout is fixed. The checksum gives tamper evidence; the cipher itself is
obfuscation, not confidentiality.

Decoding never raises. :func:`decode_result` reports *why* a token was
rejected; :func:`decode` collapses every failure to ``""`` the way legacy
peers expect.
"""
from __future__ import annotations

import base64
import binascii
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .frame import FrameError, build_frame, parse_frame
from .keys import SALT_LENGTH, derive_keys, make_cryptkey, make_salt
from .keystream import transform

logger = logging.getLogger(__name__)


class DecodeError(Enum):
    MALFORMED = "malformed"
    KEY_MISMATCH = "key_mismatch"
    EXPIRED = "expired"


@dataclass(frozen=True)
class DecodeResult:
    payload: Optional[str] = None
    error: Optional[DecodeError] = None
    expiry: Optional[int] = None  # 0 = never expires
    salt: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.payload is not None

    def unwrap_or(self, default: str) -> str:
        return self.payload if self.ok else default


@dataclass(frozen=True)
class TokenParts:
    salt: str
    ciphertext: bytes


def _check_salt(salt: str) -> None:
    if len(salt) != SALT_LENGTH or not salt.isascii() or not salt.isalnum():
        raise ValueError(f"salt must be {SALT_LENGTH} ASCII letters or digits, got {salt!r}")


def encode(
    payload: str,
    key: str,
    ttl: int = 0,
    *,
    now: Optional[float] = None,
    salt: Optional[str] = None,
) -> str:
    """Encode ``payload`` under ``key``; the token expires ``ttl`` seconds from now.

    Args:
        payload: Text to protect (UTF-8 encoded on the wire).
        key: Shared passphrase.
        ttl: Lifetime in seconds; ``0`` or negative means no expiry.
        now: Clock override (unix seconds, fractional allowed).
        salt: Salt override; drawn from the clock when omitted.

    Returns:
        Token string: 4-char salt followed by unpadded base64.

    Raises:
        ValueError: bad ``salt``, or ``payload``/``key`` not encodable as UTF-8
            (e.g. lone surrogates).
    """
    if now is None:
        now = time.time()
    if salt is None:
        salt = make_salt(now)
    else:
        _check_salt(salt)

    try:
        keys = derive_keys(key)
        raw = payload.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"payload and key must be encodable as UTF-8: {exc.reason}") from exc
    expiry = int(now) + ttl if ttl > 0 else 0
    frame = build_frame(raw, keys.key_b, expiry)
    body = transform(frame, make_cryptkey(keys.key_a, salt))
    return salt + base64.b64encode(body).decode("ascii").rstrip("=")


def inspect_token(token: str) -> TokenParts:
    """Split a token into its salt and raw ciphertext without a key.

    Raises:
        ValueError: token is shorter than the salt or not valid base64.
    """
    if len(token) < SALT_LENGTH:
        raise ValueError(f"token shorter than {SALT_LENGTH}-char salt")
    salt, body = token[:SALT_LENGTH], token[SALT_LENGTH:]
    # Peers may strip padding or hand over the URL-safe alphabet.
    body = body.rstrip("=").replace("-", "+").replace("_", "/")
    body += "=" * (-len(body) % 4)
    try:
        ciphertext = base64.b64decode(body.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as exc:
        raise ValueError(f"token body is not base64: {exc}") from exc
    return TokenParts(salt=salt, ciphertext=ciphertext)


def decode_result(token: str, key: str, *, now: Optional[float] = None) -> DecodeResult:
    if now is None:
        now = time.time()

    try:
        parts = inspect_token(token)
    except ValueError as exc:
        logger.debug("token rejected (malformed): %s", exc)
        return DecodeResult(error=DecodeError.MALFORMED)

    try:
        keys = derive_keys(key)
        cryptkey = make_cryptkey(keys.key_a, parts.salt)
    except UnicodeEncodeError as exc:
        logger.debug("token rejected (unencodable key or salt): %s", exc.reason)
        return DecodeResult(error=DecodeError.MALFORMED)
    plain = transform(parts.ciphertext, cryptkey)

    try:
        frame = parse_frame(plain)
        if not frame.verify(keys.key_b):
            logger.debug("token rejected: checksum mismatch")
            return DecodeResult(error=DecodeError.KEY_MISMATCH, salt=parts.salt)
        expiry = frame.expiry
        payload = frame.payload.decode("utf-8")
    except (FrameError, UnicodeDecodeError) as exc:
        logger.debug("token rejected (malformed frame): %s", exc)
        return DecodeResult(error=DecodeError.MALFORMED, salt=parts.salt)

    if not frame.is_live(int(now)):
        logger.debug("token rejected: expired at %d", expiry)
        return DecodeResult(error=DecodeError.EXPIRED, expiry=expiry, salt=parts.salt)

    return DecodeResult(payload=payload, expiry=expiry, salt=parts.salt)


def decode(token: str, key: str, *, now: Optional[float] = None) -> str:
    """Legacy contract: the payload, or ``""`` on any failure."""
    return decode_result(token, key, now=now).unwrap_or("")
