"""Plaintext frame that is actually enciphered.

    expiry (10 ASCII digits) | checksum (16 hex chars) | payload (bytes)

An expiry of ``0000000000`` means the token never expires.
"""
from __future__ import annotations

from dataclasses import dataclass

from .keys import md5_hex

EXPIRY_WIDTH = 10
CHECKSUM_WIDTH = 16
HEADER_WIDTH = EXPIRY_WIDTH + CHECKSUM_WIDTH
NO_EXPIRY = "0" * EXPIRY_WIDTH


class FrameError(ValueError):
    """Raised when decrypted bytes do not form a valid frame."""


def expiry_field(expiry: int) -> str:
    # Values of 10+ digits are cut to their first 10 digits, not widened.
    # Peers expect exactly this; it only matters past the year 2286.
    text = str(int(expiry))
    if len(text) >= EXPIRY_WIDTH:
        return text[:EXPIRY_WIDTH]
    return text.zfill(EXPIRY_WIDTH)


def checksum(payload: bytes, key_b: str) -> str:
    return md5_hex(payload + key_b.encode("ascii"))[:CHECKSUM_WIDTH]


def build_frame(payload: bytes, key_b: str, expiry: int) -> bytes:
    header = expiry_field(expiry) + checksum(payload, key_b)
    return header.encode("ascii") + payload


@dataclass(frozen=True)
class Frame:
    expiry_field: str
    checksum: str
    payload: bytes

    @property
    def expiry(self) -> int:
        if self.expiry_field == NO_EXPIRY:
            return 0
        if not (self.expiry_field.isascii() and self.expiry_field.isdigit()):
            raise FrameError(f"expiry field is not numeric: {self.expiry_field!r}")
        return int(self.expiry_field)

    def is_live(self, now: int) -> bool:
        expiry = self.expiry
        return expiry == 0 or expiry > now

    def verify(self, key_b: str) -> bool:
        return self.checksum == checksum(self.payload, key_b)


def parse_frame(frame: bytes) -> Frame:
    if len(frame) < HEADER_WIDTH:
        raise FrameError(f"frame too short: {len(frame)} < {HEADER_WIDTH} bytes")
    # latin-1 maps every byte, so a wrong key surfaces as a checksum mismatch.
    header = frame[:HEADER_WIDTH].decode("latin-1")
    return Frame(
        expiry_field=header[:EXPIRY_WIDTH],
        checksum=header[EXPIRY_WIDTH:],
        payload=frame[HEADER_WIDTH:],
    )
