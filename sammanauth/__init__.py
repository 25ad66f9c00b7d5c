"""Samman auth tokens: keyed, time-limited, reversible string codec.

Wire-compatible with the PHP/JavaScript "authcode" peers. Provides
obfuscation and tamper evidence, not confidentiality.
"""

from .cipher.authcode import DecodeError, DecodeResult, decode, decode_result, encode, inspect_token

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "DecodeResult",
    "decode",
    "decode_result",
    "encode",
    "inspect_token",
]
