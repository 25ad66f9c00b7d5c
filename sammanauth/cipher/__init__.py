from .authcode import (
    DecodeError,
    DecodeResult,
    TokenParts,
    decode,
    decode_result,
    encode,
    inspect_token,
)
from .frame import Frame, FrameError, build_frame, parse_frame
from .keys import KeyPair, derive_keys, make_salt

__all__ = [
    "DecodeError",
    "DecodeResult",
    "TokenParts",
    "decode",
    "decode_result",
    "encode",
    "inspect_token",
    "Frame",
    "FrameError",
    "build_frame",
    "parse_frame",
    "KeyPair",
    "derive_keys",
    "make_salt",
]
