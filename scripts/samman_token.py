"""CLI for encoding, decoding and inspecting authcode tokens.

Usage:
    python scripts/samman_token.py --key secret encode --ttl 60 "hello"
    python scripts/samman_token.py --key secret decode a1b2...
    python scripts/samman_token.py decode --legacy a1b2...         # key from SAMMAN_API_KEY
    python scripts/samman_token.py inspect a1b2...
    python scripts/samman_token.py request --action USER_LIST --remote-url http://me.example

Exit codes: 0 ok, 1 token rejected, 2 usage error.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sammanauth.config import load_settings
from sammanauth.cipher.authcode import decode_result, encode, inspect_token
from sammanauth.protocol.actions import RequestCode
from sammanauth.protocol.envelope import encode_form, seal_request

logger = logging.getLogger("samman_token")


def _emit(obj: dict, as_json: bool, text: str) -> None:
    print(json.dumps(obj, ensure_ascii=False) if as_json else text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Samman authcode token tool")
    parser.add_argument("--key", default=None, help="Shared key (default: SAMMAN_API_KEY)")
    parser.add_argument("--json", action="store_true", help="Output JSON to stdout")
    parser.add_argument("--now", type=float, default=None, help="Clock override (unix seconds)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_enc = sub.add_parser("encode", help="Encode a payload into a token")
    p_enc.add_argument("payload")
    p_enc.add_argument("--ttl", type=int, default=0, help="Lifetime in seconds (0 = never expires)")
    p_enc.add_argument("--salt", default=None, help="Fixed 4-char salt (reproducible output)")

    p_dec = sub.add_parser("decode", help="Decode a token")
    p_dec.add_argument("token")
    p_dec.add_argument("--legacy", action="store_true", help="Print empty string on failure, exit 0")

    p_ins = sub.add_parser("inspect", help="Show salt and ciphertext of a token (no key needed)")
    p_ins.add_argument("token")

    p_req = sub.add_parser("request", help="Build a form-encoded request body")
    p_req.add_argument("--action", choices=[c.name for c in RequestCode], required=True)
    p_req.add_argument("--args", default=None, help="JSON object for samman_args")
    p_req.add_argument("--remote-url", default=None, help="This client's URL (default: SAMMAN_REMOTE_URL)")
    p_req.add_argument("--ttl", type=int, default=None, help="Token lifetime (default: SAMMAN_REQUEST_TTL)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "inspect":
        try:
            parts = inspect_token(args.token)
        except ValueError as e:
            _emit({"error": str(e)}, args.json, f"Error: {e}")
            return 1
        out = {"salt": parts.salt, "ciphertext": parts.ciphertext.hex(), "length": len(parts.ciphertext)}
        _emit(out, args.json, f"salt={out['salt']} length={out['length']} ciphertext={out['ciphertext']}")
        return 0

    key = args.key if args.key is not None else settings.api_key
    if key is None:
        _emit({"error": "no key: pass --key or set SAMMAN_API_KEY"}, args.json, "Error: missing --key")
        return 2

    if args.command == "encode":
        try:
            token = encode(args.payload, key, args.ttl, now=args.now, salt=args.salt)
        except ValueError as e:
            _emit({"error": str(e)}, args.json, f"Error: {e}")
            return 2
        _emit({"token": token}, args.json, token)
        return 0

    if args.command == "decode":
        result = decode_result(args.token, key, now=args.now)
        if args.legacy:
            payload = result.unwrap_or("")
            _emit({"payload": payload}, args.json, payload)
            return 0
        if not result.ok:
            reason = result.error.value if result.error else "unknown"
            _emit({"error": reason}, args.json, f"Error: token rejected ({reason})")
            return 1
        _emit({"payload": result.payload, "expiry": result.expiry}, args.json, result.payload)
        return 0

    # request
    remote_url = args.remote_url or settings.remote_url
    if not remote_url:
        _emit({"error": "no remote url: pass --remote-url or set SAMMAN_REMOTE_URL"}, args.json,
              "Error: missing --remote-url")
        return 2
    try:
        request_args = json.loads(args.args) if args.args else None
    except json.JSONDecodeError as e:
        _emit({"error": f"invalid --args: {e}"}, args.json, f"Error: invalid --args: {e}")
        return 2
    if request_args is not None and not isinstance(request_args, dict):
        _emit({"error": "--args must be a JSON object"}, args.json, "Error: --args must be a JSON object")
        return 2
    ttl = settings.request_ttl if args.ttl is None else args.ttl
    fields = seal_request(
        RequestCode[args.action], request_args,
        api_key=key, remote_url=remote_url, ttl=ttl, now=args.now,
    )
    logger.debug("sealed %s request for %s", args.action, remote_url)
    _emit({"fields": fields, "body": encode_form(fields)}, args.json, encode_form(fields))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
