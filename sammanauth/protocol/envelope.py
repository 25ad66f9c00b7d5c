"""Request envelopes carried inside authcode tokens.

Outbound requests are JSON ``{"samman_action": <code>, "samman_args": {...}}``
encoded into a token and posted as a form together with the caller's own
URL. Inbound pushes from the auth service arrive as a percent-encoded token
and are routed through :data:`INBOUND_ACTIONS`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlencode

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sammanauth.cipher.authcode import decode_result, encode

from .actions import INBOUND_ACTIONS, InboundAction, RequestCode

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TTL = 30


class EnvelopeError(ValueError):
    """A token decoded correctly but its content is not a valid envelope."""


class Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: int = Field(..., alias="samman_action")
    args: Optional[Dict[str, Any]] = Field(default=None, alias="samman_args")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, text: str) -> "Envelope":
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise EnvelopeError(f"invalid envelope: {exc.error_count()} error(s)") from exc


@dataclass
class DecodedRequest:
    action: Optional[InboundAction] = None
    params: Dict[str, Any] = field(default_factory=dict)


def seal_request(
    code: RequestCode,
    args: Optional[Dict[str, Any]],
    *,
    api_key: str,
    remote_url: str,
    ttl: int = DEFAULT_REQUEST_TTL,
    now: Optional[float] = None,
    salt: Optional[str] = None,
) -> Dict[str, str]:
    """Build the form fields for a request to the auth service."""
    envelope = Envelope(action=int(code), args=args)
    token = encode(envelope.to_json(), api_key, ttl, now=now, salt=salt)
    return {"samman_self": remote_url, "samman_request": token}


def encode_form(fields: Dict[str, str]) -> str:
    return urlencode(fields)


def route_envelope(envelope: Envelope) -> DecodedRequest:
    route = INBOUND_ACTIONS.get(envelope.action)
    if route is None:
        logger.debug("ignoring unknown inbound action code %s", envelope.action)
        return DecodedRequest()
    args = envelope.args or {}
    params = {name: args.get(source) for name, source in route.fields}
    return DecodedRequest(action=route.action, params=params)


def decrypt_request(message: str, api_key: str, *, now: Optional[float] = None) -> DecodedRequest:
    """Decode a pushed request.

    Returns an empty :class:`DecodedRequest` when the token is rejected or
    the action code is unknown.

    Raises:
        EnvelopeError: the token is authentic but does not hold an envelope.
    """
    # unquote, not unquote_plus: "+" is part of the base64 alphabet.
    result = decode_result(unquote(message), api_key, now=now)
    if not result.ok:
        logger.debug(
            "request decode failed (%s); check the token ttl and the api key",
            result.error.value if result.error else "empty",
        )
        return DecodedRequest()
    return route_envelope(Envelope.from_json(result.payload))
