from .actions import INBOUND_ACTIONS, ActionRoute, InboundAction, RequestCode
from .envelope import (
    DecodedRequest,
    Envelope,
    EnvelopeError,
    decrypt_request,
    encode_form,
    route_envelope,
    seal_request,
)

__all__ = [
    "INBOUND_ACTIONS",
    "ActionRoute",
    "InboundAction",
    "RequestCode",
    "DecodedRequest",
    "Envelope",
    "EnvelopeError",
    "decrypt_request",
    "encode_form",
    "route_envelope",
    "seal_request",
]
