from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Tuple


class RequestCode(IntEnum):
    """Codes sent by this client to the auth service."""

    USER_LIST = 1
    USER_ADD = 2
    USER_REMOVE = 3
    USER_LOGIN = 4


class InboundAction(str, Enum):
    """Actions the auth service pushes to this client."""

    ADD_USER = "add_user"
    DEL_USER = "del_user"
    ADD_ADMIN = "add_admin"
    DEL_ADMIN = "del_admin"


@dataclass(frozen=True)
class ActionRoute:
    action: InboundAction
    # (param name exposed to the caller, key inside samman_args)
    fields: Tuple[Tuple[str, str], ...]


# Inbound codes do not line up with RequestCode: 4 is "login" outbound
# but "add admin" inbound.
INBOUND_ACTIONS: Dict[int, ActionRoute] = {
    2: ActionRoute(
        InboundAction.ADD_USER,
        (("pandaID", "pandaID"), ("user_name", "username"), ("email", "email")),
    ),
    3: ActionRoute(InboundAction.DEL_USER, (("clientUserID", "clientUserID"),)),
    4: ActionRoute(InboundAction.ADD_ADMIN, (("clientUserID", "clientUserID"),)),
    5: ActionRoute(InboundAction.DEL_ADMIN, (("clientUserID", "clientUserID"),)),
}
