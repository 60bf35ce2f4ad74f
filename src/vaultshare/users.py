"""User registry: profiles keyed by principal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .types import PublicUser, WhoAmIResponse

if TYPE_CHECKING:
    from .state import State, User

logger = logging.getLogger(__name__)


def set_user_info(state: State, caller: str, user: User) -> None:
    """Register or overwrite the caller's profile."""
    with state.lock:
        state.users[caller] = user
    logger.debug("Registered user %s as %r", caller, user.username)


def get_user_info(state: State, caller: str) -> User | None:
    return state.users.get(caller)


def to_public_user(principal: str, user: User) -> PublicUser:
    return PublicUser(
        username=user.username,
        public_key=user.public_key,
        principal=principal,
    )


def who_am_i(state: State, caller: str) -> WhoAmIResponse:
    user = state.users.get(caller)
    if user is None:
        return WhoAmIResponse(known=False)
    return WhoAmIResponse(known=True, user=to_public_user(caller, user))


def get_users(state: State) -> list[PublicUser]:
    """All registered users, in registration order."""
    return [to_public_user(principal, user) for principal, user in state.users.items()]
