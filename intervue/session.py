"""Per-request session context.

The context is built once per request by ``open_session`` (registered as a
``before_request`` hook) and replaced only by ``refresh_session``, which the
account actions call after signing in or out. Everything else reads it through
``get_session()``.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from flask import g
from flask_login import current_user

from .errors import RemoteUnavailable
from .roles import Role, canonical_role


class AuthStatus(enum.Enum):
    PENDING = "pending"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Actor:
    actor_id: int
    role: Role
    display_name: str
    email: str
    organization_id: Optional[int] = None

    @classmethod
    def from_user(cls, user):
        return cls(
            actor_id=user.id,
            role=canonical_role(user.role),
            display_name=user.full_name or user.email,
            email=user.email,
            organization_id=user.organization_id,
        )


@dataclass(frozen=True)
class SessionContext:
    status: AuthStatus
    actor: Optional[Actor] = None

    @property
    def is_pending(self):
        return self.status is AuthStatus.PENDING

    @property
    def is_authenticated(self):
        return self.status is AuthStatus.AUTHENTICATED and self.actor is not None

    @property
    def role(self):
        # routing only; an absent actor never carries real permissions
        return self.actor.role if self.is_authenticated else Role.GUEST

    @property
    def organization_id(self):
        return self.actor.organization_id if self.is_authenticated else None


ANONYMOUS = SessionContext(AuthStatus.ANONYMOUS)
PENDING = SessionContext(AuthStatus.PENDING)


def resolve_session():
    try:
        user = current_user._get_current_object()
        authenticated = bool(user and user.is_authenticated)
    except RemoteUnavailable:
        return PENDING
    if not authenticated:
        return ANONYMOUS
    return SessionContext(AuthStatus.AUTHENTICATED, Actor.from_user(user))


def open_session():
    g.session = resolve_session()


def refresh_session():
    g.session = resolve_session()
    return g.session


def get_session() -> SessionContext:
    if "session" not in g:
        open_session()
    return g.session
