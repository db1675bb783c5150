"""Route access gate.

``evaluate`` is a pure decision over a session and a route's required roles.
``ROUTE_RULES`` maps each protected URL tree to its required roles, and
``enforce_route_rules`` applies them to every request before any view runs.
"""
import enum

from flask import current_app, make_response, redirect, render_template, request, url_for

from .roles import Role, ORGANIZATION_ROLES, STAFF_ROLES
from .session import get_session


class Decision(enum.Enum):
    PENDING = "pending"
    ALLOW = "allow"
    LOGIN = "login"
    UNAUTHORIZED = "unauthorized"


ANY_AUTHENTICATED = frozenset()

DASHBOARD_ROLES = STAFF_ROLES | ORGANIZATION_ROLES

ROUTE_RULES = (
    ("/dashboard", DASHBOARD_ROLES),
    ("/dashboard/admin", STAFF_ROLES),
    ("/organization", ORGANIZATION_ROLES),
    ("/interviewer", frozenset({Role.INTERVIEWER})),
    ("/candidate", frozenset({Role.CANDIDATE})),
    ("/interviewee", frozenset({Role.CANDIDATE})),
    ("/auth/logout", ANY_AUTHENTICATED),
    ("/account", ANY_AUTHENTICATED),
)


def _segments(path):
    return [s for s in (path or "").split("/") if s]


def required_roles_for(path, rules=ROUTE_RULES):
    """Required roles of the longest matching rule, or None for a public path."""
    parts = _segments(path)
    best, best_len = None, -1
    for prefix, roles in rules:
        pre = _segments(prefix)
        if len(pre) > best_len and parts[:len(pre)] == pre:
            best, best_len = roles, len(pre)
    return best


def evaluate(session, required_roles):
    if required_roles is None:
        return Decision.ALLOW
    if session.is_pending:
        return Decision.PENDING
    if not session.is_authenticated:
        return Decision.LOGIN
    if required_roles and session.role not in required_roles:
        return Decision.UNAUTHORIZED
    return Decision.ALLOW


def respond(decision):
    """Turn a non-ALLOW decision into a response; ALLOW gives None."""
    if decision is Decision.ALLOW:
        return None
    if decision is Decision.PENDING:
        resp = make_response(render_template("checking.html"), 503)
        resp.headers["Retry-After"] = "2"
        return resp
    if decision is Decision.LOGIN:
        target = request.full_path if request.query_string else request.path
        return redirect(url_for("auth.login", next=target))
    current_app.logger.info("access denied: role=%s path=%s", get_session().role.value, request.path)
    return redirect(url_for("public.unauthorized"))


def enforce_route_rules():
    if request.endpoint == "static":
        return None
    return respond(evaluate(get_session(), required_roles_for(request.path)))
