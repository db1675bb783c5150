import itertools
from urllib.parse import parse_qs, urlsplit

import pytest

from intervue.access import (ANY_AUTHENTICATED, DASHBOARD_ROLES, ROUTE_RULES, Decision, evaluate,
                             required_roles_for)
from intervue.roles import Role, STAFF_ROLES
from intervue.session import ANONYMOUS, PENDING, Actor, AuthStatus, SessionContext

from conftest import login


def signed_in(role):
    return SessionContext(AuthStatus.AUTHENTICATED, Actor(1, role, "Someone", "someone@example.com"))


@pytest.mark.parametrize("role,rule", list(itertools.product(list(Role), ROUTE_RULES)))
def test_access_granted_iff_role_in_required_set_or_set_empty(role, rule):
    _, required = rule
    decision = evaluate(signed_in(role), required)
    expected = Decision.ALLOW if (not required or role in required) else Decision.UNAUTHORIZED
    assert decision is expected


@pytest.mark.parametrize("prefix,required", ROUTE_RULES)
def test_protected_routes_need_a_signed_in_actor(prefix, required):
    assert evaluate(ANONYMOUS, required) is Decision.LOGIN
    assert evaluate(PENDING, required) is Decision.PENDING


def test_public_paths_are_always_allowed():
    assert required_roles_for("/") is None
    assert required_roles_for("/request-demo") is None
    assert evaluate(ANONYMOUS, None) is Decision.ALLOW
    assert evaluate(PENDING, None) is Decision.ALLOW


@pytest.mark.parametrize("path,expected", [
    ("/dashboard", DASHBOARD_ROLES),
    ("/dashboard/requirements/3", DASHBOARD_ROLES),
    ("/dashboard/admin", STAFF_ROLES),
    ("/dashboard/admin/companies/1", STAFF_ROLES),
    ("/interviewee/interviews", frozenset({Role.CANDIDATE})),
    ("/auth/logout", ANY_AUTHENTICATED),
    ("/auth/login", None),
    ("/dashboards", None),
])
def test_longest_segment_prefix_wins(path, expected):
    assert required_roles_for(path) == expected


def test_candidate_on_staff_route_goes_to_unauthorized_not_login(client, world):
    login(client, world.users["candidate"])
    resp = client.get("/dashboard/admin/companies")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/unauthorized")
    assert "/auth/login" not in resp.headers["Location"]

    page = client.get("/unauthorized")
    assert page.status_code == 403


def test_anonymous_visitor_is_sent_to_login_with_destination(client, world):
    resp = client.get("/dashboard/interviews?status=Scheduled")
    assert resp.status_code == 302
    location = urlsplit(resp.headers["Location"])
    assert location.path == "/auth/login"
    assert parse_qs(location.query)["next"] == ["/dashboard/interviews?status=Scheduled"]

    resp = login(client, world.users["admin"], next="/dashboard/interviews?status=Scheduled")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard/interviews?status=Scheduled")


def test_store_outage_while_loading_identity_shows_checking_page(client, world, monkeypatch):
    from intervue import session as session_module
    from intervue.errors import RemoteUnavailable

    login(client, world.users["admin"])

    class Unreachable:
        def _get_current_object(self):
            raise RemoteUnavailable()

    monkeypatch.setattr(session_module, "current_user", Unreachable())
    resp = client.get("/dashboard")
    assert resp.status_code == 503
    assert resp.headers["Retry-After"]
    # public pages stay reachable
    assert client.get("/").status_code == 200
