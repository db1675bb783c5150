import pytest

from intervue.errors import ValidationError
from intervue.roles import Role, canonical_role, landing_endpoint
from intervue.session import Actor, SessionContext, AuthStatus, ANONYMOUS, PENDING


@pytest.mark.parametrize("raw,expected", [
    ("admin", Role.ADMIN),
    ("  Client ", Role.CLIENT),
    ("super_coordinator", Role.SUPER_COORDINATOR),
    ("interviewee", Role.CANDIDATE),
    ("coordinator", Role.CLIENT_COORDINATOR),
    ("organization", Role.CLIENT),
    (Role.INTERVIEWER, Role.INTERVIEWER),
])
def test_canonical_role_maps_names_and_legacy_aliases(raw, expected):
    assert canonical_role(raw) is expected


@pytest.mark.parametrize("raw", ["", None, "root", "superuser"])
def test_unknown_roles_degrade_to_guest(raw):
    assert canonical_role(raw) is Role.GUEST


def test_strict_canonicalisation_rejects_unknown_roles():
    with pytest.raises(ValidationError) as exc:
        canonical_role("wizard", strict=True)
    assert exc.value.field == "role"


def test_landing_pages_per_role():
    assert landing_endpoint(Role.ADMIN) == "admin.companies"
    assert landing_endpoint("interviewee") == "candidate.overview"
    assert landing_endpoint(Role.CLIENT_COORDINATOR) == "organization.overview"
    assert landing_endpoint(Role.SUPER_COORDINATOR) == "dashboard.index"
    assert landing_endpoint(Role.GUEST) == "dashboard.index"


def test_actor_role_is_canonicalised_once_from_the_user_row():
    class Row:
        id = 7
        role = "interviewee"
        full_name = ""
        email = "old@example.com"
        organization_id = None

    actor = Actor.from_user(Row())
    assert actor.role is Role.CANDIDATE
    assert actor.display_name == "old@example.com"


def test_session_without_actor_is_guest():
    assert ANONYMOUS.role is Role.GUEST
    assert not ANONYMOUS.is_authenticated
    assert PENDING.is_pending and PENDING.role is Role.GUEST
    # an authenticated status without an actor never counts as signed in
    assert not SessionContext(AuthStatus.AUTHENTICATED).is_authenticated
