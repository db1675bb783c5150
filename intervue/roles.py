import enum

from .errors import ValidationError


class Role(str, enum.Enum):
    ADMIN = "admin"
    CLIENT = "client"
    CLIENT_COORDINATOR = "client_coordinator"
    SUPER_COORDINATOR = "super_coordinator"
    INTERVIEWER = "interviewer"
    CANDIDATE = "candidate"
    ACCOUNTANT = "accountant"
    GUEST = "guest"


# historical role names still present in old accounts
LEGACY_ALIASES = {
    "interviewee": Role.CANDIDATE,
    "coordinator": Role.CLIENT_COORDINATOR,
    "organization": Role.CLIENT,
}

# roles a visitor may pick on the public sign-up form
SELF_REGISTER_ROLES = (Role.CLIENT, Role.INTERVIEWER, Role.CANDIDATE)

STAFF_ROLES = frozenset({Role.ADMIN, Role.SUPER_COORDINATOR})
ORGANIZATION_ROLES = frozenset({Role.CLIENT, Role.CLIENT_COORDINATOR})


def canonical_role(raw, strict=False):
    """Map a stored or submitted role string onto ``Role``.

    With ``strict`` an unknown value raises ``ValidationError`` (registration);
    otherwise it degrades to ``Role.GUEST`` so a bad row never grants access.
    """
    if isinstance(raw, Role):
        return raw
    key = (raw or "").strip().lower()
    if key in LEGACY_ALIASES:
        return LEGACY_ALIASES[key]
    try:
        return Role(key)
    except ValueError:
        if strict:
            raise ValidationError(f"Unknown role: {raw!r}", field="role")
        return Role.GUEST


LANDING_ENDPOINTS = {
    Role.ADMIN: "admin.companies",
    Role.INTERVIEWER: "interviewer.overview",
    Role.CANDIDATE: "candidate.overview",
    Role.CLIENT: "organization.overview",
    Role.CLIENT_COORDINATOR: "organization.overview",
}


def landing_endpoint(role):
    return LANDING_ENDPOINTS.get(canonical_role(role), "dashboard.index")
