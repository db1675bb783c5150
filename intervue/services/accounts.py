"""Sign-up, sign-in and sign-out: the only writers of the request session."""
from flask import current_app
from flask_login import login_user, logout_user

from ..errors import AuthenticationRequired, ValidationError
from ..extensions import db
from ..models.candidate import Candidate, CandidateStatus
from ..models.interviewer import Interviewer, InterviewerStatus
from ..models.organization import Organization
from ..models.user import User
from ..roles import Role, ORGANIZATION_ROLES, SELF_REGISTER_ROLES, canonical_role
from ..session import refresh_session
from ..utils.store import coerce_int, fetch, remote_call

MIN_PASSWORD_LENGTH = 8


def register(email, password, full_name, role, organization_id=None, allowed_roles=SELF_REGISTER_ROLES):
    """Create an account and the profile row its role needs.

    Interviewers and candidates get their Interviewer/Candidate record here;
    client roles must name an existing organization.
    """
    email = (email or "").strip().lower()
    full_name = (full_name or "").strip()
    role = canonical_role(role, strict=True)
    if role not in allowed_roles:
        raise ValidationError(f"Accounts with the {role.value} role cannot be created here", field="role")
    if not email:
        raise ValidationError("Email is required", field="email")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password")

    organization_id = coerce_int(organization_id)
    if role in ORGANIZATION_ROLES and organization_id is None:
        raise ValidationError("Choose your company", field="organization_id")
    if organization_id is not None:
        fetch(Organization, organization_id, "organization")

    with remote_call("register"):
        if User.query.filter_by(email=email).first():
            raise ValidationError("An account with this email already exists", field="email")
        user = User(email=email, full_name=full_name, role=role.value, organization_id=organization_id)
        user.set_password(password)
        db.session.add(user)
        db.session.flush()

        if role is Role.INTERVIEWER:
            profile = Interviewer.query.filter_by(email=email).first()
            if profile is None:
                profile = Interviewer(name=full_name or email, email=email, skills=[],
                                      status=InterviewerStatus.ACTIVE.value, organization_id=organization_id)
                db.session.add(profile)
            profile.user_id = user.id
        elif role is Role.CANDIDATE:
            profile = Candidate.query.filter_by(email=email).first()
            if profile is None:
                profile = Candidate(full_name=full_name or email, email=email, status=CandidateStatus.NEW.value)
                db.session.add(profile)
            profile.user_id = user.id
        db.session.commit()
    current_app.logger.info("registered user %s as %s", user.id, role.value)
    return user


def login(email, password, remember=False):
    email = (email or "").strip().lower()
    with remote_call("login"):
        user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password or ""):
        raise AuthenticationRequired("Invalid email or password")
    login_user(user, remember=remember)
    refresh_session()
    current_app.logger.info("user %s signed in", user.id)
    return user


def logout():
    logout_user()
    return refresh_session()
