import os
import sys
from datetime import timedelta
from types import SimpleNamespace

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from intervue import create_app
from intervue.extensions import db
from intervue.models.candidate import Candidate
from intervue.models.interview import Interview
from intervue.models.interviewer import Interviewer
from intervue.models.organization import Organization
from intervue.models.requirement import Requirement, RequirementStatus
from intervue.models.user import User
from intervue.roles import Role
from intervue.utils.store import utcnow

PASSWORD = "password123"


@pytest.fixture
def app():
    app = create_app("config.TestConfig")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """A request context for calling services directly."""
    with app.test_request_context():
        yield app


def make_user(email, role, organization_id=None, full_name=None):
    u = User(email=email, role=role.value if isinstance(role, Role) else role,
             full_name=full_name or email.split("@")[0], organization_id=organization_id)
    u.set_password(PASSWORD)
    db.session.add(u)
    db.session.flush()
    return u


@pytest.fixture
def world(app):
    """Two companies, one user per role, linked profiles and an approved requirement.

    Returns plain ids so tests can use them from any context.
    """
    with app.app_context():
        acme = Organization(name="Acme")
        globex = Organization(name="Globex")
        db.session.add_all([acme, globex])
        db.session.flush()

        admin = make_user("admin@example.com", Role.ADMIN)
        superc = make_user("super@example.com", Role.SUPER_COORDINATOR)
        client = make_user("client@acme.example", Role.CLIENT, acme.id)
        coordinator = make_user("coord@globex.example", Role.CLIENT_COORDINATOR, globex.id)
        accountant = make_user("accounts@example.com", Role.ACCOUNTANT)
        iv_user = make_user("ivan@example.com", Role.INTERVIEWER)
        cand_user = make_user("casey@example.com", Role.CANDIDATE)
        legacy = make_user("old@example.com", "interviewee")

        interviewer = Interviewer(name="Ivan", email=iv_user.email, skills=["Python", "SQL"], user_id=iv_user.id)
        other_interviewer = Interviewer(name="Nina", email="nina@example.com", skills=["React"],
                                        organization_id=globex.id)
        db.session.add_all([interviewer, other_interviewer])

        requirement = Requirement(organization_id=acme.id, raised_by=client.id, title="Backend Engineer",
                                  skills=["Python", "AWS"], years_of_experience=3, number_of_positions=1,
                                  price_per_interview=100, status=RequirementStatus.APPROVED.value)
        globex_requirement = Requirement(organization_id=globex.id, raised_by=coordinator.id,
                                         title="Frontend Developer", skills=["React"],
                                         status=RequirementStatus.APPROVED.value)
        db.session.add_all([requirement, globex_requirement])
        db.session.flush()

        candidate = Candidate(full_name="Casey", email=cand_user.email, user_id=cand_user.id,
                              requirement_id=requirement.id)
        legacy_candidate = Candidate(full_name="Old Timer", email=legacy.email, user_id=legacy.id)
        db.session.add_all([candidate, legacy_candidate])
        db.session.commit()

        return SimpleNamespace(
            acme_id=acme.id,
            globex_id=globex.id,
            users={
                "admin": admin.email,
                "super_coordinator": superc.email,
                "client": client.email,
                "client_coordinator": coordinator.email,
                "accountant": accountant.email,
                "interviewer": iv_user.email,
                "candidate": cand_user.email,
                "legacy": legacy.email,
            },
            admin_id=admin.id,
            client_id=client.id,
            interviewer_id=interviewer.id,
            other_interviewer_id=other_interviewer.id,
            requirement_id=requirement.id,
            globex_requirement_id=globex_requirement.id,
            candidate_id=candidate.id,
        )


def add_interview(world, when=None, status="Scheduled", interviewer_id=None, requirement_id=None):
    """Insert an interview row directly; call inside an app context."""
    i = Interview(candidate_id=world.candidate_id,
                  interviewer_id=interviewer_id or world.interviewer_id,
                  requirement_id=requirement_id or world.requirement_id,
                  scheduled_at=when or (utcnow() + timedelta(days=1)),
                  status=status)
    db.session.add(i)
    db.session.commit()
    return i


def login(client, email, password=PASSWORD, next=None):
    return client.post("/auth/login", data={"email": email, "password": password, "next": next or ""})
