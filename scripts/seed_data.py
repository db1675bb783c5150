"""Populate a development database with a small, coherent data set.

Safe to run repeatedly: rows are looked up by their natural key first.

    python scripts/seed_data.py
"""
import os
import sys
from datetime import timedelta

# ensure project root is on sys.path so `import intervue` works when running this script
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from intervue import create_app
from intervue.extensions import db
from intervue.models.candidate import Candidate, CandidateStatus
from intervue.models.interview import Interview, InterviewStatus
from intervue.models.interviewer import Interviewer, InterviewerStatus
from intervue.models.organization import Organization
from intervue.models.requirement import Requirement, RequirementStatus
from intervue.models.skill import Skill
from intervue.models.user import User
from intervue.roles import Role
from intervue.utils.store import utcnow

PASSWORD = os.getenv("SEED_PASSWORD", "password123")

ORGANIZATIONS = [
    {"name": "Acme Corp", "industry": "Manufacturing", "contact_email": "hiring@acme.example"},
    {"name": "Globex", "industry": "Software", "contact_email": "talent@globex.example"},
]

SKILLS = [
    ("Python", "Backend"), ("React", "Frontend"), ("TypeScript", "Frontend"),
    ("SQL", "Data"), ("AWS", "Cloud"), ("System Design", "General"),
]


def get_or_create(model, defaults=None, **keys):
    obj = model.query.filter_by(**keys).first()
    if obj is None:
        obj = model(**keys, **(defaults or {}))
        db.session.add(obj)
        db.session.flush()
    return obj


def user(email, role, full_name, organization=None):
    u = User.query.filter_by(email=email).first()
    if u is None:
        u = User(email=email, role=role.value, full_name=full_name,
                 organization_id=organization.id if organization else None)
        u.set_password(PASSWORD)
        db.session.add(u)
        db.session.flush()
    return u


def seed():
    acme, globex = [get_or_create(Organization, name=o["name"],
                                  defaults={k: v for k, v in o.items() if k != "name"})
                    for o in ORGANIZATIONS]
    for name, category in SKILLS:
        get_or_create(Skill, name=name, defaults={"category": category})

    admin = user("admin@intervue.example", Role.ADMIN, "Ada Admin")
    user("super@intervue.example", Role.SUPER_COORDINATOR, "Sam Super")
    client = user("client@acme.example", Role.CLIENT, "Carla Client", acme)
    user("coordinator@globex.example", Role.CLIENT_COORDINATOR, "Cody Coordinator", globex)
    user("accounts@intervue.example", Role.ACCOUNTANT, "Alex Accounts")
    iv_user = user("ivan@interviewers.example", Role.INTERVIEWER, "Ivan Interviewer")
    cand_user = user("casey@candidates.example", Role.CANDIDATE, "Casey Candidate")

    ivan = get_or_create(Interviewer, email=iv_user.email, defaults={
        "name": iv_user.full_name, "skills": ["Python", "SQL"], "status": InterviewerStatus.ACTIVE.value,
        "user_id": iv_user.id, "max_capacity": 10})
    nina = get_or_create(Interviewer, email="nina@interviewers.example", defaults={
        "name": "Nina Node", "skills": ["React", "TypeScript"], "status": InterviewerStatus.ACTIVE.value,
        "organization_id": globex.id, "max_capacity": 5})

    backend = get_or_create(Requirement, title="Senior Backend Engineer", organization_id=acme.id, defaults={
        "raised_by": client.id, "description": "Python services and data pipelines",
        "skills": ["Python", "SQL", "AWS"], "years_of_experience": 5, "number_of_positions": 2,
        "price_per_interview": 120, "status": RequirementStatus.APPROVED.value})
    frontend = get_or_create(Requirement, title="Frontend Developer", organization_id=globex.id, defaults={
        "raised_by": admin.id, "description": "Customer dashboard in React",
        "skills": ["React", "TypeScript"], "years_of_experience": 3, "number_of_positions": 1,
        "price_per_interview": 90, "status": RequirementStatus.APPROVED.value})
    get_or_create(Requirement, title="Data Analyst", organization_id=acme.id, defaults={
        "raised_by": client.id, "skills": ["SQL"], "years_of_experience": 2, "number_of_positions": 1,
        "price_per_interview": 70, "status": RequirementStatus.PENDING.value})

    casey = get_or_create(Candidate, email=cand_user.email, defaults={
        "full_name": cand_user.full_name, "status": CandidateStatus.SHORTLISTED.value,
        "requirement_id": backend.id, "user_id": cand_user.id})
    jordan = get_or_create(Candidate, email="jordan@candidates.example", defaults={
        "full_name": "Jordan Lee", "status": CandidateStatus.NEW.value, "requirement_id": frontend.id})

    tomorrow = (utcnow() + timedelta(days=1)).replace(hour=10, minute=0, second=0, microsecond=0)
    for cand, iv, req, at in ((casey, ivan, backend, tomorrow), (jordan, nina, frontend, tomorrow + timedelta(hours=3))):
        if not Interview.query.filter_by(candidate_id=cand.id, requirement_id=req.id).first():
            db.session.add(Interview(candidate_id=cand.id, interviewer_id=iv.id, requirement_id=req.id,
                                     scheduled_at=at, status=InterviewStatus.SCHEDULED.value))
    db.session.commit()


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        seed()
        app.logger.info("seed data loaded")
        print(f"Seeded. Every account uses the password {PASSWORD!r}.")
