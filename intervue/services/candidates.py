from flask import current_app

from ..errors import ValidationError
from ..extensions import db
from ..models.candidate import Candidate, CandidateStatus
from ..models.requirement import Requirement
from ..utils.store import coerce_int, commit, fetch, remote_call


def parse_status(value):
    if isinstance(value, CandidateStatus):
        return value
    for status in CandidateStatus:
        if (value or "").strip().lower() == status.value.lower():
            return status
    raise ValidationError(f"Unknown candidate status: {value!r}", field="status")


def list_candidates(status=None, requirement_id=None, search=None, organization_id=None):
    query = Candidate.query
    if status:
        query = query.filter(Candidate.status == parse_status(status).value)
    if requirement_id is not None:
        query = query.filter(Candidate.requirement_id == requirement_id)
    if organization_id is not None:
        query = query.join(Requirement, Candidate.requirement_id == Requirement.id).filter(
            Requirement.organization_id == organization_id)
    if search:
        query = query.filter(Candidate.full_name.ilike(f"%{search}%"))
    with remote_call("list candidates"):
        return query.order_by(Candidate.id.desc()).all()


def get_candidate(candidate_id):
    return fetch(Candidate, candidate_id, "candidate")


def find_candidate(candidate_id):
    """Like get_candidate, but None for an unknown id."""
    key = coerce_int(candidate_id)
    if key is None:
        return None
    with remote_call("load candidate"):
        return db.session.get(Candidate, key)


def candidate_for_user(user_id):
    with remote_call("load candidate profile"):
        return Candidate.query.filter_by(user_id=user_id).first()


def create_candidate(full_name, email, resume_url=None, requirement_id=None, user_id=None):
    full_name = (full_name or "").strip()
    email = (email or "").strip().lower()
    if not full_name:
        raise ValidationError("Full name is required", field="full_name")
    if not email:
        raise ValidationError("Email is required", field="email")
    requirement_id = coerce_int(requirement_id)
    if requirement_id is not None:
        fetch(Requirement, requirement_id, "requirement")
    with remote_call("create candidate"):
        if Candidate.query.filter_by(email=email).first():
            raise ValidationError("A candidate with this email already exists", field="email")
        c = Candidate(full_name=full_name, email=email, resume_url=(resume_url or None),
                      requirement_id=requirement_id, status=CandidateStatus.NEW.value, user_id=user_id)
        db.session.add(c)
        db.session.commit()
    current_app.logger.info("candidate %s created", c.id)
    return c


def update_profile(candidate_id, full_name=None, resume_url=None):
    c = get_candidate(candidate_id)
    if full_name is not None:
        if not full_name.strip():
            raise ValidationError("Full name is required", field="full_name")
        c.full_name = full_name.strip()
    if resume_url is not None:
        c.resume_url = resume_url.strip() or None
    commit(f"update candidate {c.id}")
    return c


def update_status(candidate_id, status):
    c = get_candidate(candidate_id)
    target = parse_status(status)
    if c.status != target.value:
        c.status = target.value
        commit(f"update candidate {c.id} status")
        current_app.logger.info("candidate %s -> %s", c.id, target.value)
    return c
