from decimal import Decimal, InvalidOperation

from flask import current_app

from ..errors import ConflictError, ValidationError
from ..extensions import db
from ..models.candidate import Candidate
from ..models.interview import Interview
from ..models.organization import Organization
from ..models.requirement import Requirement, RequirementStatus, REQUIREMENT_STATUS_ALIASES
from ..utils.store import coerce_int, commit, fetch, remote_call

CLOSED_STATUSES = (RequirementStatus.FULFILLED, RequirementStatus.CANCELED)


def parse_status(value):
    if isinstance(value, RequirementStatus):
        return value
    key = (value or "").strip().lower()
    if key in REQUIREMENT_STATUS_ALIASES:
        return REQUIREMENT_STATUS_ALIASES[key]
    for status in RequirementStatus:
        if key == status.value.lower():
            return status
    raise ValidationError(f"Unknown requirement status: {value!r}", field="status")


def normalize_skills(skills):
    """Accept a list or a comma separated string; strip and de-duplicate."""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = skills.split(",")
    out, seen = [], set()
    for s in skills:
        s = (s or "").strip()
        if s and s.lower() not in seen:
            seen.add(s.lower())
            out.append(s)
    return out


def _validated(fields):
    data = {}
    if "title" in fields:
        data["title"] = (fields["title"] or "").strip()
        if not data["title"]:
            raise ValidationError("Title is required", field="title")
    if "description" in fields:
        data["description"] = (fields["description"] or "").strip()
    if "skills" in fields:
        data["skills"] = normalize_skills(fields["skills"])
    if "years_of_experience" in fields:
        years = coerce_int(fields["years_of_experience"])
        if years is None or years < 0:
            raise ValidationError("Years of experience must be zero or more", field="years_of_experience")
        data["years_of_experience"] = years
    if "number_of_positions" in fields:
        positions = coerce_int(fields["number_of_positions"])
        if positions is None or positions < 1:
            raise ValidationError("At least one position is required", field="number_of_positions")
        data["number_of_positions"] = positions
    if "price_per_interview" in fields:
        try:
            price = Decimal(str(fields["price_per_interview"]))
        except (InvalidOperation, ValueError):
            raise ValidationError("Price must be a number", field="price_per_interview")
        if price < 0:
            raise ValidationError("Price cannot be negative", field="price_per_interview")
        data["price_per_interview"] = price
    return data


def list_requirements(status=None, organization_id=None):
    query = Requirement.query
    if status:
        query = query.filter(Requirement.status == parse_status(status).value)
    if organization_id is not None:
        query = query.filter(Requirement.organization_id == organization_id)
    with remote_call("list requirements"):
        return query.order_by(Requirement.created_at.desc(), Requirement.id.desc()).all()


def get_requirement(requirement_id):
    return fetch(Requirement, requirement_id, "requirement")


def create_requirement(actor, title, description, skills, years_of_experience, number_of_positions,
                       price_per_interview, organization_id=None):
    """Raise a new requirement; it starts Pending until staff approve it.

    Client actors always raise against their own organization.
    """
    organization_id = actor.organization_id or coerce_int(organization_id)
    if organization_id is None:
        raise ValidationError("Choose the company this requirement belongs to", field="organization_id")
    fetch(Organization, organization_id, "organization")

    data = _validated({
        "title": title,
        "description": description,
        "skills": skills,
        "years_of_experience": years_of_experience,
        "number_of_positions": number_of_positions,
        "price_per_interview": price_per_interview,
    })
    req = Requirement(organization_id=organization_id, raised_by=actor.actor_id,
                      status=RequirementStatus.PENDING.value, **data)
    with remote_call("create requirement"):
        db.session.add(req)
        db.session.commit()
    current_app.logger.info("requirement %s raised by user %s", req.id, actor.actor_id)
    return req


def update_requirement(requirement_id, **fields):
    req = get_requirement(requirement_id)
    for key, value in _validated(fields).items():
        setattr(req, key, value)
    commit(f"update requirement {req.id}")
    return req


def set_status(requirement_id, status):
    target = parse_status(status)
    req = get_requirement(requirement_id)
    current = parse_status(req.status)
    if target is current:
        return req
    if current in CLOSED_STATUSES:
        raise ValidationError(f"Requirement is already {current.value}", field="status")
    if target is RequirementStatus.PENDING:
        raise ValidationError("An approved requirement cannot go back to Pending", field="status")
    req.status = target.value
    commit(f"update requirement {req.id} status")
    current_app.logger.info("requirement %s: %s -> %s", req.id, current.value, target.value)
    return req


def approve_requirement(requirement_id):
    return set_status(requirement_id, RequirementStatus.APPROVED)


def close_requirement(requirement_id, status):
    target = parse_status(status)
    if target not in CLOSED_STATUSES:
        raise ValidationError("A requirement closes as Fulfilled or Canceled", field="status")
    return set_status(requirement_id, target)


def delete_requirement(requirement_id):
    """Delete a requirement no interview references; linked candidates are unlinked."""
    req = get_requirement(requirement_id)
    with remote_call(f"delete requirement {req.id}"):
        used = Interview.query.filter_by(requirement_id=req.id).count()
        if used:
            raise ConflictError(f"{used} interview(s) reference this requirement; cancel it instead")
        Candidate.query.filter_by(requirement_id=req.id).update({"requirement_id": None})
        db.session.delete(req)
        db.session.commit()
    current_app.logger.info("requirement %s deleted", requirement_id)
    return True
