from flask import current_app

from ..errors import ConflictError, ValidationError
from ..extensions import db
from ..models.interview import Interview
from ..models.interviewer import Interviewer
from ..models.organization import Organization
from ..models.requirement import Requirement, RequirementStatus
from ..models.user import User
from ..roles import ORGANIZATION_ROLES
from ..utils.store import commit, fetch, remote_call

EDITABLE_FIELDS = ("name", "industry", "address", "contact_email")


def _clean(fields):
    data = {k: (v.strip() if isinstance(v, str) else v) for k, v in fields.items() if k in EDITABLE_FIELDS}
    if "name" in data and not data["name"]:
        raise ValidationError("Company name is required", field="name")
    return data


def list_organizations(search=None):
    query = Organization.query
    if search:
        query = query.filter(Organization.name.ilike(f"%{search}%"))
    with remote_call("list organizations"):
        return query.order_by(Organization.created_at.desc(), Organization.id.desc()).all()


def get_organization(organization_id):
    return fetch(Organization, organization_id, "organization")


def create_organization(name, industry=None, address=None, contact_email=None):
    data = _clean({"name": name or "", "industry": industry, "address": address, "contact_email": contact_email})
    with remote_call("create organization"):
        if Organization.query.filter(db.func.lower(Organization.name) == data["name"].lower()).first():
            raise ValidationError("A company with this name already exists", field="name")
        org = Organization(**data)
        db.session.add(org)
        db.session.commit()
    current_app.logger.info("organization %s created", org.id)
    return org


def update_organization(organization_id, **fields):
    org = get_organization(organization_id)
    for key, value in _clean(fields).items():
        setattr(org, key, value)
    commit(f"update organization {org.id}")
    return org


def dependents(organization_id):
    with remote_call("count organization dependents"):
        return {
            "requirements": Requirement.query.filter_by(organization_id=organization_id).count(),
            "interviewers": Interviewer.query.filter_by(organization_id=organization_id).count(),
            "users": User.query.filter_by(organization_id=organization_id).count(),
        }


def delete_organization(organization_id):
    """Delete a company that nothing references any more."""
    org = get_organization(organization_id)
    in_use = {k: v for k, v in dependents(org.id).items() if v}
    if in_use:
        detail = ", ".join(f"{v} {k}" for k, v in in_use.items())
        raise ConflictError(f"{org.name} still has {detail}; remove or reassign them first")
    with remote_call(f"delete organization {org.id}"):
        db.session.delete(org)
        db.session.commit()
    current_app.logger.info("organization %s deleted", organization_id)
    return True


def representatives(organization_id):
    roles = [r.value for r in ORGANIZATION_ROLES]
    with remote_call("list representatives"):
        return (User.query.filter(User.organization_id == organization_id, User.role.in_(roles))
                .order_by(User.full_name.asc()).all())


def pending_requirements(organization_id):
    with remote_call("list pending requirements"):
        return (Requirement.query
                .filter_by(organization_id=organization_id, status=RequirementStatus.PENDING.value)
                .order_by(Requirement.created_at.desc()).all())


def interview_count(organization_id):
    with remote_call("count organization interviews"):
        return (Interview.query.join(Requirement, Interview.requirement_id == Requirement.id)
                .filter(Requirement.organization_id == organization_id).count())
