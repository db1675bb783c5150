from flask import render_template, request

from . import bp
from ...errors import AuthorizationDenied
from ...models.interview import InterviewStatus
from ...models.requirement import RequirementStatus
from ...services import interviews, organizations, requirements
from ...services.interviewers import availability_map, list_interviewers
from ...session import get_session
from ...utils.notify import guarded
from ...utils.store import utcnow


def _org_id():
    org_id = get_session().organization_id
    if org_id is None:
        raise AuthorizationDenied("Your account is not linked to a company")
    return org_id


@bp.get("")
def overview():
    org_id = _org_id()
    org = organizations.get_organization(org_id)
    now = utcnow()
    positions = guarded(requirements.list_requirements, organization_id=org_id) or []
    upcoming = guarded(interviews.list_interviews, status=InterviewStatus.SCHEDULED,
                       organization_id=org_id, start=now) or []
    return render_template(
        "organization/overview.html",
        org=org,
        open_positions=[r for r in positions if r.status == RequirementStatus.APPROVED.value],
        pending_positions=[r for r in positions if r.status == RequirementStatus.PENDING.value],
        upcoming=upcoming[:5],
        interview_total=guarded(interviews.count_interviews, organization_id=org_id) or 0,
    )


@bp.get("/interviews")
def interview_list():
    status = request.args.get("status") or None
    items = guarded(interviews.list_interviews, status=status, organization_id=_org_id()) or []
    return render_template("organization/interviews.html", items=items, status=status,
                           statuses=InterviewStatus.values())


@bp.get("/positions")
def positions():
    status = request.args.get("status") or None
    items = guarded(requirements.list_requirements, status=status, organization_id=_org_id()) or []
    return render_template("organization/positions.html", items=items, status=status,
                           statuses=RequirementStatus.values())


@bp.get("/interviewers")
def interviewer_list():
    items = guarded(list_interviewers, organization_id=_org_id()) or []
    return render_template("organization/interviewers.html", items=items,
                           available=guarded(availability_map, items) or {})
