from io import BytesIO

from flask import render_template, request, redirect, url_for, send_file

from . import bp
from .forms import (RequirementForm, CloseRequirementForm, ScheduleInterviewForm, InterviewStatusForm,
                    FeedbackForm, CandidateForm, CandidateStatusForm)
from ...errors import AuthorizationDenied
from ...models.candidate import CandidateStatus
from ...models.interview import InterviewStatus
from ...models.requirement import RequirementStatus
from ...roles import ORGANIZATION_ROLES
from ...services import candidates, interviews, requirements
from ...services.interviewers import list_interviewers
from ...services.organizations import list_organizations
from ...session import get_session
from ...utils.decorators import admin_required
from ...utils.notify import flash_form_errors, guarded
from ...utils.store import utcnow


def _scope():
    """Organization actors only ever see their own company's records.

    An organization actor with no company linked has nothing to see.
    """
    session = get_session()
    if session.role in ORGANIZATION_ROLES:
        if session.organization_id is None:
            raise AuthorizationDenied("Your account is not linked to a company")
        return session.organization_id
    return None


def _check_owner(organization_id):
    scope = _scope()
    if scope is not None and organization_id != scope:
        raise AuthorizationDenied("This record belongs to another company")


def _requirement_choices(approved_only=False):
    status = RequirementStatus.APPROVED if approved_only else None
    rows = guarded(requirements.list_requirements, status=status, organization_id=_scope()) or []
    return [(str(r.id), f"{r.title} ({r.organization.name})") for r in rows]


@bp.get("")
def index():
    scope = _scope()
    now = utcnow()
    counts = {
        "pending_requirements": len(guarded(requirements.list_requirements, status=RequirementStatus.PENDING,
                                            organization_id=scope) or []),
        "upcoming_interviews": guarded(interviews.count_interviews, status=InterviewStatus.SCHEDULED,
                                       organization_id=scope, start=now) or 0,
        "completed_interviews": guarded(interviews.count_interviews, status=InterviewStatus.COMPLETED,
                                        organization_id=scope) or 0,
        "candidates": len(guarded(candidates.list_candidates, organization_id=scope) or []),
    }
    upcoming = guarded(interviews.list_interviews, status=InterviewStatus.SCHEDULED,
                       organization_id=scope, start=now) or []
    return render_template("dashboard/index.html", counts=counts, upcoming=upcoming[:5])


# requirements

@bp.get("/requirements")
def requirement_list():
    status = request.args.get("status") or None
    items = guarded(requirements.list_requirements, status=status, organization_id=_scope()) or []
    return render_template("dashboard/requirements.html", items=items, status=status,
                           statuses=RequirementStatus.values())


@bp.route("/requirements/new", methods=["GET", "POST"])
def requirement_new():
    form = RequirementForm()
    form.organization_id.choices = [("", "—")] + [(str(o.id), o.name) for o in (guarded(list_organizations) or [])]
    if form.validate_on_submit():
        req = guarded(requirements.create_requirement,
                      get_session().actor,
                      title=form.title.data,
                      description=form.description.data,
                      skills=form.skills.data,
                      years_of_experience=form.years_of_experience.data,
                      number_of_positions=form.number_of_positions.data,
                      price_per_interview=form.price_per_interview.data,
                      organization_id=form.organization_id.data or None,
                      success="Requirement submitted for approval")
        if req is not None:
            return redirect(url_for("dashboard.requirement_detail", requirement_id=req.id))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("dashboard/requirement_form.html", form=form, requirement=None,
                           pick_organization=_scope() is None)


@bp.route("/requirements/<int:requirement_id>", methods=["GET", "POST"])
def requirement_detail(requirement_id):
    req = requirements.get_requirement(requirement_id)
    _check_owner(req.organization_id)
    form = RequirementForm(obj=req)
    if request.method == "GET":
        form.skills.data = ", ".join(req.skills or [])
    if form.validate_on_submit():
        updated = guarded(requirements.update_requirement, req.id,
                          title=form.title.data,
                          description=form.description.data,
                          skills=form.skills.data,
                          years_of_experience=form.years_of_experience.data,
                          number_of_positions=form.number_of_positions.data,
                          price_per_interview=form.price_per_interview.data,
                          success="Requirement updated")
        if updated is not None:
            return redirect(url_for("dashboard.requirement_detail", requirement_id=req.id))
    elif form.is_submitted():
        flash_form_errors(form)
    linked = guarded(interviews.list_interviews, requirement_id=req.id) or []
    return render_template("dashboard/requirement_form.html", form=form, requirement=req, interviews=linked,
                           close_form=CloseRequirementForm(), pick_organization=False)


@bp.post("/requirements/<int:requirement_id>/approve")
@admin_required
def requirement_approve(requirement_id):
    guarded(requirements.approve_requirement, requirement_id, success="Requirement approved")
    return redirect(url_for("dashboard.requirement_detail", requirement_id=requirement_id))


@bp.post("/requirements/<int:requirement_id>/close")
def requirement_close(requirement_id):
    req = requirements.get_requirement(requirement_id)
    _check_owner(req.organization_id)
    form = CloseRequirementForm()
    if form.validate_on_submit():
        guarded(requirements.close_requirement, req.id, form.status.data,
                success=f"Requirement marked {form.status.data}")
    else:
        flash_form_errors(form)
    return redirect(url_for("dashboard.requirement_detail", requirement_id=req.id))


@bp.post("/requirements/<int:requirement_id>/delete")
@admin_required
def requirement_delete(requirement_id):
    if guarded(requirements.delete_requirement, requirement_id, success="Requirement deleted"):
        return redirect(url_for("dashboard.requirement_list"))
    return redirect(url_for("dashboard.requirement_detail", requirement_id=requirement_id))


# interviews

@bp.get("/interviews")
def interview_list():
    status = request.args.get("status") or None
    items = guarded(interviews.list_interviews, status=status, organization_id=_scope()) or []
    return render_template("dashboard/interviews.html", items=items, status=status,
                           statuses=InterviewStatus.values())


@bp.route("/interviews/schedule", methods=["GET", "POST"])
def interview_schedule():
    scope = _scope()
    form = ScheduleInterviewForm()
    form.candidate_id.choices = [(str(c.id), c.full_name)
                                 for c in (guarded(candidates.list_candidates, organization_id=scope) or [])]
    form.interviewer_id.choices = [(str(i.id), i.name) for i in (guarded(list_interviewers) or [])]
    form.requirement_id.choices = _requirement_choices(approved_only=True)
    if request.method == "GET" and request.args.get("candidate_id"):
        form.candidate_id.data = request.args["candidate_id"]
    if form.validate_on_submit():
        if scope is not None:
            _check_owner(requirements.get_requirement(form.requirement_id.data).organization_id)
            chosen = candidates.find_candidate(form.candidate_id.data)
            if chosen is not None:
                _check_candidate_scope(chosen)
        interview = guarded(interviews.schedule_interview,
                            candidate_id=form.candidate_id.data,
                            interviewer_id=form.interviewer_id.data,
                            requirement_id=form.requirement_id.data,
                            scheduled_at=form.scheduled_at.data,
                            success="Interview scheduled")
        if interview is not None:
            return redirect(url_for("dashboard.interview_detail", interview_id=interview.id))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("dashboard/interview_schedule.html", form=form)


@bp.get("/interviews/<int:interview_id>")
def interview_detail(interview_id):
    interview = interviews.get_interview(interview_id)
    _check_owner(interview.requirement.organization_id)
    status_form = InterviewStatusForm(version=interview.version_id)
    feedback_form = FeedbackForm(version=interview.version_id)
    return render_template("dashboard/interview_detail.html", interview=interview,
                           status_form=status_form, feedback_form=feedback_form,
                           reachable=interviews.TRANSITIONS[interviews.parse_status(interview.status)])


@bp.post("/interviews/<int:interview_id>/status")
def interview_status(interview_id):
    interview = interviews.get_interview(interview_id)
    _check_owner(interview.requirement.organization_id)
    form = InterviewStatusForm()
    if form.validate_on_submit():
        guarded(interviews.update_status, interview.id, form.status.data,
                expected_version=form.version.data or None,
                success=f"Interview marked {form.status.data}")
    else:
        flash_form_errors(form)
    return redirect(url_for("dashboard.interview_detail", interview_id=interview_id))


@bp.post("/interviews/<int:interview_id>/feedback")
def interview_feedback(interview_id):
    interview = interviews.get_interview(interview_id)
    _check_owner(interview.requirement.organization_id)
    form = FeedbackForm()
    if form.validate_on_submit():
        guarded(interviews.add_feedback, interview.id, form.payload(),
                expected_version=form.version.data or None,
                success="Feedback saved and interview completed")
    else:
        flash_form_errors(form)
    return redirect(url_for("dashboard.interview_detail", interview_id=interview_id))


@bp.get("/interviews/<int:interview_id>/ics")
def interview_ics(interview_id):
    interview = interviews.get_interview(interview_id)
    _check_owner(interview.requirement.organization_id)
    data = interviews.interview_calendar(interview)
    return send_file(BytesIO(data.encode("utf-8")), mimetype="text/calendar",
                     as_attachment=True, download_name=f"interview_{interview.id}.ics")


# candidates

@bp.get("/candidates")
def candidate_list():
    status = request.args.get("status") or None
    search = request.args.get("q") or None
    items = guarded(candidates.list_candidates, status=status, search=search, organization_id=_scope()) or []
    return render_template("dashboard/candidates.html", items=items, status=status, q=search,
                           statuses=CandidateStatus.values())


@bp.route("/candidates/new", methods=["GET", "POST"])
def candidate_new():
    form = CandidateForm()
    form.requirement_id.choices = [("", "—")] + _requirement_choices()
    if form.validate_on_submit():
        if form.requirement_id.data and _scope() is not None:
            _check_owner(requirements.get_requirement(form.requirement_id.data).organization_id)
        c = guarded(candidates.create_candidate,
                    full_name=form.full_name.data,
                    email=form.email.data,
                    resume_url=form.resume_url.data,
                    requirement_id=form.requirement_id.data or None,
                    success="Candidate added")
        if c is not None:
            return redirect(url_for("dashboard.candidate_detail", candidate_id=c.id))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("dashboard/candidate_form.html", form=form)


def _check_candidate_scope(candidate):
    scope = _scope()
    if scope is not None and (candidate.requirement is None or candidate.requirement.organization_id != scope):
        raise AuthorizationDenied("This candidate belongs to another company")


def _load_candidate(candidate_id):
    c = candidates.get_candidate(candidate_id)
    _check_candidate_scope(c)
    return c


@bp.get("/candidates/<int:candidate_id>")
def candidate_detail(candidate_id):
    c = _load_candidate(candidate_id)
    history = guarded(interviews.list_interviews, candidate_id=c.id) or []
    return render_template("dashboard/candidate_detail.html", candidate=c, interviews=history,
                           status_form=CandidateStatusForm(status=c.status))


@bp.post("/candidates/<int:candidate_id>/status")
def candidate_status(candidate_id):
    c = _load_candidate(candidate_id)
    form = CandidateStatusForm()
    if form.validate_on_submit():
        guarded(candidates.update_status, c.id, form.status.data, success="Candidate status updated")
    else:
        flash_form_errors(form)
    return redirect(url_for("dashboard.candidate_detail", candidate_id=c.id))
