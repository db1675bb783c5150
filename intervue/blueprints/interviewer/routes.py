from flask import render_template, redirect, url_for, request

from . import bp
from .forms import ProfileForm
from ..dashboard.forms import FeedbackForm
from ...errors import AuthorizationDenied, NotFound
from ...models.interview import InterviewStatus
from ...models.requirement import RequirementStatus
from ...services import interviews
from ...services.interviewers import interviewer_for_user, is_available, update_interviewer
from ...services.requirements import list_requirements
from ...session import get_session
from ...utils.notify import flash_form_errors, guarded


def _profile():
    profile = interviewer_for_user(get_session().actor.actor_id)
    if profile is None:
        raise NotFound("interviewer profile", message="No interviewer profile is linked to this account")
    return profile


def _own_interview(interview_id, profile):
    interview = interviews.get_interview(interview_id)
    if interview.interviewer_id != profile.id:
        raise AuthorizationDenied("This interview is assigned to someone else")
    return interview


def matching_requirements(skills, requirements):
    """Approved requirements sharing at least one skill, best overlap first."""
    mine = {s.lower() for s in (skills or [])}
    scored = []
    for req in requirements:
        overlap = mine & {s.lower() for s in (req.skills or [])}
        if overlap:
            scored.append((len(overlap), req))
    scored.sort(key=lambda pair: (-pair[0], pair[1].id))
    return [req for _, req in scored]


@bp.get("")
def overview():
    profile = _profile()
    assigned = guarded(interviews.list_interviews, interviewer_id=profile.id,
                       status=InterviewStatus.SCHEDULED) or []
    return render_template("interviewer/overview.html", profile=profile, assigned=assigned[:5],
                           available=guarded(is_available, profile),
                           completed=guarded(interviews.count_interviews, interviewer_id=profile.id,
                                             status=InterviewStatus.COMPLETED) or 0)


@bp.get("/assigned")
def assigned():
    profile = _profile()
    items = [i for i in (guarded(interviews.list_interviews, interviewer_id=profile.id) or [])
             if i.status in interviews.OPEN_STATUSES]
    return render_template("interviewer/assigned.html", items=items, feedback_form=FeedbackForm())


@bp.get("/history")
def history():
    profile = _profile()
    items = [i for i in (guarded(interviews.list_interviews, interviewer_id=profile.id) or [])
             if i.status not in interviews.OPEN_STATUSES]
    return render_template("interviewer/history.html", items=list(reversed(items)))


@bp.get("/opportunities")
def opportunities():
    profile = _profile()
    approved = guarded(list_requirements, status=RequirementStatus.APPROVED) or []
    return render_template("interviewer/opportunities.html",
                           items=matching_requirements(profile.skills, approved))


@bp.post("/interviews/<int:interview_id>/start")
def start_interview(interview_id):
    interview = _own_interview(interview_id, _profile())
    guarded(interviews.update_status, interview.id, InterviewStatus.IN_PROGRESS,
            expected_version=request.form.get("version") or None, success="Interview started")
    return redirect(url_for("interviewer.assigned"))


@bp.post("/interviews/<int:interview_id>/feedback")
def submit_feedback(interview_id):
    interview = _own_interview(interview_id, _profile())
    form = FeedbackForm()
    if form.validate_on_submit():
        done = guarded(interviews.add_feedback, interview.id, form.payload(),
                       expected_version=form.version.data or None,
                       success="Feedback submitted")
        if done is not None:
            return redirect(url_for("interviewer.history"))
    else:
        flash_form_errors(form)
    return redirect(url_for("interviewer.assigned"))


@bp.route("/profile", methods=["GET", "POST"])
def profile():
    me = _profile()
    form = ProfileForm(obj=me)
    if request.method == "GET":
        form.skills.data = ", ".join(me.skills or [])
    if form.validate_on_submit():
        if guarded(update_interviewer, me.id, name=form.name.data, skills=form.skills.data,
                   max_capacity=form.max_capacity.data, success="Profile saved"):
            return redirect(url_for("interviewer.profile"))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("interviewer/profile.html", form=form, profile=me)
