from flask import render_template, redirect, url_for, request

from . import bp
from .forms import ProfileForm
from ...errors import NotFound
from ...services import interviews
from ...services.candidates import candidate_for_user, update_profile
from ...session import get_session
from ...utils.notify import flash_form_errors, guarded
from ...utils.store import utcnow


def _profile():
    profile = candidate_for_user(get_session().actor.actor_id)
    if profile is None:
        raise NotFound("candidate profile", message="No candidate profile is linked to this account")
    return profile


@bp.get("/candidate")
def overview():
    me = _profile()
    upcoming = guarded(interviews.list_interviews, candidate_id=me.id, start=utcnow()) or []
    return render_template("candidate/overview.html", profile=me,
                           upcoming=[i for i in upcoming if i.status in interviews.OPEN_STATUSES])


@bp.get("/candidate/interviews")
def interview_list():
    me = _profile()
    return render_template("candidate/interviews.html",
                           items=guarded(interviews.list_interviews, candidate_id=me.id) or [])


@bp.route("/candidate/profile", methods=["GET", "POST"])
def profile():
    me = _profile()
    form = ProfileForm(obj=me)
    if form.validate_on_submit():
        if guarded(update_profile, me.id, full_name=form.full_name.data, resume_url=form.resume_url.data or "",
                   success="Profile saved"):
            return redirect(url_for("candidate.profile"))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("candidate/profile.html", form=form, profile=me)


# old candidate portal URLs
@bp.get("/interviewee")
@bp.get("/interviewee/<path:rest>")
def legacy_portal(rest=""):
    target = "/candidate" + ("/" + rest if rest else "")
    if request.query_string:
        target += "?" + request.query_string.decode("utf-8", "ignore")
    return redirect(target, code=301)
