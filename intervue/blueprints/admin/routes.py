from flask import render_template, request, redirect, url_for

from . import bp
from .forms import CompanyForm, InterviewerForm, InterviewerStatusForm, SkillForm
from ...models.interviewer import InterviewerStatus
from ...services import interviewers, organizations, skills
from ...services.demo_requests import list_demo_requests
from ...services.interviews import list_interviews, OPEN_STATUSES
from ...utils.notify import flash_form_errors, guarded
from ...utils.store import utcnow


def _company_fields(form):
    return {
        "name": form.name.data,
        "industry": form.industry.data,
        "address": form.address.data,
        "contact_email": form.contact_email.data,
    }


# companies

@bp.route("/companies", methods=["GET", "POST"])
def companies():
    form = CompanyForm()
    if form.validate_on_submit():
        org = guarded(organizations.create_organization, **_company_fields(form), success="Company created")
        if org is not None:
            return redirect(url_for("admin.company_detail", organization_id=org.id))
    elif form.is_submitted():
        flash_form_errors(form)
    search = request.args.get("q") or None
    items = guarded(organizations.list_organizations, search=search) or []
    return render_template("admin/companies.html", items=items, form=form, q=search)


@bp.route("/companies/<int:organization_id>", methods=["GET", "POST"])
def company_detail(organization_id):
    org = organizations.get_organization(organization_id)
    form = CompanyForm(obj=org)
    if form.validate_on_submit():
        if guarded(organizations.update_organization, org.id, **_company_fields(form), success="Company updated"):
            return redirect(url_for("admin.company_detail", organization_id=org.id))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template(
        "admin/company_detail.html",
        org=org,
        form=form,
        representatives=guarded(organizations.representatives, org.id) or [],
        pending=guarded(organizations.pending_requirements, org.id) or [],
        interview_count=guarded(organizations.interview_count, org.id) or 0,
    )


@bp.post("/companies/<int:organization_id>/delete")
def company_delete(organization_id):
    if guarded(organizations.delete_organization, organization_id, success="Company deleted"):
        return redirect(url_for("admin.companies"))
    return redirect(url_for("admin.company_detail", organization_id=organization_id))


# interviewers

@bp.get("/interviewers")
def interviewer_list():
    now = utcnow()
    search = request.args.get("q") or None
    status = request.args.get("status") or None
    items = guarded(interviewers.list_interviewers, search=search, status=status) or []
    available = guarded(interviewers.availability_map, items, now) or {}
    stats = guarded(interviewers.stats, now) or {}
    return render_template("admin/interviewers.html", items=items, available=available, stats=stats,
                           q=search, status=status, statuses=InterviewerStatus.values())


@bp.route("/interviewers/new", methods=["GET", "POST"])
def interviewer_new():
    form = InterviewerForm()
    form.organization_id.choices = [("", "—")] + [
        (str(o.id), o.name) for o in (guarded(organizations.list_organizations) or [])]
    if form.validate_on_submit():
        i = guarded(interviewers.create_interviewer,
                    name=form.name.data,
                    email=form.email.data,
                    skills=form.skills.data,
                    status=form.status.data,
                    organization_id=form.organization_id.data or None,
                    max_capacity=form.max_capacity.data,
                    success="Interviewer added")
        if i is not None:
            return redirect(url_for("admin.interviewer_detail", interviewer_id=i.id))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("admin/interviewer_form.html", form=form)


@bp.get("/interviewers/<int:interviewer_id>")
def interviewer_detail(interviewer_id):
    i = interviewers.get_interviewer(interviewer_id)
    upcoming = guarded(list_interviews, interviewer_id=i.id) or []
    return render_template("admin/interviewer_detail.html", interviewer=i,
                           available=guarded(interviewers.is_available, i),
                           open_interviews=[x for x in upcoming if x.status in OPEN_STATUSES],
                           status_form=InterviewerStatusForm(status=i.status))


@bp.post("/interviewers/<int:interviewer_id>/status")
def interviewer_status(interviewer_id):
    form = InterviewerStatusForm()
    if form.validate_on_submit():
        guarded(interviewers.update_status, interviewer_id, form.status.data, success="Status updated")
    else:
        flash_form_errors(form)
    return redirect(url_for("admin.interviewer_detail", interviewer_id=interviewer_id))


# skills

@bp.route("/skills", methods=["GET", "POST"])
def skill_list():
    form = SkillForm()
    if form.validate_on_submit():
        if guarded(skills.add_skill, form.name.data, form.category.data, success="Skill added"):
            return redirect(url_for("admin.skill_list"))
    elif form.is_submitted():
        flash_form_errors(form)
    category = request.args.get("category") or None
    items = guarded(skills.list_skills, search=request.args.get("q") or None, category=category) or []
    return render_template("admin/skills.html", items=items, form=form,
                           categories=guarded(skills.categories) or [], category=category)


@bp.post("/skills/<int:skill_id>")
def skill_update(skill_id):
    form = SkillForm()
    if form.validate_on_submit():
        guarded(skills.update_skill, skill_id, name=form.name.data, category=form.category.data,
                success="Skill updated")
    else:
        flash_form_errors(form)
    return redirect(url_for("admin.skill_list"))


@bp.post("/skills/<int:skill_id>/delete")
def skill_delete(skill_id):
    guarded(skills.delete_skill, skill_id, success="Skill removed")
    return redirect(url_for("admin.skill_list"))


@bp.get("/demo-requests")
def demo_requests():
    return render_template("admin/demo_requests.html", items=guarded(list_demo_requests) or [])
