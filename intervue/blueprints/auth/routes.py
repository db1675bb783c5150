from urllib.parse import urlsplit

from flask import current_app, render_template, request, redirect, url_for, flash

from . import bp
from .forms import LoginForm, RegisterForm
from ...roles import landing_endpoint
from ...services import accounts
from ...services.organizations import list_organizations
from ...session import get_session
from ...utils.notify import flash_form_errors, guarded


def _safe_next(target):
    """Only same-site relative paths are honoured as post-login targets."""
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith("/") or target.startswith("//"):
        return None
    return target


@bp.route("/login", methods=["GET", "POST"])
def login():
    form = LoginForm()
    if request.method == "GET":
        form.next.data = request.args.get("next", "")
        if get_session().is_authenticated:
            return redirect(_safe_next(form.next.data) or url_for(landing_endpoint(get_session().role)))
    if form.validate_on_submit():
        user = guarded(accounts.login, form.email.data, form.password.data, remember=form.remember.data,
                       success="Welcome back!")
        if user is not None:
            return redirect(_safe_next(form.next.data) or url_for(landing_endpoint(get_session().role)))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("auth/login.html", form=form)


@bp.post("/logout")
def logout():
    accounts.logout()
    flash("You have been logged out", "success")
    return redirect(url_for("auth.login"))


@bp.route("/register", methods=["GET", "POST"])
def register():
    form = RegisterForm()
    orgs = guarded(list_organizations) or []
    form.organization_id.choices = [("", "—")] + [(str(o.id), o.name) for o in orgs]
    if form.validate_on_submit():
        user = guarded(accounts.register,
                       email=form.email.data,
                       password=form.password.data,
                       full_name=form.full_name.data,
                       role=form.role.data,
                       organization_id=form.organization_id.data or None,
                       success="Account created successfully! Please sign in.")
        if user is not None:
            current_app.logger.info("new account %s", user.id)
            return redirect(url_for("auth.login"))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("auth/register.html", form=form)
