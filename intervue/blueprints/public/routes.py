from flask import jsonify, redirect, render_template, url_for
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from . import bp
from .forms import DemoRequestForm
from ...extensions import db
from ...roles import landing_endpoint
from ...services.demo_requests import submit_demo_request
from ...session import get_session
from ...utils.notify import flash_form_errors, guarded


@bp.get("/")
def index():
    session = get_session()
    if session.is_authenticated:
        return redirect(url_for(landing_endpoint(session.role)))
    return render_template("home.html")


@bp.get("/unauthorized")
def unauthorized():
    return render_template("unauthorized.html"), 403


@bp.route("/request-demo", methods=["GET", "POST"])
def request_demo():
    form = DemoRequestForm()
    if form.validate_on_submit():
        saved = guarded(submit_demo_request, form.data,
                        success="Thanks! Our team will reach out to schedule your demo.")
        if saved is not None:
            return redirect(url_for("public.index"))
    elif form.is_submitted():
        flash_form_errors(form)
    return render_template("request_demo.html", form=form)


@bp.get("/health")
def health():
    try:
        db.session.execute(text("SELECT 1"))
    except DBAPIError as e:
        db.session.rollback()
        return jsonify({"status": "unavailable", "message": str(e.orig)}), 503
    return jsonify({"status": "healthy"})


@bp.get("/account")
def account():
    session = get_session()
    return render_template("account.html", actor=session.actor, landing=landing_endpoint(session.role))
