from flask import current_app

from ..errors import ValidationError
from ..extensions import db
from ..models.demo_request import DemoRequest
from ..utils.store import remote_call

REQUIRED = ("full_name", "work_email", "phone_number", "company_name")
OPTIONAL = ("job_title", "team_size", "hiring_goals", "how_heard")


def submit_demo_request(data):
    row = {}
    for key in REQUIRED:
        value = (data.get(key) or "").strip()
        if not value:
            raise ValidationError(f"{key.replace('_', ' ').capitalize()} is required", field=key)
        row[key] = value
    for key in OPTIONAL:
        row[key] = (data.get(key) or "").strip() or None
    req = DemoRequest(**row)
    with remote_call("submit demo request"):
        db.session.add(req)
        db.session.commit()
    current_app.logger.info("demo request %s from %s", req.id, req.company_name)
    return req


def list_demo_requests():
    with remote_call("list demo requests"):
        return DemoRequest.query.order_by(DemoRequest.created_at.desc(), DemoRequest.id.desc()).all()
