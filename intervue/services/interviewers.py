from datetime import datetime, timedelta

from flask import current_app

from ..errors import ValidationError
from ..extensions import db
from ..models.interview import Interview, InterviewStatus
from ..models.interviewer import Interviewer, InterviewerStatus
from ..models.organization import Organization
from ..models.user import User
from ..roles import Role
from ..utils.store import coerce_int, commit, fetch, remote_call, utcnow
from .requirements import normalize_skills

UNAVAILABLE_STATUSES = (InterviewerStatus.ON_LEAVE.value, InterviewerStatus.INACTIVE.value)


def parse_status(value):
    if isinstance(value, InterviewerStatus):
        return value
    for status in InterviewerStatus:
        if (value or "").strip().lower() == status.value.lower():
            return status
    raise ValidationError(f"Unknown interviewer status: {value!r}", field="status")


def list_interviewers(search=None, status=None, organization_id=None):
    query = Interviewer.query
    if search:
        like = f"%{search}%"
        query = query.filter(db.or_(Interviewer.name.ilike(like), Interviewer.email.ilike(like)))
    if status:
        query = query.filter(Interviewer.status == parse_status(status).value)
    if organization_id is not None:
        query = query.filter(Interviewer.organization_id == organization_id)
    with remote_call("list interviewers"):
        return query.order_by(Interviewer.name.asc()).all()


def get_interviewer(interviewer_id):
    return fetch(Interviewer, interviewer_id, "interviewer")


def interviewer_for_user(user_id):
    with remote_call("load interviewer profile"):
        return Interviewer.query.filter_by(user_id=user_id).first()


def create_interviewer(name, email, skills=None, status=InterviewerStatus.ACTIVE, organization_id=None,
                       max_capacity=None, user_id=None):
    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name:
        raise ValidationError("Name is required", field="name")
    if not email:
        raise ValidationError("Email is required", field="email")
    organization_id = coerce_int(organization_id)
    if organization_id is not None:
        fetch(Organization, organization_id, "organization")
    with remote_call("create interviewer"):
        if Interviewer.query.filter_by(email=email).first():
            raise ValidationError("An interviewer with this email already exists", field="email")
        interviewer = Interviewer(
            name=name,
            email=email,
            skills=normalize_skills(skills),
            status=parse_status(status).value,
            organization_id=organization_id,
            max_capacity=coerce_int(max_capacity),
            user_id=user_id,
        )
        db.session.add(interviewer)
        db.session.commit()
    current_app.logger.info("interviewer %s created", interviewer.id)
    return interviewer


def update_interviewer(interviewer_id, name=None, skills=None, max_capacity=None):
    interviewer = get_interviewer(interviewer_id)
    if name is not None:
        if not name.strip():
            raise ValidationError("Name is required", field="name")
        interviewer.name = name.strip()
    if skills is not None:
        interviewer.skills = normalize_skills(skills)
    if max_capacity is not None:
        interviewer.max_capacity = coerce_int(max_capacity)
    commit(f"update interviewer {interviewer.id}")
    return interviewer


def update_status(interviewer_id, status):
    interviewer = get_interviewer(interviewer_id)
    interviewer.status = parse_status(status).value
    commit(f"update interviewer {interviewer.id} status")
    return interviewer


def _busy_query(now):
    """Interviews that occupy their interviewer at ``now``."""
    duration = timedelta(minutes=current_app.config.get("INTERVIEW_DURATION_MINUTES", 60))
    return Interview.query.filter(db.or_(
        Interview.status == InterviewStatus.IN_PROGRESS.value,
        db.and_(
            Interview.status == InterviewStatus.SCHEDULED.value,
            Interview.scheduled_at <= now,
            Interview.scheduled_at > now - duration,
        ),
    ))


def busy_interviewer_ids(now=None):
    now = now or utcnow()
    with remote_call("load busy interviewers"):
        return {row.interviewer_id for row in _busy_query(now).with_entities(Interview.interviewer_id).distinct()}


def is_available(interviewer, now=None):
    """An interviewer is available unless on leave, inactive, or in an interview right now."""
    if interviewer.status in UNAVAILABLE_STATUSES:
        return False
    return interviewer.id not in busy_interviewer_ids(now)


def availability_map(interviewers, now=None):
    busy = busy_interviewer_ids(now)
    return {i.id: (i.status not in UNAVAILABLE_STATUSES and i.id not in busy) for i in interviewers}


def week_bounds(now):
    # Sunday 00:00 to the following Sunday 00:00
    start = datetime(now.year, now.month, now.day) - timedelta(days=(now.weekday() + 1) % 7)
    return start, start + timedelta(days=7)


def stats(now=None):
    now = now or utcnow()
    window = timedelta(days=current_app.config.get("NEW_INTERVIEWER_WINDOW_DAYS", 30))
    week_start, week_end = week_bounds(now)
    with remote_call("interviewer stats"):
        interviewers = Interviewer.query.all()
        this_week = Interview.query.filter(Interview.scheduled_at >= week_start,
                                           Interview.scheduled_at < week_end).count()
        signed_up = User.query.filter(User.role == Role.INTERVIEWER.value,
                                      User.created_at >= now - window).count()
    available = sum(1 for ok in availability_map(interviewers, now).values() if ok)
    return {
        "total_interviewers": len(interviewers),
        "available_interviewers": available,
        "interviews_this_week": this_week,
        "signed_up_recently": signed_up,
    }
