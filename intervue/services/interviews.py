"""Interview scheduling and the interview status lifecycle.

Scheduled -> In Progress -> Completed | Canceled. Completed is reached only
through ``add_feedback``, which writes the feedback and the status together.
"""
from datetime import datetime, timedelta

from flask import current_app

from ..errors import InvalidTransition, NotFound, ValidationError, ConflictError
from ..extensions import db
from ..models.candidate import Candidate
from ..models.interview import Interview, InterviewStatus, Feedback
from ..models.interviewer import Interviewer
from ..models.requirement import Requirement
from ..utils.store import coerce_int, commit, fetch, remote_call, to_naive_utc, utcnow
from .ics import build_ics

TRANSITIONS = {
    InterviewStatus.SCHEDULED: frozenset({InterviewStatus.IN_PROGRESS, InterviewStatus.COMPLETED, InterviewStatus.CANCELED}),
    InterviewStatus.IN_PROGRESS: frozenset({InterviewStatus.COMPLETED, InterviewStatus.CANCELED}),
    InterviewStatus.COMPLETED: frozenset(),
    InterviewStatus.CANCELED: frozenset(),
}

# targets reachable through update_status; Completed needs feedback
STATUS_UPDATE_TARGETS = frozenset({InterviewStatus.IN_PROGRESS, InterviewStatus.CANCELED})

OPEN_STATUSES = (InterviewStatus.SCHEDULED.value, InterviewStatus.IN_PROGRESS.value)


class MissingReferences(NotFound):
    """Scheduling referenced one or more ids that do not resolve."""

    def __init__(self, missing):
        self.missing = list(missing)
        message = "; ".join(f"{entity} {entity_id} not found" for entity, entity_id in self.missing)
        super().__init__(self.missing[0][0], self.missing[0][1], message=message)


def parse_status(value):
    if isinstance(value, InterviewStatus):
        return value
    for status in InterviewStatus:
        if (value or "").strip().lower() == status.value.lower():
            return status
    raise ValidationError(f"Unknown interview status: {value!r}", field="status")


def reachable_states(status):
    status = parse_status(status)
    seen, todo = set(), list(TRANSITIONS[status])
    while todo:
        nxt = todo.pop()
        if nxt not in seen:
            seen.add(nxt)
            todo.extend(TRANSITIONS[nxt])
    return frozenset(seen)


def _check_version(interview, expected_version):
    if expected_version is not None and coerce_int(expected_version) != interview.version_id:
        raise ConflictError("This interview was changed by someone else, reload and try again")


def schedule_interview(candidate_id, interviewer_id, requirement_id, scheduled_at, now=None):
    """Create an interview in the Scheduled state.

    All three references must resolve; otherwise nothing is written and
    MissingReferences lists each unresolved id.
    """
    if not isinstance(scheduled_at, datetime):
        raise ValidationError("A date and time is required", field="scheduled_at")
    scheduled_at = to_naive_utc(scheduled_at)
    now = now or utcnow()
    grace = timedelta(seconds=current_app.config.get("SCHEDULING_GRACE_SECONDS", 60))
    if scheduled_at < now - grace:
        raise ValidationError("Interviews cannot be scheduled in the past", field="scheduled_at")

    refs = (
        ("candidate", Candidate, candidate_id),
        ("interviewer", Interviewer, interviewer_id),
        ("requirement", Requirement, requirement_id),
    )
    missing = []
    resolved = {}
    with remote_call("schedule interview"):
        for name, model, ref_id in refs:
            key = coerce_int(ref_id)
            obj = db.session.get(model, key) if key is not None else None
            if obj is None:
                missing.append((name, ref_id))
            resolved[name] = obj
    if missing:
        raise MissingReferences(missing)

    interview = Interview(
        candidate_id=resolved["candidate"].id,
        interviewer_id=resolved["interviewer"].id,
        requirement_id=resolved["requirement"].id,
        scheduled_at=scheduled_at,
        status=InterviewStatus.SCHEDULED.value,
    )
    with remote_call("schedule interview"):
        db.session.add(interview)
        db.session.commit()
    current_app.logger.info("interview %s scheduled at %s", interview.id, interview.scheduled_at)
    return interview


def get_interview(interview_id):
    return fetch(Interview, interview_id, "interview")


def update_status(interview_id, status, expected_version=None):
    """Move an interview to In Progress or Canceled.

    Re-submitting the current status is a no-op and writes nothing.
    """
    target = parse_status(status)
    interview = get_interview(interview_id)
    current = parse_status(interview.status)
    if target is current:
        return interview
    if target is InterviewStatus.COMPLETED:
        raise ValidationError("Completing an interview requires feedback", field="feedback")
    if target not in TRANSITIONS[current] or target not in STATUS_UPDATE_TARGETS:
        raise InvalidTransition(current.value, target.value)
    _check_version(interview, expected_version)

    interview.status = target.value
    commit(f"update interview {interview.id}")
    current_app.logger.info("interview %s: %s -> %s", interview.id, current.value, target.value)
    return interview


def add_feedback(interview_id, feedback, expected_version=None):
    """Attach feedback and complete the interview in one write."""
    fb = Feedback.parse(feedback)
    interview = get_interview(interview_id)
    current = parse_status(interview.status)
    if InterviewStatus.COMPLETED not in TRANSITIONS[current]:
        raise InvalidTransition(current.value, InterviewStatus.COMPLETED.value)
    _check_version(interview, expected_version)

    interview.feedback = fb.to_dict()
    interview.status = InterviewStatus.COMPLETED.value
    commit(f"add feedback to interview {interview.id}")
    current_app.logger.info("interview %s completed with rating %s", interview.id, fb.rating)
    return interview


def _interview_query(status=None, interviewer_id=None, candidate_id=None, requirement_id=None,
                     organization_id=None, start=None, end=None):
    query = Interview.query
    if status:
        query = query.filter(Interview.status == parse_status(status).value)
    if interviewer_id is not None:
        query = query.filter(Interview.interviewer_id == interviewer_id)
    if candidate_id is not None:
        query = query.filter(Interview.candidate_id == candidate_id)
    if requirement_id is not None:
        query = query.filter(Interview.requirement_id == requirement_id)
    if organization_id is not None:
        query = query.join(Requirement, Interview.requirement_id == Requirement.id).filter(
            Requirement.organization_id == organization_id)
    if start is not None:
        query = query.filter(Interview.scheduled_at >= start)
    if end is not None:
        query = query.filter(Interview.scheduled_at < end)
    return query


def list_interviews(**filters):
    query = _interview_query(**filters)
    with remote_call("list interviews"):
        return query.order_by(Interview.scheduled_at.asc()).all()


def count_interviews(**filters):
    query = _interview_query(**filters)
    with remote_call("count interviews"):
        return query.count()


def interview_calendar(interview):
    duration = timedelta(minutes=current_app.config.get("INTERVIEW_DURATION_MINUTES", 60))
    requirement = interview.requirement
    candidate = interview.candidate
    title = f"Interview: {candidate.full_name if candidate else 'candidate'}"
    if requirement is not None:
        title += f" for {requirement.title}"
    return build_ics(current_app.config["UID_DOMAIN"],
                     title=title,
                     start=interview.scheduled_at,
                     end=interview.scheduled_at + duration,
                     description=f"Interview #{interview.id} ({interview.status})")
