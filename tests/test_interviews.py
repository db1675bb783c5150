from datetime import datetime, timedelta, timezone

import pytest

from intervue.errors import ConflictError, InvalidTransition, NotFound, ValidationError
from intervue.extensions import db
from intervue.models.interview import Feedback, Interview, InterviewStatus
from intervue.services import interviews
from intervue.utils.store import utcnow

from conftest import add_interview

TOMORROW = timedelta(days=1)


def _schedule(world, **overrides):
    args = dict(candidate_id=world.candidate_id, interviewer_id=world.interviewer_id,
                requirement_id=world.requirement_id, scheduled_at=utcnow() + TOMORROW)
    args.update(overrides)
    return interviews.schedule_interview(**args)


def test_schedule_creates_scheduled_interview(ctx, world):
    i = _schedule(world)
    assert i.id is not None
    assert i.status == InterviewStatus.SCHEDULED.value
    assert i.feedback is None
    assert i.version_id == 1


@pytest.mark.parametrize("field", ["candidate_id", "interviewer_id", "requirement_id"])
def test_schedule_with_unknown_reference_writes_nothing(ctx, world, field):
    with pytest.raises(NotFound) as exc:
        _schedule(world, **{field: 9999})
    assert exc.value.missing == [(field[:-3], 9999)]
    assert Interview.query.count() == 0


def test_schedule_reports_every_missing_reference(ctx, world):
    with pytest.raises(interviews.MissingReferences) as exc:
        _schedule(world, candidate_id=901, interviewer_id=902, requirement_id="abc")
    assert [name for name, _ in exc.value.missing] == ["candidate", "interviewer", "requirement"]
    assert Interview.query.count() == 0


def test_schedule_rejects_past_times_but_allows_grace(ctx, world):
    with pytest.raises(ValidationError):
        _schedule(world, scheduled_at=utcnow() - timedelta(hours=1))
    assert _schedule(world, scheduled_at=utcnow() - timedelta(seconds=5)).id


def test_schedule_stores_aware_times_as_naive_utc(ctx, world):
    at = datetime(2099, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=2)))
    i = _schedule(world, scheduled_at=at)
    assert i.scheduled_at == datetime(2099, 1, 1, 7, 0)


def test_schedule_requires_a_datetime(ctx, world):
    with pytest.raises(ValidationError):
        _schedule(world, scheduled_at="tomorrow")


def test_reachable_states():
    assert interviews.reachable_states("Scheduled") == {
        InterviewStatus.IN_PROGRESS, InterviewStatus.COMPLETED, InterviewStatus.CANCELED}
    assert interviews.reachable_states(InterviewStatus.IN_PROGRESS) == {
        InterviewStatus.COMPLETED, InterviewStatus.CANCELED}
    assert interviews.reachable_states("Completed") == frozenset()
    assert interviews.reachable_states("canceled") == frozenset()


def test_update_status_to_current_status_is_a_no_op(ctx, world):
    i = add_interview(world)
    before = (i.status, i.version_id, i.updated_at)
    same = interviews.update_status(i.id, "Scheduled")
    db.session.refresh(same)
    assert (same.status, same.version_id, same.updated_at) == before


def test_update_status_moves_along_the_lifecycle(ctx, world):
    i = add_interview(world)
    interviews.update_status(i.id, "In Progress")
    assert i.status == InterviewStatus.IN_PROGRESS.value
    interviews.update_status(i.id, InterviewStatus.CANCELED)
    assert i.status == InterviewStatus.CANCELED.value
    with pytest.raises(InvalidTransition):
        interviews.update_status(i.id, "In Progress")


def test_update_status_cannot_complete_without_feedback(ctx, world):
    i = add_interview(world)
    with pytest.raises(ValidationError):
        interviews.update_status(i.id, "Completed")
    db.session.refresh(i)
    assert i.status == InterviewStatus.SCHEDULED.value
    assert i.feedback is None


def test_update_status_rejects_unknown_status(ctx, world):
    i = add_interview(world)
    with pytest.raises(ValidationError):
        interviews.update_status(i.id, "Postponed")


def test_feedback_completes_the_interview(ctx, world):
    i = add_interview(world)
    done = interviews.add_feedback(i.id, {"rating": 4, "comments": "Strong candidate"})
    db.session.refresh(done)
    assert done.status == InterviewStatus.COMPLETED.value
    assert done.feedback["rating"] == 4
    assert done.feedback_obj.comments == "Strong candidate"


def test_feedback_from_in_progress(ctx, world):
    i = add_interview(world, status=InterviewStatus.IN_PROGRESS.value)
    interviews.add_feedback(i.id, {"rating": "3.5", "comments": "ok", "strengths": ["SQL"]})
    assert i.feedback == {"rating": 3.5, "comments": "ok", "strengths": ["SQL"]}


@pytest.mark.parametrize("payload", [
    {"comments": "no rating"},
    {"rating": 0, "comments": "too low"},
    {"rating": 6, "comments": "too high"},
    {"rating": "great", "comments": "not a number"},
    {"rating": True, "comments": "bool"},
    {"rating": 3},
    {"rating": 3, "comments": "   "},
    {"rating": 3, "comments": "ok", "weaknesses": [1, 2]},
    "rating=3",
])
def test_malformed_feedback_is_rejected_before_any_write(ctx, world, payload):
    i = add_interview(world)
    with pytest.raises(ValidationError):
        interviews.add_feedback(i.id, payload)
    db.session.refresh(i)
    assert i.status == InterviewStatus.SCHEDULED.value
    assert i.feedback is None


def test_feedback_on_terminal_interview_is_refused(ctx, world):
    i = add_interview(world, status=InterviewStatus.CANCELED.value)
    with pytest.raises(InvalidTransition):
        interviews.add_feedback(i.id, {"rating": 4, "comments": "late"})


def test_completed_interviews_always_carry_feedback(ctx, world):
    a, b, c = add_interview(world), add_interview(world), add_interview(world)
    interviews.add_feedback(a.id, {"rating": 5, "comments": "great"})
    interviews.update_status(b.id, "Canceled")
    for status in ("Completed", "In Progress"):
        try:
            interviews.update_status(c.id, status)
        except ValidationError:
            db.session.rollback()
    for row in Interview.query.all():
        if row.status == InterviewStatus.COMPLETED.value:
            assert row.feedback


def test_stale_version_is_a_conflict(ctx, world):
    i = add_interview(world)
    with pytest.raises(ConflictError):
        interviews.update_status(i.id, "In Progress", expected_version=i.version_id + 1)
    with pytest.raises(ConflictError):
        interviews.add_feedback(i.id, {"rating": 4, "comments": "x"}, expected_version=99)
    interviews.update_status(i.id, "In Progress", expected_version=i.version_id)
    assert i.version_id == 2


def test_unknown_interview(ctx, world):
    with pytest.raises(NotFound):
        interviews.update_status(404, "Canceled")


def test_list_and_count_filters(ctx, world):
    add_interview(world)
    add_interview(world, interviewer_id=world.other_interviewer_id, requirement_id=world.globex_requirement_id)
    assert interviews.count_interviews() == 2
    acme = interviews.list_interviews(organization_id=world.acme_id)
    assert [i.requirement_id for i in acme] == [world.requirement_id]
    assert interviews.count_interviews(interviewer_id=world.other_interviewer_id) == 1
    assert interviews.count_interviews(status="Completed") == 0
    assert interviews.count_interviews(start=utcnow() + timedelta(days=2)) == 0


def test_calendar_export(ctx, world):
    i = add_interview(world, when=datetime(2099, 3, 4, 10, 30))
    ics = interviews.interview_calendar(i)
    assert ics.startswith("BEGIN:VCALENDAR\r\n")
    assert "DTSTART:20990304T103000Z" in ics
    assert "DTEND:20990304T113000Z" in ics
    assert "SUMMARY:Interview: Casey for Backend Engineer" in ics


def test_feedback_round_trips_through_the_structured_type():
    fb = Feedback.parse({"rating": 4, "comments": " Solid ", "weaknesses": ["", "Testing"],
                         "recommendation": "Hire"})
    assert fb.to_dict() == {"rating": 4, "comments": "Solid", "weaknesses": ["Testing"],
                            "recommendation": "Hire"}
