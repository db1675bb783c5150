from datetime import timedelta

import pytest

from intervue.extensions import db
from intervue.models.candidate import Candidate
from intervue.models.interview import Interview, InterviewStatus
from intervue.models.user import User
from intervue.utils.store import utcnow

from conftest import add_interview, login, make_user


@pytest.mark.parametrize("who,landing", [
    ("admin", "/dashboard/admin/companies"),
    ("super_coordinator", "/dashboard"),
    ("client", "/organization"),
    ("client_coordinator", "/organization"),
    ("interviewer", "/interviewer"),
    ("candidate", "/candidate"),
    ("legacy", "/candidate"),
])
def test_login_lands_on_role_home(client, world, who, landing):
    resp = login(client, world.users[who])
    assert resp.status_code == 302
    assert resp.headers["Location"] == landing
    assert client.get("/").headers["Location"] == landing
    assert client.get(landing).status_code == 200


def test_login_ignores_offsite_next(client, world):
    resp = login(client, world.users["admin"], next="https://evil.example/steal")
    assert resp.headers["Location"] == "/dashboard/admin/companies"


def test_bad_password_stays_on_login(client, world):
    resp = login(client, world.users["admin"], password="nope")
    assert resp.status_code == 200
    assert b"Invalid email or password" in resp.data
    assert client.get("/dashboard").status_code == 302


def test_logout(client, world):
    login(client, world.users["client"])
    assert client.post("/auth/logout").headers["Location"] == "/auth/login"
    assert "/auth/login" in client.get("/organization").headers["Location"]


def test_logout_requires_a_session(client, world):
    assert "/auth/login" in client.post("/auth/logout").headers["Location"]


def test_register_client_for_company(client, app, world):
    resp = client.post("/auth/register", data={
        "full_name": "Rita Rep", "email": "rita@acme.example", "password": "longenough",
        "confirm": "longenough", "role": "client", "organization_id": str(world.acme_id)})
    assert resp.headers["Location"] == "/auth/login"
    with app.app_context():
        assert User.query.filter_by(email="rita@acme.example").one().organization_id == world.acme_id


def test_interviewer_cannot_open_company_pages(client, world):
    login(client, world.users["interviewer"])
    for path in ("/dashboard", "/organization", "/candidate"):
        assert client.get(path).headers["Location"] == "/unauthorized"


def test_legacy_candidate_urls_redirect(client, world):
    login(client, world.users["candidate"])
    resp = client.get("/interviewee/interviews")
    assert resp.status_code == 301
    assert resp.headers["Location"] == "/candidate/interviews"
    assert client.get("/candidate/interviews").status_code == 200


def test_schedule_then_complete_through_forms(client, app, world):
    login(client, world.users["admin"])
    when = (utcnow() + timedelta(days=1)).strftime("%Y-%m-%dT%H:%M")
    resp = client.post("/dashboard/interviews/schedule", data={
        "candidate_id": str(world.candidate_id), "interviewer_id": str(world.interviewer_id),
        "requirement_id": str(world.requirement_id), "scheduled_at": when})
    assert resp.status_code == 302
    with app.app_context():
        interview = Interview.query.one()
        interview_id, version = interview.id, interview.version_id
        assert interview.status == InterviewStatus.SCHEDULED.value
    assert resp.headers["Location"] == f"/dashboard/interviews/{interview_id}"
    assert client.get(resp.headers["Location"]).status_code == 200

    resp = client.post(f"/dashboard/interviews/{interview_id}/feedback", data={
        "rating": "4", "comments": "Strong candidate", "strengths": "Python\nSQL", "weaknesses": "",
        "recommendation": "Hire", "version": str(version)})
    assert resp.status_code == 302
    with app.app_context():
        interview = db.session.get(Interview, interview_id)
        assert interview.status == InterviewStatus.COMPLETED.value
        assert interview.feedback == {"rating": 4, "comments": "Strong candidate",
                                      "strengths": ["Python", "SQL"], "recommendation": "Hire"}


def test_schedule_with_missing_interviewer_reports_and_writes_nothing(client, app, world):
    login(client, world.users["admin"])
    when = (utcnow() + timedelta(days=1)).strftime("%Y-%m-%dT%H:%M")
    resp = client.post("/dashboard/interviews/schedule", data={
        "candidate_id": str(world.candidate_id), "interviewer_id": "9999",
        "requirement_id": str(world.requirement_id), "scheduled_at": when})
    assert resp.status_code == 200
    assert b"interviewer 9999 not found" in resp.data
    with app.app_context():
        assert Interview.query.count() == 0


def test_status_update_and_calendar(client, app, world):
    with app.app_context():
        interview_id = add_interview(world).id
    login(client, world.users["super_coordinator"])
    client.post(f"/dashboard/interviews/{interview_id}/status", data={"status": "Canceled", "version": "1"})
    with app.app_context():
        assert db.session.get(Interview, interview_id).status == InterviewStatus.CANCELED.value

    resp = client.get(f"/dashboard/interviews/{interview_id}/ics")
    assert resp.mimetype == "text/calendar"
    assert b"BEGIN:VEVENT" in resp.data


def test_client_sees_only_own_company(client, app, world):
    with app.app_context():
        theirs = add_interview(world, interviewer_id=world.other_interviewer_id,
                               requirement_id=world.globex_requirement_id).id
        ours = add_interview(world).id
    login(client, world.users["client"])
    assert client.get(f"/dashboard/interviews/{ours}").status_code == 200
    assert client.get(f"/dashboard/interviews/{theirs}").status_code == 403
    listing = client.get("/organization/interviews")
    assert b"Backend Engineer" in listing.data
    assert b"Frontend Developer" not in listing.data


def test_client_without_company_sees_nothing(client, app, world):
    with app.app_context():
        make_user("legacy-org@example.com", "organization")
        db.session.commit()
    login(client, "legacy-org@example.com")
    for path in ("/organization", "/organization/positions", "/organization/interviews",
                 "/dashboard/requirements", "/dashboard/candidates"):
        resp = client.get(path)
        assert resp.status_code == 403, path
        assert b"Backend Engineer" not in resp.data
        assert b"Frontend Developer" not in resp.data


def test_schedule_offers_only_own_company_candidates(client, app, world):
    with app.app_context():
        outsider = Candidate(full_name="Globex Secret Person", email="secret@globex.example",
                             requirement_id=world.globex_requirement_id)
        db.session.add(outsider)
        db.session.commit()
        outsider_id = outsider.id
    login(client, world.users["client"])
    page = client.get("/dashboard/interviews/schedule")
    assert page.status_code == 200
    assert b"Casey" in page.data
    assert b"Globex Secret Person" not in page.data

    when = (utcnow() + timedelta(days=1)).strftime("%Y-%m-%dT%H:%M")
    resp = client.post("/dashboard/interviews/schedule", data={
        "candidate_id": str(outsider_id), "interviewer_id": str(world.interviewer_id),
        "requirement_id": str(world.requirement_id), "scheduled_at": when})
    assert resp.status_code == 403
    with app.app_context():
        assert Interview.query.count() == 0


def test_only_staff_approve_requirements(client, world):
    login(client, world.users["client"])
    resp = client.post(f"/dashboard/requirements/{world.requirement_id}/approve")
    assert resp.headers["Location"] == "/unauthorized"


def test_company_delete_is_refused_while_in_use(client, app, world):
    login(client, world.users["admin"])
    resp = client.post(f"/dashboard/admin/companies/{world.acme_id}/delete", follow_redirects=True)
    assert resp.status_code == 200
    assert b"remove or reassign them first" in resp.data


def test_interviewer_starts_own_interview_only(client, app, world):
    with app.app_context():
        mine = add_interview(world).id
        other = add_interview(world, interviewer_id=world.other_interviewer_id).id
    login(client, world.users["interviewer"])
    assert client.post(f"/interviewer/interviews/{mine}/start").status_code == 302
    assert client.post(f"/interviewer/interviews/{other}/start").status_code == 403
    with app.app_context():
        assert db.session.get(Interview, mine).status == InterviewStatus.IN_PROGRESS.value
        assert db.session.get(Interview, other).status == InterviewStatus.SCHEDULED.value


def test_interviewer_opportunities_match_skills(client, world):
    login(client, world.users["interviewer"])
    page = client.get("/interviewer/opportunities")
    assert b"Backend Engineer" in page.data
    assert b"Frontend Developer" not in page.data


def test_request_demo_and_health(client):
    resp = client.post("/request-demo", data={
        "full_name": "Pat", "work_email": "pat@corp.example", "phone_number": "555-0100",
        "company_name": "Corp", "team_size": "", "hiring_goals": "", "how_heard": "", "job_title": ""})
    assert resp.headers["Location"] == "/"
    assert client.get("/health").get_json() == {"status": "healthy"}


def test_unknown_page(client):
    assert client.get("/nowhere").status_code == 404


def test_account_page_needs_any_signed_in_actor(client, world):
    assert "/auth/login" in client.get("/account").headers["Location"]
    login(client, world.users["accountant"])
    page = client.get("/account")
    assert page.status_code == 200
    assert b"accounts@example.com" in page.data
