from __future__ import annotations

from jobboard.models.application import Application


def test_apply_for_own_job_is_rejected(client, db_session, users, job_by_a, auth_header):
    user_a, user_b = users
    # Body tries to smuggle in another applicant; it must not matter.
    res = client.post(
        f"/applications/apply-for-job/{job_by_a.id}",
        headers=auth_header(user_a),
        json={"cover_letter": "Hire me", "applicant_id": user_b.id, "job_id": 999},
    )
    assert res.status_code == 400
    assert res.json() == {"status": "fail", "message": "You cannot apply for the job posted by yourself!"}
    assert db_session.query(Application).count() == 0


def test_apply_for_someone_elses_job_creates_one_application(client, db_session, users, job_by_a, auth_header):
    _, user_b = users
    res = client.post(
        f"/applications/apply-for-job/{job_by_a.id}",
        headers=auth_header(user_b),
        json={"cover_letter": "Five years of Python."},
    )
    assert res.status_code == 200
    assert res.json() == {"status": "success", "data": None, "message": "Application sent!"}

    apps = db_session.query(Application).all()
    assert len(apps) == 1
    assert apps[0].job_id == job_by_a.id
    assert apps[0].applicant_id == user_b.id
    assert apps[0].cover_letter == "Five years of Python."


def test_apply_without_body(client, db_session, users, job_by_a, auth_header):
    _, user_b = users
    res = client.post(f"/applications/apply-for-job/{job_by_a.id}", headers=auth_header(user_b))
    assert res.status_code == 200
    assert db_session.query(Application).count() == 1


def test_body_cannot_override_applicant_or_job(client, db_session, users, job_by_a, auth_header):
    user_a, user_b = users
    res = client.post(
        f"/applications/apply-for-job/{job_by_a.id}",
        headers=auth_header(user_b),
        json={"applicant_id": user_a.id, "job_id": 12345},
    )
    assert res.status_code == 200

    app_row = db_session.query(Application).one()
    assert app_row.applicant_id == user_b.id
    assert app_row.job_id == job_by_a.id


def test_apply_for_missing_job_is_404(client, db_session, users, auth_header):
    _, user_b = users
    res = client.post("/applications/apply-for-job/4242", headers=auth_header(user_b))
    assert res.status_code == 404
    assert res.json() == {"status": "fail", "message": "The job you want to apply does not exist!"}
    assert db_session.query(Application).count() == 0


def test_apply_requires_login(client, job_by_a):
    res = client.post(f"/applications/apply-for-job/{job_by_a.id}")
    assert res.status_code == 401
    assert res.json()["message"] == "You are not logged in."
