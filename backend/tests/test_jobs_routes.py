from __future__ import annotations

from jobboard.models.job import Job


def test_create_job_sets_owner_from_token(client, db_session, users, auth_header):
    user_a, user_b = users
    res = client.post(
        "/jobs",
        headers=auth_header(user_a),
        json={"title": "Data Engineer", "company": "Initech", "location": "Berlin", "posted_by_id": user_b.id},
    )
    assert res.status_code == 201
    job_out = res.json()["data"]["job"]
    assert job_out["title"] == "Data Engineer"
    assert job_out["posted_by_id"] == user_a.id

    job = db_session.query(Job).filter(Job.id == job_out["id"]).one()
    assert job.posted_by_id == user_a.id


def test_get_job(client, users, job_by_a, auth_header):
    _, user_b = users
    res = client.get(f"/jobs/{job_by_a.id}", headers=auth_header(user_b))
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert body["data"]["job"]["company"] == "Acme"


def test_get_missing_job_is_404(client, users, auth_header):
    user_a, _ = users
    res = client.get("/jobs/999", headers=auth_header(user_a))
    assert res.status_code == 404
    assert res.json() == {"status": "fail", "message": "No job found with that ID"}


def test_create_job_validation_is_400(client, users, auth_header):
    user_a, _ = users
    res = client.post("/jobs", headers=auth_header(user_a), json={"company": "Initech"})
    assert res.status_code == 400
    assert res.json()["message"].startswith("Invalid input data.")


def test_jobs_require_login(client, job_by_a):
    assert client.get(f"/jobs/{job_by_a.id}").status_code == 401
    assert client.post("/jobs", json={"title": "x", "company": "y"}).status_code == 401
