from __future__ import annotations

from conftest import TEST_PASSWORD


def test_update_password_rotates_token(client, users, auth_header):
    user_a, _ = users
    old_headers = auth_header(user_a)

    res = client.patch(
        "/auth/update-password",
        headers=old_headers,
        json={
            "old_password": TEST_PASSWORD,
            "new_password": "changed_password_1",
            "password_confirm": "changed_password_1",
        },
    )
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Password updated!"
    new_token = body["token"]

    # Tokens issued before the change stop working; the returned one works.
    stale = client.get("/users/me", headers=old_headers)
    assert stale.status_code == 401
    assert stale.json()["message"] == "Password has been changed. Please log in again."

    fresh = client.get("/users/me", headers={"Authorization": f"Bearer {new_token}"})
    assert fresh.status_code == 200

    login = client.post("/auth/login", json={"email": user_a.email, "password": "changed_password_1"})
    assert login.status_code == 200


def test_update_password_wrong_old_password_is_401(client, users, auth_header):
    user_a, _ = users
    headers = auth_header(user_a)
    res = client.patch(
        "/auth/update-password",
        headers=headers,
        json={
            "old_password": "definitely_wrong",
            "new_password": "changed_password_1",
            "password_confirm": "changed_password_1",
        },
    )
    assert res.status_code == 401
    assert res.json()["message"] == "Your password is not correct"

    # Nothing changed: the same token still works.
    assert client.get("/users/me", headers=headers).status_code == 200


def test_update_password_policy_violation_is_400(client, users, auth_header):
    user_a, _ = users
    res = client.patch(
        "/auth/update-password",
        headers=auth_header(user_a),
        json={"old_password": TEST_PASSWORD, "new_password": "password", "password_confirm": "password"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Password is too common"


def test_update_password_requires_login(client, users):
    res = client.patch(
        "/auth/update-password",
        json={"old_password": TEST_PASSWORD, "new_password": "x" * 10, "password_confirm": "x" * 10},
    )
    assert res.status_code == 401
    assert res.json()["message"] == "You are not logged in."
