"""Tests of token issuing"""


def test_register(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "new@example.com", "password": "secret12", "full_name": "New"},
    )
    assert response.status_code == 201
    tokens = response.json()
    assert tokens["token_type"] == "bearer"

    profile = client.get(
        "/api/v1/profile",
        headers={"Authorization": f"Bearer {tokens['access_token']}"},
    )
    assert profile.status_code == 200
    assert profile.json()["data"]["user"]["email"] == "new@example.com"


def test_register_duplicate_email(client, test_user):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": test_user.email, "password": "secret12", "full_name": "Dup"},
    )
    assert response.status_code == 409


def test_login(client, test_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": test_user.email, "password": "testpass123"},
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_wrong_password(client, test_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": test_user.email, "password": "wrong"},
    )
    assert response.status_code == 401


def test_refresh_token_cannot_access_profile(client, test_user):
    tokens = client.post(
        "/api/v1/auth/login",
        json={"email": test_user.email, "password": "testpass123"},
    ).json()

    response = client.get(
        "/api/v1/profile",
        headers={"Authorization": f"Bearer {tokens['refresh_token']}"},
    )
    assert response.status_code == 401

    refreshed = client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )
    assert refreshed.status_code == 200
