"""
Tests for Authentication Endpoints

- Registration
- Login (JWT token in body and cookie)
- Logout
- Protected endpoints (/me)
- Missing vs invalid credentials
"""

from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient

from app.services.security import create_access_token, verify_password


def register(client: TestClient, username="newuser", email="newuser@example.com", password="abc123"):
    return client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )


class TestUserRegistration:
    """Tests for POST /api/v1/auth/register"""

    def test_register_success(self, client: TestClient, users_store):
        response = register(client)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "newuser"
        assert data["email"] == "newuser@example.com"
        assert "id" in data
        assert "created_at" in data
        # Password should NEVER be in response
        assert "password" not in data
        assert "hashed_password" not in data

        stored = users_store.find_one(lambda u: u.id == data["id"])
        assert verify_password("abc123", stored.hashed_password)

    def test_register_normalizes_email(self, client: TestClient):
        response = register(client, email="  MiXeD@Example.COM ")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["email"] == "mixed@example.com"

    def test_register_duplicate_email_case_insensitive(self, client: TestClient):
        register(client, username="first", email="a@x.com")

        response = register(client, username="second", email="A@X.com")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Email already registered"

    def test_register_duplicate_username_case_insensitive(self, client: TestClient):
        register(client, username="takenuser", email="first@example.com")

        response = register(client, username="TakenUser", email="second@example.com")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Username already taken"

    def test_register_conflict_does_not_write(self, client: TestClient, users_store):
        register(client, username="first", email="a@x.com")
        register(client, username="second", email="a@x.com")

        assert len(users_store.find_all()) == 1

    def test_register_invalid_email(self, client: TestClient):
        response = register(client, email="not-an-email")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"][0]["loc"] == ["body", "email"]

    def test_register_weak_password(self, client: TestClient):
        response = register(client, password="abcdef")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_register_password_with_non_ascii_digits(self, client: TestClient, users_store):
        response = register(client, password="abc١٢٣")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert users_store.find_all() == []

    def test_register_short_username(self, client: TestClient, users_store):
        response = register(client, username="ab")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert users_store.find_all() == []

    def test_register_missing_fields(self, client: TestClient):
        response = client.post("/api/v1/auth/register", json={"username": "newuser"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestUserLogin:
    """Tests for POST /api/v1/auth/login"""

    def test_login_success(self, client: TestClient, sample_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "abc123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 24 * 60 * 60
        assert data["user"]["id"] == sample_user.id
        assert "password" not in data["user"]
        assert response.cookies.get("token") == data["access_token"]

    def test_login_email_case_insensitive(self, client: TestClient, sample_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "TestUser@Example.com", "password": "abc123"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, client: TestClient, sample_user):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "wrong123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_unknown_email(self, client: TestClient):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "abc123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_missing_password(self, client: TestClient):
        response = client.post("/api/v1/auth/login", json={"email": "a@x.com"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestCurrentUser:
    """Tests for GET /api/v1/auth/me and credential handling."""

    def test_me_with_bearer_token(self, client: TestClient, sample_user, auth_headers):
        response = client.get("/api/v1/auth/me", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == "testuser@example.com"

    def test_me_with_login_cookie(self, client: TestClient, sample_user):
        client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "abc123"},
        )

        response = client.get("/api/v1/auth/me")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == sample_user.id

    def test_me_without_token(self, client: TestClient):
        response = client.get("/api/v1/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "You should sign in first"

    def test_me_with_invalid_token(self, client: TestClient):
        response = client.get(
            "/api/v1/auth/me",
            headers={"Authorization": "Bearer invalid-token"},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Token is not valid"

    def test_me_with_expired_token(self, client: TestClient, sample_user):
        token = create_access_token(sample_user.id, sample_user.email, timedelta(seconds=-1))

        response = client.get(
            "/api/v1/auth/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_me_for_deleted_account(self, client: TestClient):
        token = create_access_token("deleted-user", "gone@example.com")

        response = client.get(
            "/api/v1/auth/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestLogout:
    """Tests for POST /api/v1/auth/logout"""

    def test_logout_clears_cookie(self, client: TestClient, sample_user):
        client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "abc123"},
        )

        response = client.post("/api/v1/auth/logout")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get("/api/v1/auth/me").status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_requires_authentication(self, client: TestClient):
        response = client.post("/api/v1/auth/logout")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
