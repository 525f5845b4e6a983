"""
Tests for authentication endpoints and role dependencies.
"""
from datetime import timedelta

from app.core.security import create_access_token, decode_token


class TestRegister:
    """Tests for POST /v1/auth/register endpoint."""

    def test_register_teacher(self, client):
        """Test that registration returns a token and the new user."""
        response = client.post(
            "/v1/auth/register",
            json={"name": "Ada Lovelace", "email": "Ada@Example.com", "role": "TEACHER"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == "ada@example.com"
        assert data["user"]["role"] == "TEACHER"

        payload = decode_token(data["access_token"])
        assert payload["user_id"] == data["user"]["id"]
        assert payload["role"] == "TEACHER"

    def test_register_duplicate_email(self, client, student):
        """Test that an email can only be registered once."""
        response = client.post(
            "/v1/auth/register",
            json={"name": "Someone", "email": "STUDENT@example.com", "role": "STUDENT"},
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Email already registered."

    def test_register_invalid_email(self, client):
        response = client.post(
            "/v1/auth/register",
            json={"name": "Ada", "email": "not-an-email", "role": "TEACHER"},
        )

        assert response.status_code == 422


class TestLogin:
    """Tests for POST /v1/auth/login endpoint."""

    def test_login_existing_user(self, client, teacher):
        response = client.post("/v1/auth/login", json={"email": "teacher@example.com"})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == teacher.id

    def test_login_unknown_email(self, client, db_session):
        """Test that signing in with an unregistered email asks to register."""
        response = client.post("/v1/auth/login", json={"email": "nobody@example.com"})

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found. Please register."


class TestCurrentUser:
    """Tests for GET /v1/auth/me and token handling."""

    def test_me(self, client, student, student_headers):
        response = client.get("/v1/auth/me", headers=student_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Sam Student"

    def test_missing_token(self, client, db_session):
        response = client.get("/v1/auth/me")

        assert response.status_code in (401, 403)

    def test_invalid_token(self, client, db_session):
        response = client.get(
            "/v1/auth/me", headers={"Authorization": "Bearer invalid_token_here"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_expired_token(self, client, student):
        token = create_access_token(
            {"user_id": student.id, "role": "STUDENT"},
            expires_delta=timedelta(minutes=-1),
        )

        response = client.get(
            "/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401

    def test_token_for_deleted_user(self, client, db_session):
        token = create_access_token({"user_id": "no-such-user", "role": "STUDENT"})

        response = client.get(
            "/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "User not found."


class TestRoleChecks:
    def test_student_cannot_list_exams(self, client, student_headers):
        response = client.get("/v1/exams", headers=student_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Only teachers can perform this action."

    def test_teacher_cannot_view_student_history(self, client, teacher_headers):
        response = client.get("/v1/results/me", headers=teacher_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Only students can perform this action."
