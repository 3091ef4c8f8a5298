"""Signup, login and token handling."""

import jwt
import pytest

from app.auth import ALGORITHM, create_access_token, decode_access_token, hash_password, verify_password
from app.config import settings
from app.exceptions import AuthenticationRequired
from app.models import UserRole

from conftest import PASSWORD, auth_headers


class TestTokens:
    def test_round_trip_carries_identity(self):
        caller = decode_access_token(create_access_token(7, UserRole.PROFESSIONAL))

        assert caller.user_id == 7
        assert caller.role == UserRole.PROFESSIONAL
        assert not caller.is_admin

    def test_tampered_token_rejected(self):
        forged = jwt.encode({"sub": "1", "role": "ADMIN"}, "wrong-secret", algorithm=ALGORITHM)

        with pytest.raises(AuthenticationRequired):
            decode_access_token(forged)

    def test_unknown_role_rejected(self):
        token = jwt.encode({"sub": "1", "role": "ROOT"}, settings.secret_key, algorithm=ALGORITHM)

        with pytest.raises(AuthenticationRequired):
            decode_access_token(token)

    def test_password_hashing(self):
        hashed = hash_password("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("other-pass", hashed)


@pytest.mark.auth
class TestAuthApi:
    async def test_signup_then_login(self, client):
        response = await client.post(
            "/api/auth/signup",
            json={
                "name": "Kiran",
                "email": "kiran@example.com",
                "password": "longenough",
                "role": "PROFESSIONAL",
                "phone": "555-0199",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["role"] == "PROFESSIONAL"
        assert "hashed_password" not in data["user"]

        response = await client.post(
            "/api/auth/login", json={"email": "kiran@example.com", "password": "longenough"}
        )
        assert response.status_code == 200
        token = response.json()["access_token"]

        response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "kiran@example.com"

    async def test_role_defaults_to_user(self, client):
        response = await client.post(
            "/api/auth/signup",
            json={"name": "Dev", "email": "dev@example.com", "password": "longenough"},
        )

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "USER"

    async def test_duplicate_email(self, client, seeded):
        response = await client.post(
            "/api/auth/signup",
            json={"name": "Again", "email": seeded["customer"].email, "password": "longenough"},
        )

        assert response.status_code == 409

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "A", "email": "not-an-email", "password": "longenough"},
            {"name": "A", "email": "a@example.com", "password": "short"},
            {"name": "", "email": "a@example.com", "password": "longenough"},
            {"name": "A", "email": "a@example.com", "password": "longenough", "role": "OWNER"},
            {"name": "A", "email": "a@example.com", "password": "longenough", "role": "ADMIN"},
        ],
    )
    async def test_signup_validation(self, client, payload):
        response = await client.post("/api/auth/signup", json=payload)

        assert response.status_code == 422

    async def test_wrong_password(self, client, seeded):
        response = await client.post(
            "/api/auth/login", json={"email": seeded["customer"].email, "password": "nope-nope"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_fixture_password_logs_in(self, client, seeded):
        response = await client.post(
            "/api/auth/login", json={"email": seeded["customer"].email, "password": PASSWORD}
        )

        assert response.status_code == 200

    async def test_admin_user_listing(self, client, seeded):
        response = await client.get(
            "/api/admin/users",
            params={"role": "PROFESSIONAL"},
            headers=auth_headers(seeded["admin"]),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["pagination"]["total"] == 1
        assert data["users"][0]["email"] == seeded["pro_user"].email

        response = await client.get("/api/admin/users", headers=auth_headers(seeded["customer"]))
        assert response.status_code == 403
