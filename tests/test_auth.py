import pytest
from jose import jwt

from core.config import settings
from schemas.common import HealthCheckResponse
from tests.conftest import register


class TestRegister:
    async def test_register_patient(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"email": "new@example.com", "password": "pw", "userType": "patient"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["userType"] == "patient"

        payload = jwt.decode(data["token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["email"] == "new@example.com"
        assert payload["userType"] == "patient"
        assert "exp" in payload

    async def test_register_twice_with_same_email_fails(self, client):
        await register(client, "dup@example.com")

        response = await client.post(
            "/api/auth/register",
            json={"email": "dup@example.com", "password": "other", "userType": "caretaker"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"

    async def test_email_is_case_insensitive(self, client):
        await register(client, "Case@Example.com")

        response = await client.post(
            "/api/auth/register",
            json={"email": "case@example.com", "password": "pw", "userType": "patient"},
        )
        assert response.status_code == 400

    async def test_caretaker_gets_referral_code(self, client, caretaker_headers):
        me = (await client.get("/api/users/me", headers=caretaker_headers)).json()
        assert me["userType"] == "caretaker"
        assert me["fullName"] == "Care Taker"
        assert me["referralCode"]
        assert len(me["referralCode"]) == 6

    async def test_patient_has_no_referral_code(self, client, patient_headers):
        me = (await client.get("/api/users/me", headers=patient_headers)).json()
        assert me["userType"] == "patient"
        assert me["referralCode"] is None
        assert me["caretakerId"] is None

    @pytest.mark.parametrize(
        "body",
        [
            {"password": "pw", "userType": "patient"},
            {"email": "x@example.com", "userType": "patient"},
            {"email": "x@example.com", "password": "pw"},
            {"email": "x@example.com", "password": "pw", "userType": "doctor"},
            {"email": "not-an-email", "password": "pw", "userType": "patient"},
        ],
    )
    async def test_invalid_registration_body(self, client, body):
        response = await client.post("/api/auth/register", json=body)
        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_register_with_unknown_referral_code(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"email": "p@example.com", "password": "pw", "userType": "patient", "referralCode": "NOPE42"},
        )
        assert response.status_code == 404

        # Nothing was created
        login = await client.post("/api/auth/login", json={"email": "p@example.com", "password": "pw"})
        assert login.status_code == 400


class TestLogin:
    async def test_login_success(self, client):
        await register(client, "login@example.com", "caretaker", password="right")

        response = await client.post(
            "/api/auth/login", json={"email": "login@example.com", "password": "right"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["userType"] == "caretaker"
        assert data["token"]

    async def test_login_wrong_password_fails(self, client):
        await register(client, "login@example.com", password="right")

        response = await client.post(
            "/api/auth/login", json={"email": "login@example.com", "password": "wrong"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid credentials"

    async def test_login_unknown_email_fails(self, client):
        response = await client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "pw"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid credentials"


class TestAuthentication:
    async def test_missing_token(self, client):
        response = await client.get("/api/users/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_garbage_token(self, client):
        response = await client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    async def test_token_signed_with_other_key(self, client, patient_headers):
        token = jwt.encode({"sub": "1", "type": "access"}, "another-key", algorithm="HS256")
        response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


async def test_health_check(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "timestamp" in data


def test_health_timestamp_defaults_to_aware_utc():
    response = HealthCheckResponse(status="ok")
    assert response.timestamp.tzinfo is not None
    assert response.timestamp.utcoffset().total_seconds() == 0
