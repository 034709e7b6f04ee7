import random
from datetime import date

import pytest

from core.config import settings
from models.user import User, UserType
from repositories.exercise import ExerciseLogRepository
from repositories.fall import FallRepository
from repositories.screening import ScreeningRepository
from services.demo_data import DEMO_EXERCISE_WEEKS, DemoDataService


@pytest.fixture
async def patient(test_db):
    user = User(email="demo@example.com", password_hash="x", user_type=UserType.PATIENT, full_name="Demo Patient")
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


class TestDemoDataService:
    async def test_generates_eight_months_of_history(self, test_db, patient):
        today = date(2024, 6, 15)
        summary = await DemoDataService(test_db, rng=random.Random(7)).regenerate(patient, today=today)

        assert 3 <= summary["falls_generated"] <= 5
        assert summary["exercise_weeks_generated"] == DEMO_EXERCISE_WEEKS
        assert 2 <= summary["screenings_generated"] <= 3
        assert summary["data_period"] == "8 months"
        assert summary["user"] == "Demo Patient"

        falls = await FallRepository(test_db).get_by_user_id(patient.id)
        assert len(falls) == summary["falls_generated"]
        assert all(date(2023, 10, 15) <= fall.fall_date <= today for fall in falls)

        logs = await ExerciseLogRepository(test_db).get_by_user_id(patient.id)
        assert len({log.week_start for log in logs}) == DEMO_EXERCISE_WEEKS
        assert all(log.minutes >= 0 for log in logs)

    async def test_regenerating_replaces_history(self, test_db, patient):
        service = DemoDataService(test_db, rng=random.Random(1))
        await service.regenerate(patient, today=date(2024, 6, 15))
        second = await service.regenerate(patient, today=date(2024, 6, 15))

        falls = await FallRepository(test_db).get_by_user_id(patient.id)
        screenings = await ScreeningRepository(test_db).get_by_user_id(patient.id)
        logs = await ExerciseLogRepository(test_db).get_by_user_id(patient.id)
        assert len(falls) == second["falls_generated"]
        assert len(screenings) == second["screenings_generated"]
        assert len(logs) == DEMO_EXERCISE_WEEKS


class TestGenerateFakeDataEndpoint:
    async def test_disabled_by_default(self, client, patient_headers):
        response = await client.post("/api/generate-fake-data", headers=patient_headers)
        assert response.status_code == 404

    async def test_generates_when_enabled(self, client, patient_headers, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_DEMO_DATA", True)

        response = await client.post("/api/generate-fake-data", headers=patient_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["exerciseWeeksGenerated"] == DEMO_EXERCISE_WEEKS
        assert data["dataPeriod"] == "8 months"

        falls = (await client.get("/api/falls", headers=patient_headers)).json()
        assert len(falls) == data["fallsGenerated"]

    async def test_disabled_hides_endpoint_from_caretakers(self, client, caretaker_headers):
        response = await client.post("/api/generate-fake-data", headers=caretaker_headers)
        assert response.status_code == 404

    async def test_disabled_hides_endpoint_without_token(self, client):
        response = await client.post("/api/generate-fake-data")
        assert response.status_code == 404

    async def test_generation_failure_returns_500(self, client, patient_headers, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_DEMO_DATA", True)

        async def fail(self, user_id):
            raise RuntimeError("db down")

        monkeypatch.setattr(FallRepository, "delete_for_user", fail)

        response = await client.post("/api/generate-fake-data", headers=patient_headers)
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to generate fake data"

    async def test_caretaker_is_forbidden(self, client, caretaker_headers, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_DEMO_DATA", True)

        response = await client.post("/api/generate-fake-data", headers=caretaker_headers)
        assert response.status_code == 403
