from datetime import date, timedelta

from services.analytics import months_before


async def log_falls(client, headers, days):
    for day in days:
        response = await client.post("/api/falls", json={"fall_date": day.isoformat()}, headers=headers)
        assert response.status_code == 201


async def log_exercise(client, headers, weeks):
    for week_start, minutes in weeks:
        response = await client.post(
            "/api/users/me/exercise",
            json={"weekStart": week_start.isoformat(), "minutes": minutes},
            headers=headers,
        )
        assert response.status_code == 200


class TestMyAnalytics:
    async def test_no_history_scores_zero(self, client, patient_headers):
        response = await client.get("/api/users/me/analytics", headers=patient_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["riskScore"] == 0
        assert data["exerciseLogs"] == []
        assert data["falls"] == []
        assert data["screening"] is None
        assert data["riskFactors"] == {
            "hasRecentFalls": False,
            "fallCount": 0,
            "lowExercise": 0,
            "screeningRisk": False,
        }

    async def test_every_factor_present_scores_hundred(self, client, patient_headers):
        today = date.today()
        await log_falls(client, patient_headers, [today - timedelta(days=d) for d in (3, 20, 40)])
        await log_exercise(client, patient_headers, [(today - timedelta(weeks=w), 10) for w in range(1, 6)])
        await client.post(
            "/api/screening",
            json={"unsteady": True, "worries": False, "fallen": False},
            headers=patient_headers,
        )

        data = (await client.get("/api/users/me/analytics", headers=patient_headers)).json()
        assert data["riskScore"] == 100
        assert data["riskFactors"] == {
            "hasRecentFalls": True,
            "fallCount": 3,
            "lowExercise": 5,
            "screeningRisk": True,
        }
        assert data["screening"]["unsteady"] is True
        weeks = [point["week_start"] for point in data["exerciseLogs"]]
        assert weeks == sorted(weeks)

    async def test_only_recent_falls_count(self, client, patient_headers):
        today = date.today()
        old = months_before(today, 6) - timedelta(days=1)
        await log_falls(client, patient_headers, [old, today - timedelta(days=1)])

        data = (await client.get("/api/users/me/analytics", headers=patient_headers)).json()
        assert data["riskFactors"]["fallCount"] == 1
        assert data["riskScore"] == 30
        assert len(data["falls"]) == 1

    async def test_exercise_outside_window_is_ignored(self, client, patient_headers):
        today = date.today()
        await log_exercise(client, patient_headers, [(today - timedelta(weeks=w), 0) for w in range(13, 20)])

        data = (await client.get("/api/users/me/analytics", headers=patient_headers)).json()
        assert data["exerciseLogs"] == []
        assert data["riskFactors"]["lowExercise"] == 0
        assert data["riskScore"] == 0

    async def test_four_low_weeks_do_not_count(self, client, patient_headers):
        today = date.today()
        await log_exercise(client, patient_headers, [(today - timedelta(weeks=w), 49) for w in range(1, 5)])
        await log_exercise(client, patient_headers, [(today - timedelta(weeks=w), 50) for w in range(5, 9)])

        data = (await client.get("/api/users/me/analytics", headers=patient_headers)).json()
        assert data["riskFactors"]["lowExercise"] == 4
        assert data["riskScore"] == 0

    async def test_latest_screening_decides(self, client, patient_headers):
        await client.post(
            "/api/screening", json={"unsteady": True, "worries": True, "fallen": True}, headers=patient_headers
        )
        await client.post(
            "/api/screening", json={"unsteady": False, "worries": False, "fallen": False}, headers=patient_headers
        )

        data = (await client.get("/api/users/me/analytics", headers=patient_headers)).json()
        assert data["riskFactors"]["screeningRisk"] is False
        assert data["screening"]["unsteady"] is False

    async def test_caretaker_has_no_own_analytics(self, client, caretaker_headers):
        response = await client.get("/api/users/me/analytics", headers=caretaker_headers)
        assert response.status_code == 403


class TestPatientAnalytics:
    async def test_caretaker_sees_linked_patient(self, client, caretaker_headers, linked_patient):
        await log_falls(client, linked_patient["headers"], [date.today() - timedelta(days=2)])

        response = await client.get(
            f"/api/users/me/patients/{linked_patient['id']}/analytics", headers=caretaker_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["patient"]["id"] == linked_patient["id"]
        assert data["patient"]["email"] == "linked@example.com"
        assert data["riskScore"] == 30
        assert data["riskFactors"]["hasRecentFalls"] is True

    async def test_unlinked_patient_is_not_found(self, client, caretaker_headers, patient_headers):
        patient = (await client.get("/api/users/me", headers=patient_headers)).json()
        response = await client.get(
            f"/api/users/me/patients/{patient['id']}/analytics", headers=caretaker_headers
        )
        assert response.status_code == 404

    async def test_patient_cannot_use_caretaker_view(self, client, linked_patient):
        response = await client.get(
            f"/api/users/me/patients/{linked_patient['id']}/analytics", headers=linked_patient["headers"]
        )
        assert response.status_code == 403
