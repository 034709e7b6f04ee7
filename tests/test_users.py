from tests.conftest import register


class TestReferralCode:
    async def test_patient_cannot_read_referral_code(self, client, patient_headers):
        response = await client.get("/api/users/me/referral-code", headers=patient_headers)
        assert response.status_code == 403

    async def test_update_referral_code_is_normalized(self, client, caretaker_headers):
        response = await client.put(
            "/api/users/me/referral-code",
            json={"referralCode": "  grandma7 "},
            headers=caretaker_headers,
        )
        assert response.status_code == 200
        assert response.json()["referralCode"] == "GRANDMA7"

        current = await client.get("/api/users/me/referral-code", headers=caretaker_headers)
        assert current.json()["referralCode"] == "GRANDMA7"

    async def test_referral_codes_are_unique(self, client, caretaker_headers):
        other = await register(client, "other-caretaker@example.com", "caretaker")
        taken = (await client.get("/api/users/me/referral-code", headers=other)).json()["referralCode"]

        response = await client.put(
            "/api/users/me/referral-code",
            json={"referralCode": taken.lower()},
            headers=caretaker_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Referral code is already in use."

    async def test_generated_codes_differ(self, client):
        codes = set()
        for i in range(5):
            headers = await register(client, f"c{i}@example.com", "caretaker")
            codes.add((await client.get("/api/users/me/referral-code", headers=headers)).json()["referralCode"])
        assert len(codes) == 5

    async def test_keeping_own_code_is_allowed(self, client, caretaker_headers):
        code = (await client.get("/api/users/me/referral-code", headers=caretaker_headers)).json()["referralCode"]
        response = await client.put(
            "/api/users/me/referral-code", json={"referralCode": code}, headers=caretaker_headers
        )
        assert response.status_code == 200

    async def test_invalid_referral_code_format(self, client, caretaker_headers):
        for bad in ["", "ab", "has space", "WAYTOOLONGCODE123", "bad-char"]:
            response = await client.put(
                "/api/users/me/referral-code", json={"referralCode": bad}, headers=caretaker_headers
            )
            assert response.status_code == 400, bad


class TestLinking:
    async def test_link_caretaker(self, client, caretaker_headers, patient_headers):
        caretaker = (await client.get("/api/users/me", headers=caretaker_headers)).json()

        response = await client.put(
            "/api/users/me/link-caretaker",
            json={"referralCode": caretaker["referralCode"].lower()},
            headers=patient_headers,
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully linked to caretaker."

        me = (await client.get("/api/users/me", headers=patient_headers)).json()
        assert me["caretakerId"] == caretaker["id"]

    async def test_link_requires_code(self, client, patient_headers):
        response = await client.put("/api/users/me/link-caretaker", json={}, headers=patient_headers)
        assert response.status_code == 400

    async def test_link_unknown_code(self, client, patient_headers):
        response = await client.put(
            "/api/users/me/link-caretaker", json={"referralCode": "ZZZZZZ"}, headers=patient_headers
        )
        assert response.status_code == 404

    async def test_caretaker_cannot_link(self, client, caretaker_headers):
        response = await client.put(
            "/api/users/me/link-caretaker", json={"referralCode": "ZZZZZZ"}, headers=caretaker_headers
        )
        assert response.status_code == 403

    async def test_register_with_referral_code_links(self, client, caretaker_headers, linked_patient):
        caretaker = (await client.get("/api/users/me", headers=caretaker_headers)).json()
        me = (await client.get("/api/users/me", headers=linked_patient["headers"])).json()
        assert me["caretakerId"] == caretaker["id"]


class TestCaretakerView:
    async def test_list_patients(self, client, caretaker_headers, linked_patient, patient_headers):
        response = await client.get("/api/users/me/patients", headers=caretaker_headers)
        assert response.status_code == 200
        patients = response.json()["patients"]
        assert [p["id"] for p in patients] == [linked_patient["id"]]
        assert patients[0]["email"] == "linked@example.com"
        assert "password_hash" not in patients[0]

    async def test_patient_cannot_list_patients(self, client, patient_headers):
        response = await client.get("/api/users/me/patients", headers=patient_headers)
        assert response.status_code == 403

    async def test_patient_details(self, client, caretaker_headers, linked_patient):
        headers = linked_patient["headers"]
        await client.post(
            "/api/screening",
            json={"unsteady": True, "worries": False, "fallen": False},
            headers=headers,
        )
        await client.post("/api/falls", json={"fall_date": "2024-01-02", "location": "Kitchen"}, headers=headers)

        response = await client.get(f"/api/users/me/patients/{linked_patient['id']}", headers=caretaker_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["patient"]["id"] == linked_patient["id"]
        assert len(data["screenings"]) == 1
        assert data["screenings"][0]["unsteady"] is True
        assert len(data["falls"]) == 1
        assert data["falls"][0]["location"] == "Kitchen"

    async def test_unlinked_patient_is_not_found(self, client, caretaker_headers, patient_headers):
        patient = (await client.get("/api/users/me", headers=patient_headers)).json()

        response = await client.get(f"/api/users/me/patients/{patient['id']}", headers=caretaker_headers)
        assert response.status_code == 404

    async def test_other_caretakers_patient_is_not_found(self, client, linked_patient):
        other = await register(client, "other-caretaker@example.com", "caretaker")

        response = await client.get(f"/api/users/me/patients/{linked_patient['id']}", headers=other)
        assert response.status_code == 404
