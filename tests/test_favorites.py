from services.locations import TAI_CHI_LOCATIONS


class TestLocations:
    async def test_list_locations(self, client, patient_headers):
        response = await client.get("/api/tai-chi/locations", headers=patient_headers)
        assert response.status_code == 200
        locations = response.json()["locations"]
        assert [loc["id"] for loc in locations] == [loc.id for loc in TAI_CHI_LOCATIONS]
        assert {"title", "description", "latitude", "longitude"} <= set(locations[0])


class TestFavorites:
    async def test_no_favorites_initially(self, client, patient_headers):
        response = await client.get("/api/tai-chi/favorites", headers=patient_headers)
        assert response.status_code == 200
        assert response.json()["favoriteIds"] == []

    async def test_add_is_idempotent(self, client, patient_headers):
        for _ in range(2):
            response = await client.post("/api/tai-chi/favorites/2", headers=patient_headers)
            assert response.status_code == 200

        ids = (await client.get("/api/tai-chi/favorites", headers=patient_headers)).json()["favoriteIds"]
        assert ids == [2]

    async def test_remove_favorite(self, client, patient_headers):
        await client.post("/api/tai-chi/favorites/1", headers=patient_headers)
        await client.post("/api/tai-chi/favorites/3", headers=patient_headers)

        response = await client.delete("/api/tai-chi/favorites/1", headers=patient_headers)
        assert response.status_code == 200

        ids = (await client.get("/api/tai-chi/favorites", headers=patient_headers)).json()["favoriteIds"]
        assert ids == [3]

    async def test_removing_missing_favorite_succeeds(self, client, patient_headers):
        response = await client.delete("/api/tai-chi/favorites/2", headers=patient_headers)
        assert response.status_code == 200

    async def test_unknown_location(self, client, patient_headers):
        response = await client.post("/api/tai-chi/favorites/999", headers=patient_headers)
        assert response.status_code == 404

    async def test_favorites_are_per_user(self, client, patient_headers, caretaker_headers):
        await client.post("/api/tai-chi/favorites/1", headers=patient_headers)

        ids = (await client.get("/api/tai-chi/favorites", headers=caretaker_headers)).json()["favoriteIds"]
        assert ids == []
