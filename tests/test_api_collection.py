"""Tests for collection API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from shelfsort.main import app


@pytest.fixture
async def client():
    """Provide an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def collection_payload() -> dict:
    return {
        "items": [
            {
                "id": 13,
                "name": "Catan",
                "min_players": 3,
                "max_players": 4,
                "user_rating": 8.0,
                "average_rating": 7.1,
                "average_weight": 2.3,
                "min_playtime": 60,
                "max_playtime": 120,
                "poll": [
                    {"numplayers": 3, "sort_score": 2.0, "not_recommended_percent": 5},
                    {"numplayers": 4, "sort_score": 3.0, "not_recommended_percent": 2},
                    {"numplayers": "4+", "sort_score": -1.0, "not_recommended_percent": 80},
                ],
            },
            {
                "id": 178900,
                "name": "Codenames",
                "min_players": 2,
                "max_players": 8,
                "average_rating": 7.6,
                "average_weight": 1.3,
                "min_playtime": 15,
                "max_playtime": 15,
                "poll": [
                    {"numplayers": 2, "sort_score": -2.0, "not_recommended_percent": 75},
                    {"numplayers": 4, "sort_score": 2.5, "not_recommended_percent": 3},
                ],
            },
            {
                "id": 926,
                "name": "Catan: Seafarers",
                "type": "boardgameexpansion",
                "min_players": 3,
                "max_players": 4,
                "average_rating": 7.2,
                "average_weight": 2.4,
                "poll": [{"numplayers": 3, "sort_score": 1.0}],
            },
        ]
    }


class TestViewCollection:
    async def test_default_view(self, client: AsyncClient, collection_payload: dict) -> None:
        """Expansions hidden, sorted by name."""
        response = await client.post("/collection/view", json=collection_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["total_items"] == 3
        assert data["shown_items"] == 2
        assert [item["name"] for item in data["items"]] == ["Catan", "Codenames"]

    async def test_invalid_buckets_projected_out(
        self, client: AsyncClient, collection_payload: dict
    ) -> None:
        response = await client.post("/collection/view", json=collection_payload)

        catan = response.json()["items"][0]
        assert [entry["numplayers"] for entry in catan["poll"]] == [3, 4]

    async def test_filters_from_query_string(
        self, client: AsyncClient, collection_payload: dict
    ) -> None:
        response = await client.post(
            "/collection/view?playerCount=4&showExpansions=true", json=collection_payload
        )

        data = response.json()
        assert data["state"]["player_count_range"] == {"min": 4, "max": 4}
        # Score sort: Catan 3.0, Codenames 2.5; the expansion has no 4-player entry
        assert [item["name"] for item in data["items"]] == ["Catan", "Codenames"]

    async def test_annotation_flags(self, client: AsyncClient, collection_payload: dict) -> None:
        response = await client.post(
            "/collection/view?playerCount=3&showInvalid=true", json=collection_payload
        )

        catan = response.json()["items"][0]
        flags = [entry["is_player_count_within_range"] for entry in catan["poll"]]
        assert [entry["numplayers"] for entry in catan["poll"]] == [3, 4, "4+"]
        assert flags == [True, False, False]

    async def test_missing_not_recommended_is_null(
        self, client: AsyncClient, collection_payload: dict
    ) -> None:
        response = await client.post(
            "/collection/view?playerCount=3&showExpansions=true", json=collection_payload
        )

        seafarers = next(i for i in response.json()["items"] if i["id"] == 926)
        assert seafarers["poll"][0]["not_recommended_percent"] is None
        assert seafarers["poll"][0]["player_count_value"] == 3

    async def test_empty_collection(self, client: AsyncClient) -> None:
        response = await client.post("/collection/view", json={"items": []})

        assert response.status_code == 200
        assert response.json()["items"] == []

    async def test_too_large_rejected(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("shelfsort.api.collection.MAX_COLLECTION_ITEMS", 1)
        item = {
            "id": 1,
            "name": "Azul",
            "min_players": 2,
            "max_players": 4,
            "average_rating": 7.8,
            "average_weight": 1.8,
        }

        response = await client.post("/collection/view", json={"items": [item, item]})

        assert response.status_code == 413
        assert response.json()["failure"]["kind"] == "collection_too_large"
