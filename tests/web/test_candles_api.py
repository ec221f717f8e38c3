"""
Tests for the candles API endpoints.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from candle_space_web.db.models import Candle

API = "/api/v1/candles"


@pytest.mark.asyncio
class TestCreateCandles:
    """Tests for POST /candles."""

    async def test_create_returns_rows_with_ids(self, client) -> None:
        response = await client.post(API, json=[{"x": 620, "y": 540}])

        assert response.status_code == 201
        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["id"] >= 1
        assert rows[0]["x"] == 620
        assert rows[0]["note"] == ""
        assert rows[0]["country_code"] == ""
        assert rows[0]["style"] is None
        assert rows[0]["created_at"].endswith("Z") or rows[0]["created_at"].endswith("+00:00")

    async def test_create_batch(self, client) -> None:
        response = await client.post(API, json=[{"x": 1, "y": 1}, {"x": 2, "y": 2, "style": "tall"}])

        rows = response.json()
        assert [row["x"] for row in rows] == [1, 2]
        assert rows[1]["style"] == "tall"
        assert rows[0]["id"] != rows[1]["id"]

    async def test_empty_batch_rejected(self, client) -> None:
        response = await client.post(API, json=[])

        assert response.status_code == 422

    @pytest.mark.parametrize(
        "row",
        [
            {"x": -1, "y": 10},
            {"x": 3001, "y": 10},
            {"x": 10, "y": 10, "note": "n" * 201},
            {"x": 10, "y": 10, "style": "glitter"},
            {"x": 10, "y": 10, "id": 5},
        ],
    )
    async def test_invalid_rows_rejected(self, client, row) -> None:
        response = await client.post(API, json=[{"x": 5, "y": 5}, row])

        assert response.status_code == 422
        # Whole batch or nothing
        assert (await client.get(API)).json() == []


@pytest.mark.asyncio
class TestListCandles:
    """Tests for GET /candles."""

    async def test_ordered_by_created_at(self, client, test_session) -> None:
        base = datetime(2024, 1, 15, 12, 0)
        test_session.add_all(
            [
                Candle(x=1, y=1, created_at=base + timedelta(hours=2)),
                Candle(x=2, y=2, created_at=base),
                Candle(x=3, y=3, created_at=base + timedelta(hours=1)),
            ]
        )
        await test_session.commit()

        rows = (await client.get(API)).json()

        assert [row["x"] for row in rows] == [2, 3, 1]

    async def test_since_filters(self, client, test_session) -> None:
        base = datetime(2024, 1, 15, 12, 0)
        test_session.add_all([Candle(x=1, y=1, created_at=base), Candle(x=2, y=2, created_at=base + timedelta(days=2))])
        await test_session.commit()

        response = await client.get(API, params={"since": "2024-01-16T12:00:00+00:00"})

        assert [row["x"] for row in response.json()] == [2]

    async def test_empty(self, client) -> None:
        response = await client.get(API)

        assert response.status_code == 200
        assert response.json() == []


@pytest.mark.asyncio
class TestUpdateCandle:
    """Tests for PATCH /candles/{id}."""

    async def test_update_note_and_country(self, client) -> None:
        created = (await client.post(API, json=[{"x": 10, "y": 20}])).json()[0]

        response = await client.patch(f"{API}/{created['id']}", json={"note": "Peace", "country_code": "PT"})

        assert response.status_code == 200
        body = response.json()
        assert (body["note"], body["country_code"]) == ("Peace", "PT")
        assert (body["x"], body["y"]) == (10, 20)
        assert body["created_at"] == created["created_at"]

    async def test_partial_update_keeps_other_field(self, client) -> None:
        created = (await client.post(API, json=[{"x": 10, "y": 20}])).json()[0]
        await client.patch(f"{API}/{created['id']}", json={"country_code": "JP"})

        body = (await client.patch(f"{API}/{created['id']}", json={"note": "later"})).json()

        assert (body["note"], body["country_code"]) == ("later", "JP")

    async def test_last_writer_wins(self, client) -> None:
        created = (await client.post(API, json=[{"x": 10, "y": 20}])).json()[0]

        await client.patch(f"{API}/{created['id']}", json={"note": "first"})
        await client.patch(f"{API}/{created['id']}", json={"note": "second"})

        assert (await client.get(API)).json()[0]["note"] == "second"

    async def test_position_cannot_change(self, client) -> None:
        created = (await client.post(API, json=[{"x": 10, "y": 20}])).json()[0]

        response = await client.patch(f"{API}/{created['id']}", json={"x": 99})

        assert response.status_code == 422

    async def test_missing_candle(self, client) -> None:
        response = await client.patch(f"{API}/999", json={"note": "x"})

        assert response.status_code == 404


@pytest.mark.asyncio
class TestHealth:
    async def test_health(self, client) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
