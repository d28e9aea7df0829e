"""Integration tests for Trade API endpoints.

Tests trade creation, lifecycle transitions, corrections, deletes and
error handling.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from wheeltracker.server.database.models.trade import Trade


@pytest.fixture
def open_trade(client: TestClient, trade_payload: dict) -> dict:
    """Create an OPEN trade and return its JSON."""
    response = client.post("/api/v1/trades", json=trade_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def position(client: TestClient, position_payload: dict) -> dict:
    """Create an OPEN position and return its JSON."""
    response = client.post("/api/v1/positions", json=position_payload)
    assert response.status_code == 201
    return response.json()


class TestCreateTrade:
    """Tests for POST /trades."""

    def test_create_trade(self, client: TestClient, trade_payload: dict) -> None:
        """New trades are OPEN, upper-cased and default to SELL_TO_OPEN."""
        response = client.post("/api/v1/trades", json=trade_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["ticker"] == "AAPL"
        assert data["status"] == "OPEN"
        assert data["action"] == "SELL_TO_OPEN"
        assert data["close_date"] is None
        assert data["open_date"] is not None
        assert len(data["id"]) == 36

    def test_create_trade_with_open_date(self, client: TestClient, trade_payload: dict) -> None:
        trade_payload["open_date"] = "2026-01-05T10:30:00"

        response = client.post("/api/v1/trades", json=trade_payload)

        assert response.status_code == 201
        assert response.json()["open_date"].startswith("2026-01-05T10:30:00")

    def test_offset_open_date_stored_as_utc(
        self, client: TestClient, trade_payload: dict, test_db
    ) -> None:
        """Offset timestamps are converted to naive UTC before storage."""
        trade_payload["open_date"] = "2026-01-01T00:00:00-05:00"

        response = client.post("/api/v1/trades", json=trade_payload)

        assert response.status_code == 201
        stored = test_db.get(Trade, response.json()["id"])
        assert stored.open_date == datetime(2026, 1, 1, 5, 0, 0)
        assert stored.open_date.tzinfo is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("quantity", 0),
            ("strike", 0),
            ("strike", -5),
            ("premium", -1),
            ("option_type", "STRADDLE"),
            ("expiration", "03/20/2026"),
            ("ticker", "  "),
        ],
    )
    def test_create_trade_validation(
        self, client: TestClient, trade_payload: dict, field: str, value
    ) -> None:
        """Malformed bodies are rejected before reaching the service."""
        trade_payload[field] = value

        response = client.post("/api/v1/trades", json=trade_payload)

        assert response.status_code == 422

    def test_lowercase_enums_accepted(self, client: TestClient, trade_payload: dict) -> None:
        trade_payload["option_type"] = "call"
        trade_payload["action"] = "buy_to_open"

        response = client.post("/api/v1/trades", json=trade_payload)

        assert response.status_code == 201
        assert response.json()["option_type"] == "CALL"
        assert response.json()["action"] == "BUY_TO_OPEN"


class TestListTrades:
    """Tests for GET /trades."""

    def test_filters(self, client: TestClient, trade_payload: dict) -> None:
        client.post("/api/v1/trades", json=trade_payload)
        client.post("/api/v1/trades", json={**trade_payload, "ticker": "MSFT"})
        closed = client.post("/api/v1/trades", json=trade_payload).json()
        client.post(f"/api/v1/trades/{closed['id']}/close", json={"close_premium": 0.5})

        assert len(client.get("/api/v1/trades").json()) == 3
        assert len(client.get("/api/v1/trades", params={"ticker": "aapl"}).json()) == 2
        open_aapl = client.get(
            "/api/v1/trades", params={"ticker": "AAPL", "status": "OPEN"}
        ).json()
        assert len(open_aapl) == 1
        assert open_aapl[0]["id"] != closed["id"]

    def test_ordered_by_open_date_desc(self, client: TestClient, trade_payload: dict) -> None:
        for day in ("2026-01-02", "2026-01-09", "2026-01-05"):
            client.post(
                "/api/v1/trades", json={**trade_payload, "open_date": f"{day}T09:30:00"}
            )

        dates = [t["open_date"][:10] for t in client.get("/api/v1/trades").json()]

        assert dates == ["2026-01-09", "2026-01-05", "2026-01-02"]


class TestGetTrade:
    """Tests for GET /trades/{id}."""

    def test_get_trade(self, client: TestClient, open_trade: dict) -> None:
        response = client.get(f"/api/v1/trades/{open_trade['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == open_trade["id"]

    def test_missing_trade(self, client: TestClient) -> None:
        response = client.get("/api/v1/trades/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "NotFoundError"
        assert "does-not-exist" in data["message"]


class TestCloseTrade:
    """Tests for buyback, expiration and assignment."""

    def test_buyback(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/close", json={"close_premium": 0.50}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "CLOSED"
        assert data["close_method"] == "BUYBACK"
        assert data["close_premium"] == 0.50
        assert data["close_date"] is not None

    def test_close_twice_conflicts(self, client: TestClient, open_trade: dict) -> None:
        """Terminal trades cannot be closed again."""
        url = f"/api/v1/trades/{open_trade['id']}/close"
        client.post(url, json={"close_premium": 0.50})

        response = client.post(url, json={"close_premium": 0.25})

        assert response.status_code == 409
        assert response.json()["error"] == "InvalidStateError"

    def test_close_missing_trade(self, client: TestClient) -> None:
        response = client.post("/api/v1/trades/nope/close", json={"close_premium": 1.0})

        assert response.status_code == 404

    def test_expire_forces_zero_close_premium(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/close-with-method",
            json={"method": "EXPIRED", "close_premium": 1.25},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "EXPIRED"
        assert data["close_method"] == "EXPIRED"
        assert data["close_premium"] == 0.0

    def test_buyback_method_requires_premium(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/close-with-method",
            json={"method": "BUYBACK"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidArgumentError"

    def test_roll_method_rejected(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/close-with-method",
            json={"method": "ROLL"},
        )

        assert response.status_code == 400
        assert client.get(f"/api/v1/trades/{open_trade['id']}").json()["status"] == "OPEN"

    def test_assign_with_method(
        self, client: TestClient, open_trade: dict, position: dict
    ) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/close-with-method",
            json={"method": "ASSIGNED", "position_id": position["id"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ASSIGNED"
        assert data["close_method"] == "ASSIGNED"
        assert data["position_id"] == position["id"]

    def test_assign_requires_position(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/close-with-method",
            json={"method": "ASSIGNED"},
        )

        assert response.status_code == 400

    def test_assign_unknown_position(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/assign",
            json={"position_id": "missing-position"},
        )

        assert response.status_code == 404
        assert client.get(f"/api/v1/trades/{open_trade['id']}").json()["status"] == "OPEN"

    def test_assign_endpoint(self, client: TestClient, open_trade: dict, position: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/assign",
            json={"position_id": position["id"]},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "ASSIGNED"


class TestRollTrade:
    """Tests for POST /trades/{id}/roll."""

    def test_roll_links_both_trades(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/roll",
            json={"strike": 145.0, "expiration": "2026-04-17", "premium": 1.80},
        )

        assert response.status_code == 201
        data = response.json()
        old, new = data["rolled_trade"], data["new_trade"]

        assert old["status"] == "ROLLED"
        assert old["close_method"] == "ROLL"
        assert old["close_date"] is not None
        assert old["rolled_to_trade_id"] == new["id"]

        assert new["status"] == "OPEN"
        assert new["rolled_from_trade_id"] == old["id"]
        assert new["ticker"] == "AAPL"
        assert new["option_type"] == "PUT"
        assert new["quantity"] == 1
        assert new["strike"] == 145.0

    def test_roll_overrides(self, client: TestClient, open_trade: dict) -> None:
        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/roll",
            json={
                "strike": 155.0,
                "expiration": "2026-04-17",
                "premium": 3.10,
                "quantity": 2,
                "notes": "rolled up and out",
            },
        )

        new = response.json()["new_trade"]
        assert new["quantity"] == 2
        assert new["notes"] == "rolled up and out"

    def test_roll_closed_trade_conflicts(self, client: TestClient, open_trade: dict) -> None:
        client.post(f"/api/v1/trades/{open_trade['id']}/close", json={"close_premium": 0.1})

        response = client.post(
            f"/api/v1/trades/{open_trade['id']}/roll",
            json={"strike": 145.0, "expiration": "2026-04-17", "premium": 1.80},
        )

        assert response.status_code == 409
        assert len(client.get("/api/v1/trades").json()) == 1

    def test_roll_missing_trade(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/trades/missing/roll",
            json={"strike": 145.0, "expiration": "2026-04-17", "premium": 1.80},
        )

        assert response.status_code == 404


class TestUpdateTrade:
    """Tests for PATCH /trades/{id}."""

    def test_partial_update(self, client: TestClient, open_trade: dict) -> None:
        response = client.patch(
            f"/api/v1/trades/{open_trade['id']}",
            json={"premium": 2.75, "notes": "fill corrected"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["premium"] == 2.75
        assert data["notes"] == "fill corrected"
        assert data["strike"] == open_trade["strike"]

    def test_offset_close_date_stored_as_utc(
        self, client: TestClient, open_trade: dict, test_db
    ) -> None:
        response = client.patch(
            f"/api/v1/trades/{open_trade['id']}",
            json={"close_date": "2026-02-01T23:30:00+02:00"},
        )

        assert response.status_code == 200
        stored = test_db.get(Trade, open_trade["id"])
        assert stored.close_date == datetime(2026, 2, 1, 21, 30, 0)

    def test_update_bypasses_state_machine(self, client: TestClient, open_trade: dict) -> None:
        """Corrections may move a closed trade back to OPEN."""
        trade_id = open_trade["id"]
        client.post(f"/api/v1/trades/{trade_id}/close", json={"close_premium": 0.5})

        response = client.patch(
            f"/api/v1/trades/{trade_id}",
            json={"status": "OPEN", "close_date": None, "close_method": None},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OPEN"
        assert data["close_date"] is None
        assert data["close_method"] is None

    def test_update_refreshes_updated_at(self, client: TestClient, open_trade: dict) -> None:
        before = datetime.fromisoformat(open_trade["updated_at"])

        data = client.patch(f"/api/v1/trades/{open_trade['id']}", json={}).json()

        assert datetime.fromisoformat(data["updated_at"]) >= before

    def test_update_missing_trade(self, client: TestClient) -> None:
        response = client.patch("/api/v1/trades/missing", json={"premium": 1.0})

        assert response.status_code == 404


class TestDeleteTrade:
    """Tests for DELETE /trades/{id}."""

    def test_delete_any_status(self, client: TestClient, open_trade: dict, test_db) -> None:
        trade_id = open_trade["id"]
        client.post(f"/api/v1/trades/{trade_id}/close", json={"close_premium": 0.5})

        response = client.delete(f"/api/v1/trades/{trade_id}")

        assert response.status_code == 204
        assert test_db.query(Trade).filter(Trade.id == trade_id).first() is None

    def test_delete_leaves_roll_partner_link(self, client: TestClient, open_trade: dict) -> None:
        """Deleting one side of a roll keeps the other side's reference."""
        rolled = client.post(
            f"/api/v1/trades/{open_trade['id']}/roll",
            json={"strike": 145.0, "expiration": "2026-04-17", "premium": 1.80},
        ).json()
        new_id = rolled["new_trade"]["id"]

        client.delete(f"/api/v1/trades/{open_trade['id']}")

        survivor = client.get(f"/api/v1/trades/{new_id}").json()
        assert survivor["rolled_from_trade_id"] == open_trade["id"]

    def test_delete_missing_trade(self, client: TestClient) -> None:
        response = client.delete("/api/v1/trades/missing")

        assert response.status_code == 404


class TestTradeUnrealizedPnl:
    """Tests for GET /trades/{id}/unrealized-pnl."""

    def test_without_price(self, client: TestClient, open_trade: dict) -> None:
        response = client.get(f"/api/v1/trades/{open_trade['id']}/unrealized-pnl")

        assert response.status_code == 200
        assert response.json()["unrealized_pnl"] == 0.0

    def test_with_price(self, client: TestClient, open_trade: dict) -> None:
        client.post("/api/v1/prices", json={"ticker": "AAPL", "option_price": 1.0})

        response = client.get(f"/api/v1/trades/{open_trade['id']}/unrealized-pnl")

        data = response.json()
        assert data["ticker"] == "AAPL"
        assert data["unrealized_pnl"] == pytest.approx(150.0)

    def test_missing_trade(self, client: TestClient) -> None:
        response = client.get("/api/v1/trades/missing/unrealized-pnl")

        assert response.status_code == 404
