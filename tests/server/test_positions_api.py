"""Integration tests for Position API endpoints."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def position(client: TestClient, position_payload: dict) -> dict:
    response = client.post("/api/v1/positions", json=position_payload)
    assert response.status_code == 201
    return response.json()


class TestCreatePosition:
    """Tests for POST /positions."""

    def test_create_position(self, client: TestClient, position_payload: dict) -> None:
        response = client.post(
            "/api/v1/positions", json={**position_payload, "ticker": "aapl"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["ticker"] == "AAPL"
        assert data["status"] == "OPEN"
        assert data["shares"] == 100
        assert data["sold_date"] is None

    @pytest.mark.parametrize("shares", [150, 99])
    def test_shares_must_be_round_lots(
        self, client: TestClient, position_payload: dict, shares: int
    ) -> None:
        response = client.post(
            "/api/v1/positions", json={**position_payload, "shares": shares}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidArgumentError"

    def test_non_positive_shares_rejected(
        self, client: TestClient, position_payload: dict
    ) -> None:
        response = client.post("/api/v1/positions", json={**position_payload, "shares": 0})

        assert response.status_code == 422


class TestListPositions:
    """Tests for GET /positions."""

    def test_filter_and_order(self, client: TestClient, position_payload: dict) -> None:
        client.post("/api/v1/positions", json={**position_payload, "acquired_date": "2026-01-02"})
        client.post("/api/v1/positions", json={**position_payload, "acquired_date": "2026-02-02"})
        msft = client.post(
            "/api/v1/positions", json={**position_payload, "ticker": "MSFT"}
        ).json()
        client.post(f"/api/v1/positions/{msft['id']}/sell", json={"sold_price": 40000.0})

        aapl = client.get("/api/v1/positions", params={"ticker": "AAPL"}).json()
        assert [p["acquired_date"] for p in aapl] == ["2026-02-02", "2026-01-02"]

        sold = client.get("/api/v1/positions", params={"status": "SOLD"}).json()
        assert [p["id"] for p in sold] == [msft["id"]]


class TestSellPosition:
    """Tests for POST /positions/{id}/sell."""

    def test_sell(self, client: TestClient, position: dict) -> None:
        response = client.post(
            f"/api/v1/positions/{position['id']}/sell",
            json={"sold_price": 16000.0, "sold_date": "2026-02-20"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "SOLD"
        assert data["sold_price"] == 16000.0
        assert data["sold_date"] == "2026-02-20"

    def test_sell_defaults_date(self, client: TestClient, position: dict) -> None:
        response = client.post(
            f"/api/v1/positions/{position['id']}/sell", json={"sold_price": 16000.0}
        )

        assert response.json()["sold_date"] is not None

    def test_sell_twice_conflicts(self, client: TestClient, position: dict) -> None:
        url = f"/api/v1/positions/{position['id']}/sell"
        client.post(url, json={"sold_price": 16000.0})

        response = client.post(url, json={"sold_price": 17000.0})

        assert response.status_code == 409

    def test_sell_missing(self, client: TestClient) -> None:
        response = client.post("/api/v1/positions/missing/sell", json={"sold_price": 1.0})

        assert response.status_code == 404


class TestUpdateDeletePosition:
    """Tests for PATCH and DELETE /positions/{id}."""

    def test_update(self, client: TestClient, position: dict) -> None:
        response = client.patch(
            f"/api/v1/positions/{position['id']}",
            json={"shares": 200, "cost_basis": 29000.0},
        )

        assert response.status_code == 200
        assert response.json()["shares"] == 200
        assert response.json()["cost_basis"] == 29000.0

    def test_update_revalidates_shares(self, client: TestClient, position: dict) -> None:
        response = client.patch(
            f"/api/v1/positions/{position['id']}", json={"shares": 250}
        )

        assert response.status_code == 400
        assert client.get(f"/api/v1/positions/{position['id']}").json()["shares"] == 100

    def test_delete_keeps_trade_link(
        self, client: TestClient, position: dict, trade_payload: dict
    ) -> None:
        trade = client.post("/api/v1/trades", json=trade_payload).json()
        client.post(
            f"/api/v1/trades/{trade['id']}/assign", json={"position_id": position["id"]}
        )

        response = client.delete(f"/api/v1/positions/{position['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/v1/positions/{position['id']}").status_code == 404
        assert client.get(f"/api/v1/trades/{trade['id']}").json()["position_id"] == position["id"]

    def test_delete_missing(self, client: TestClient) -> None:
        assert client.delete("/api/v1/positions/missing").status_code == 404


class TestAllocation:
    """Tests for GET /positions/allocation."""

    def test_allocation_for_ticker(
        self, client: TestClient, position_payload: dict, trade_payload: dict
    ) -> None:
        client.post(
            "/api/v1/positions",
            json={**position_payload, "shares": 300, "cost_basis": 45000.0},
        )
        client.post(
            "/api/v1/trades",
            json={**trade_payload, "option_type": "CALL", "strike": 160.0, "quantity": 2},
        )

        response = client.get("/api/v1/positions/allocation", params={"ticker": "aapl"})

        assert response.status_code == 200
        [allocation] = response.json()
        assert allocation["ticker"] == "AAPL"
        assert allocation["total_shares"] == 300
        assert allocation["allocated_shares"] == 200
        assert allocation["unallocated_shares"] == 100
        assert allocation["unallocated_lots"] == 1.0

    def test_allocation_for_all_tickers(
        self, client: TestClient, position_payload: dict, trade_payload: dict
    ) -> None:
        client.post("/api/v1/positions", json=position_payload)
        client.post("/api/v1/trades", json={**trade_payload, "ticker": "MSFT"})

        response = client.get("/api/v1/positions/allocation")

        assert [a["ticker"] for a in response.json()] == ["AAPL", "MSFT"]
        assert response.json()[1]["total_shares"] == 0


class TestPositionUnrealizedPnl:
    """Tests for GET /positions/{id}/unrealized-pnl."""

    def test_with_price(self, client: TestClient, position: dict) -> None:
        client.post("/api/v1/prices", json={"ticker": "AAPL", "stock_price": 160.0})

        response = client.get(f"/api/v1/positions/{position['id']}/unrealized-pnl")

        assert response.status_code == 200
        assert response.json()["unrealized_pnl"] == pytest.approx(1000.0)

    def test_without_stock_price(self, client: TestClient, position: dict) -> None:
        client.post("/api/v1/prices", json={"ticker": "AAPL", "option_price": 1.0})

        response = client.get(f"/api/v1/positions/{position['id']}/unrealized-pnl")

        assert response.json()["unrealized_pnl"] == 0.0
