from datetime import date

import pytest

import fund_board.domain.services.history_engine as history_engine_module
from fund_board.infrastructure.db.database import get_db


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history_empty_database(client):
    resp = await client.get("/api/history")

    assert resp.status_code == 200
    assert resp.json() == {
        "data": [],
        "stats": {
            "maxDrawdown": "0.00",
            "maxDrawdownStart": "",
            "maxDrawdownEnd": "",
            "periodReturn": "0.00",
            "dataPoints": 0,
        },
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history_drawdown_then_recovery(client, add_fund, add_navs):
    await add_fund("000001", "1.0", "100")
    await add_navs("000001", [
        ("2024-01-01", "1.0000"),
        ("2024-01-02", "1.5000"),
        ("2024-01-03", "1.0000"),
        ("2024-01-04", "1.3000"),
    ])

    resp = await client.get("/api/history", params={"period": "all"})

    assert resp.status_code == 200
    body = resp.json()
    assert [p["totalValue"] for p in body["data"]] == ["100.00", "150.00", "100.00", "130.00"]
    assert [p["totalCost"] for p in body["data"]] == ["100.00"] * 4
    assert [p["profit"] for p in body["data"]] == ["0.00", "50.00", "0.00", "30.00"]
    assert body["data"][1] == {
        "date": "2024-01-02",
        "totalValue": "150.00",
        "totalCost": "100.00",
        "profit": "50.00",
        "nav": 1.5,
    }
    assert body["stats"] == {
        "maxDrawdown": "33.33",
        "maxDrawdownStart": "2024-01-02",
        "maxDrawdownEnd": "2024-01-03",
        "periodReturn": "30.00",
        "dataPoints": 4,
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history_fund_code_filter(client, add_fund, add_navs):
    await add_fund("000001", "1.0", "100")
    await add_fund("000002", "2.0", "10")
    await add_navs("000001", [("2024-01-01", "1.0000"), ("2024-01-02", "1.1000")])
    await add_navs("000002", [("2024-01-01", "2.0000"), ("2024-01-02", "1.5000")])

    combined = (await client.get("/api/history")).json()
    assert [p["totalValue"] for p in combined["data"]] == ["120.00", "125.00"]

    single = (await client.get("/api/history", params={"fundCode": "000002"})).json()
    assert [p["totalValue"] for p in single["data"]] == ["20.00", "15.00"]
    assert single["stats"]["periodReturn"] == "-25.00"
    assert single["stats"]["maxDrawdown"] == "25.00"

    missing = (await client.get("/api/history", params={"fundCode": "999999"})).json()
    assert missing["data"] == []
    assert missing["stats"]["dataPoints"] == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history_period_window(client, add_fund, add_navs, monkeypatch):
    monkeypatch.setattr(history_engine_module, "today_market", lambda: date(2024, 3, 31))
    await add_fund("000001", "1.0", "100")
    await add_navs("000001", [
        ("2022-05-10", "0.8000"),
        ("2023-06-01", "0.9000"),
        ("2024-02-28", "1.0000"),
        ("2024-02-29", "1.1000"),
        ("2024-03-29", "1.2000"),
    ])

    one_month = (await client.get("/api/history", params={"period": "1m"})).json()
    assert [p["date"] for p in one_month["data"]] == ["2024-02-29", "2024-03-29"]

    one_year = (await client.get("/api/history", params={"period": "1y"})).json()
    assert one_year["stats"]["dataPoints"] == 4

    unknown = (await client.get("/api/history", params={"period": "bogus"})).json()
    assert unknown["stats"]["dataPoints"] == 5


@pytest.mark.asyncio
@pytest.mark.integration
async def test_stats_uses_latest_nav(client, add_fund, add_navs):
    await add_fund("000001", "1.0", "100")
    await add_fund("000002", "2.0", "50")
    await add_fund("000003", "1.0", "100")
    await add_navs("000001", [("2024-01-01", "1.0000"), ("2024-01-02", "1.2000")])
    await add_navs("000003", [("2024-01-02", "0.9000")])

    resp = await client.get("/api/stats")

    assert resp.status_code == 200
    assert resp.json() == {
        "totalCost": "300.00",
        "totalValue": "310.00",
        "totalProfit": "10.00",
        "totalProfitRate": "3.33",
        "fundCount": 3,
        "profitCount": 2,
        "lossCount": 1,
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_stats_empty(client):
    resp = await client.get("/api/stats")

    assert resp.status_code == 200
    body = resp.json()
    assert body["totalCost"] == "0.00"
    assert body["totalProfitRate"] == "0.00"
    assert body["fundCount"] == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_funds_list(client, add_fund, add_navs):
    await add_fund("000001", "1.0", "100", fund_name="Growth", note="core")
    await add_fund("000002", "2.0", "50")
    await add_navs("000001", [("2024-01-01", "1.0000"), ("2024-01-02", "1.2000", "20.0000")])

    resp = await client.get("/api/funds")

    assert resp.status_code == 200
    funds = resp.json()
    assert [f["fundCode"] for f in funds] == ["000001", "000002"]

    first = funds[0]
    assert first["fundName"] == "Growth"
    assert first["note"] == "core"
    assert first["nav"] == 1.2
    assert first["dailyChange"] == 20.0
    assert first["currentValue"] == "120.00"
    assert first["profit"] == "20.00"
    assert first["profitRate"] == "20.00"
    assert first["lastUpdateDate"] == "2024-01-02"
    assert first["createdAt"]
    assert first["updatedAt"]
    date.fromisoformat(first["createdAt"][:10])

    second = funds[1]
    assert second["nav"] == 0.0
    assert second["currentValue"] == "100.00"
    assert second["lastUpdateDate"] is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_health_and_ready(client):
    assert (await client.get("/health")).json() == {"status": "ok"}

    ready = await client.get("/ready")
    assert ready.status_code == 200
    assert ready.json() == {"status": "ready", "db_connected": True}


class _FailingSession:
    """Session stand-in whose queries fail like a locked database"""

    async def execute(self, *args, **kwargs):
        raise RuntimeError("database is locked")


@pytest.fixture()
def failing_db(app):
    async def override_get_db():
        yield _FailingSession()

    app.dependency_overrides[get_db] = override_get_db


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize("path", ["/api/history", "/api/stats", "/api/funds"])
async def test_invalid_stored_holding_is_server_error(client, add_fund, path):
    await add_fund("000001", "1.0", "-5")

    resp = await client.get(path)

    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert detail.startswith("Invalid stored data:")
    assert "shares" in detail
    assert "cannot be negative" in detail


@pytest.mark.asyncio
@pytest.mark.integration
async def test_negative_stored_nav_is_server_error(client, add_fund, add_navs):
    await add_fund("000001", "1.0", "100")
    await add_navs("000001", [("2024-01-01", "-0.1000"), ("2024-01-02", "-0.0500")])

    resp = await client.get("/api/history")

    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Invalid stored data: nav=")


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "path, prefix",
    [
        ("/api/history", "Failed to fetch history:"),
        ("/api/stats", "Failed to fetch stats:"),
        ("/api/funds", "Failed to fetch funds:"),
    ],
)
async def test_store_failure_is_server_error(client, failing_db, path, prefix):
    resp = await client.get(path)

    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert detail.startswith(prefix)
    assert "database is locked" in detail
