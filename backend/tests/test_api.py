import pytest
from fastapi.testclient import TestClient

from nseticker.api.v1.endpoints import market
from nseticker.main import app
from nseticker.services.market_data.symbols import SYMBOL_UNIVERSE


@pytest.fixture
def client(service):
    app.dependency_overrides[market.get_market_data_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_symbols(client):
    resp = client.get("/api/v1/market/symbols")
    assert resp.status_code == 200
    assert [s["symbol"] for s in resp.json()] == list(SYMBOL_UNIVERSE)


def test_quote(client):
    resp = client.get("/api/v1/market/quote/tatasteel")
    assert resp.status_code == 200

    body = resp.json()
    assert body["symbol"] == "TATASTEEL"
    assert body["price"] == 120.0
    assert body["rsi"] == 61.25
    assert body["is_synthetic"] is False


def test_unknown_symbol_is_404(client):
    resp = client.get("/api/v1/market/quote/RELIANCE")
    assert resp.status_code == 404


def test_unknown_symbol_allowed_by_setting(client, transport, monkeypatch):
    monkeypatch.setattr(market.settings, "allow_unknown_symbols", True)
    transport.fail_symbols.add("RELIANCE")

    resp = client.get("/api/v1/market/quote/RELIANCE")
    assert resp.status_code == 200
    assert resp.json()["is_synthetic"] is True


def test_quotes_batch(client):
    resp = client.get("/api/v1/market/quotes", params={"symbols": "HDFCBANK, NIFTY50"})
    assert resp.status_code == 200
    assert [q["symbol"] for q in resp.json()["quotes"]] == ["HDFCBANK", "NIFTY50"]


def test_quotes_default_to_universe(client):
    resp = client.get("/api/v1/market/quotes")
    assert len(resp.json()["quotes"]) == len(SYMBOL_UNIVERSE)


def test_chart(client):
    resp = client.get("/api/v1/market/chart/HDFCBANK", params={"interval": 10})
    assert resp.status_code == 200

    body = resp.json()
    assert body["interval_minutes"] == 10
    assert body["granularity"] == 15
    assert 0 < len(body["points"]) <= 50


def test_chart_rejects_bad_interval(client):
    resp = client.get("/api/v1/market/chart/HDFCBANK", params={"interval": 0})
    assert resp.status_code == 422


def test_credential_roundtrip(client, service):
    assert client.get("/api/v1/market/credential").json() == {"configured": True}

    resp = client.put("/api/v1/market/credential", json={"api_key": ""})
    assert resp.json() == {"configured": False}
    assert service.get_credential() is None

    resp = client.put("/api/v1/market/credential", json={"api_key": "new-key"})
    assert resp.json() == {"configured": True}
    assert service.get_credential() == "new-key"
