"""HTTP API tests against an in-memory ledger."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from betledger.api import server
from betledger.db.models import Base, Bet, ParlayBet

PASSWORD = "letmein"


def _memory_sessionmaker(create_tables: bool = True) -> sessionmaker:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_tables:
        Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


def _seed(factory: sessionmaker) -> None:
    with factory() as session:
        session.add_all(
            [
                Bet(date="2024-05-01", bet="Lakers ML", stake="$100.00", odds="+150", to_win="$150.00", bet_type="moneyline", result="win", balance="$150.00"),
                Bet(date="2024-05-02", bet="Celtics -3.5", stake="$50.00", odds="-200", to_win="$25.00", bet_type="spread", result="Loss", balance="-$50.00"),
                Bet(date="2024-05-03", bet="Sunday parlay", stake="$20.00", odds="+600", to_win="$120.00", bet_type="parlay", result="win", balance="$120.00"),
                Bet(date="2024-04-30", bet="Deposit", bet_type="deposit", balance="$1,000.00"),
                Bet(date="2024-05-05", bet="Knicks ML", stake="$10.00", odds="-110", to_win="$9.09", bet_type="moneyline", result=None, balance="$0.00"),
                ParlayBet(parlay_name="Sunday parlay", date="2024-05-03", individual_bet="Nuggets ML", odds="+150", bet_type="moneyline", result="win"),
                ParlayBet(parlay_name="Sunday parlay", date="2024-05-03", individual_bet="Suns -2", odds="-120", bet_type="spread", result="win"),
            ]
        )
        session.commit()


def _override(factory: sessionmaker):
    def get_db() -> Iterator[Session]:
        db = factory()
        try:
            yield db
        finally:
            db.close()

    return get_db


@pytest.fixture()
def client(monkeypatch) -> Iterator[TestClient]:
    monkeypatch.setenv("BETLEDGER_PASSWORD", PASSWORD)
    factory = _memory_sessionmaker()
    _seed(factory)
    server.app.dependency_overrides[server.get_db] = _override(factory)
    yield TestClient(server.app)
    server.app.dependency_overrides.clear()


@pytest.fixture()
def authed(client: TestClient) -> TestClient:
    response = client.post("/api/login", json={"password": PASSWORD})
    assert response.json() == {"success": True}
    return client


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_data_routes_require_login(client: TestClient) -> None:
    for path in (
        "/api/balance",
        "/api/singles",
        "/api/parlays",
        "/api/bettypes",
        "/api/bets",
        "/api/summary",
        "/api/parlay_bets?parlay_name=Sunday%20parlay",
    ):
        response = client.get(path)
        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}


def test_wrong_password_rejected(client: TestClient) -> None:
    assert client.post("/api/login", json={"password": "nope"}).json() == {"success": False}
    assert client.get("/api/auth-status").json() == {"authenticated": False}


def test_login_logout_cycle(authed: TestClient) -> None:
    assert authed.get("/api/auth-status").json() == {"authenticated": True}
    assert authed.post("/api/logout").json() == {"success": True}
    assert authed.get("/api/auth-status").json() == {"authenticated": False}
    assert authed.get("/api/balance").status_code == 401


def _raise_unconfigured() -> str:
    raise RuntimeError("BETLEDGER_PASSWORD is not configured.")


def test_login_without_configured_password(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr(server.auth, "get_dashboard_password", _raise_unconfigured)
    response = client.post("/api/login", json={"password": "anything"})
    assert response.status_code == 503


def test_balance_sums_every_row(authed: TestClient) -> None:
    assert authed.get("/api/balance").json() == {"balance": "$1220.00"}


def test_singles_positional(authed: TestClient) -> None:
    assert authed.get("/api/singles").json() == ["50.0%", 1, 1, "+100", "50.00%", "$100.00"]


def test_parlays_positional(authed: TestClient) -> None:
    assert authed.get("/api/parlays").json() == ["100.0%", 1, 0, "+600", "14.29%", "$120.00"]


def test_summary_named(authed: TestClient) -> None:
    body = authed.get("/api/summary").json()
    assert body["singles"]["win_pct"] == "50.0%"
    assert body["parlays"]["avg_odds"] == "+600"


def test_bet_types_include_parlay_legs(authed: TestClient) -> None:
    body = authed.get("/api/bettypes").json()
    assert [row["type"] for row in body] == ["moneyline", "spread"]
    moneyline, spread = body
    assert moneyline == {
        "type": "moneyline",
        "win_pct": "100.0%",
        "wins": 2,
        "losses": 0,
        "avg_odds": "+150",
        "expected_pct": "40.00%",
        "totals": "$150.00",
    }
    assert spread["wins"] == 1
    assert spread["losses"] == 1
    assert spread["avg_odds"] == "-150"
    assert spread["totals"] == "$-50.00"


def test_parlay_legs_lookup(authed: TestClient) -> None:
    legs = authed.get("/api/parlay_bets", params={"parlay_name": "Sunday parlay"}).json()
    assert [leg["individual_bet"] for leg in legs] == ["Nuggets ML", "Suns -2"]
    assert set(legs[0]) == {"date", "individual_bet", "odds", "type", "result"}
    assert legs[1]["type"] == "spread"


def test_parlay_legs_unknown_or_missing_name(authed: TestClient) -> None:
    assert authed.get("/api/parlay_bets", params={"parlay_name": "Nope"}).json() == []
    assert authed.get("/api/parlay_bets").json() == []


def test_bets_listing_uses_ledger_columns(authed: TestClient) -> None:
    bets = authed.get("/api/bets").json()
    assert [bet["Bet"] for bet in bets] == ["Deposit", "Lakers ML", "Celtics -3.5", "Sunday parlay", "Knicks ML"]
    assert bets[1]["Type"] == "moneyline"
    assert bets[1]["To_Win"] == "$150.00"
    assert bets[4]["Result"] is None


def test_empty_ledger(monkeypatch) -> None:
    monkeypatch.setenv("BETLEDGER_PASSWORD", PASSWORD)
    server.app.dependency_overrides[server.get_db] = _override(_memory_sessionmaker())
    try:
        client = TestClient(server.app)
        client.post("/api/login", json={"password": PASSWORD})
        assert client.get("/api/balance").json() == {"balance": "$0.00"}
        assert client.get("/api/singles").json() == ["0%", 0, 0, "+0", "100.00%", "$0.00"]
        assert client.get("/api/bettypes").json() == []
    finally:
        server.app.dependency_overrides.clear()


def test_store_failure_is_503(monkeypatch) -> None:
    monkeypatch.setenv("BETLEDGER_PASSWORD", PASSWORD)
    server.app.dependency_overrides[server.get_db] = _override(_memory_sessionmaker(create_tables=False))
    try:
        client = TestClient(server.app)
        client.post("/api/login", json={"password": PASSWORD})
        response = client.get("/api/balance")
        assert response.status_code == 503
        assert response.json() == {"detail": "Ledger unavailable"}
    finally:
        server.app.dependency_overrides.clear()


def test_padded_results_are_not_settled(monkeypatch) -> None:
    monkeypatch.setenv("BETLEDGER_PASSWORD", PASSWORD)
    factory = _memory_sessionmaker()
    with factory() as session:
        session.add_all(
            [
                Bet(date="2024-05-01", bet="Lakers ML", odds="+150", bet_type="moneyline", result=" win", balance="$150.00"),
                Bet(date="2024-05-02", bet="Celtics -3.5", odds="-200", bet_type="spread", result="LOSS", balance="-$50.00"),
            ]
        )
        session.commit()
    server.app.dependency_overrides[server.get_db] = _override(factory)
    try:
        client = TestClient(server.app)
        client.post("/api/login", json={"password": PASSWORD})
        assert client.get("/api/singles").json() == ["0.0%", 0, 1, "-200", "66.67%", "$-50.00"]
    finally:
        server.app.dependency_overrides.clear()
