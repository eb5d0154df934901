"""Read-path tests against an in-memory ledger."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from betledger.db import queries
from betledger.db.models import Base, Bet, ParlayBet


def _session() -> Session:
    engine = create_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    session = Session(bind=engine)
    session.add_all(
        [
            Bet(bet="Sunday parlay", bet_type="parlay", result="win", balance="$120.00"),
            Bet(bet="Monday parlay", bet_type="Parlay", result=" loss", balance="-$20.00"),
            ParlayBet(parlay_name="Sunday parlay", individual_bet="Nuggets ML", odds="+150", bet_type="moneyline", result="win"),
            ParlayBet(parlay_name="Monday parlay", individual_bet="Suns -2", odds="-120", bet_type="spread", result="loss"),
            ParlayBet(parlay_name="Sunday parlay", individual_bet="Over 221.5", odds="-110", bet_type="total", result="win"),
        ]
    )
    session.commit()
    return session


def test_fetch_legs_by_parent_groups_in_entry_order() -> None:
    with _session() as session:
        grouped = queries.fetch_legs_by_parent(session, ["Sunday parlay", "Missing", ""])
    assert set(grouped) == {"Sunday parlay", "Missing"}
    assert [leg.individual_bet for leg in grouped["Sunday parlay"]] == ["Nuggets ML", "Over 221.5"]
    assert grouped["Missing"] == []


def test_fetch_legs_by_parent_without_names() -> None:
    with _session() as session:
        assert queries.fetch_legs_by_parent(session, []) == {}


def test_settled_parlays_match_result_exactly() -> None:
    with _session() as session:
        rows = queries.fetch_settled_rows(session, parlays=True)
    assert [row.balance for row in rows] == ["$120.00"]
