"""Read path over the ledger tables."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from betledger.db.models import Bet, ParlayBet
from betledger.ledger.types import BetEntry, LedgerRow, ParlayLegEntry

PARLAY_TYPE = "parlay"


def _bet_to_entry(bet: Bet) -> BetEntry:
    return BetEntry(
        id=bet.id,
        date=bet.date,
        bet=bet.bet,
        stake=bet.stake,
        odds=bet.odds,
        to_win=bet.to_win,
        bet_type=bet.bet_type,
        result=bet.result,
        balance=bet.balance,
    )


def _leg_to_entry(leg: ParlayBet) -> ParlayLegEntry:
    return ParlayLegEntry(
        id=leg.id,
        parlay_name=leg.parlay_name,
        date=leg.date,
        individual_bet=leg.individual_bet,
        odds=leg.odds,
        bet_type=leg.bet_type,
        result=leg.result,
    )


def fetch_bets(session: Session) -> list[BetEntry]:
    """All ledger rows ordered by date then insertion."""

    stmt = select(Bet).order_by(Bet.date, Bet.id)
    return [_bet_to_entry(bet) for bet in session.scalars(stmt)]


def fetch_balances(session: Session) -> list[str | None]:
    return list(session.scalars(select(Bet.balance).order_by(Bet.id)))


def _is_parlay():
    return func.lower(func.coalesce(Bet.bet_type, "")) == PARLAY_TYPE


def _settled():
    return func.lower(func.coalesce(Bet.result, "")).in_(("win", "loss"))


def fetch_settled_rows(session: Session, parlays: bool) -> list[LedgerRow]:
    """Win/loss rows for either the parlay or the non-parlay summary."""

    kind = _is_parlay() if parlays else ~_is_parlay()
    stmt = select(Bet).where(kind, _settled()).order_by(Bet.id)
    return [_bet_to_entry(bet).to_ledger_row() for bet in session.scalars(stmt)]


def fetch_type_rows(session: Session) -> list[LedgerRow]:
    """Settled single bets followed by every parlay leg, for the per-type breakdown."""

    rows = fetch_settled_rows(session, parlays=False)
    legs = session.scalars(select(ParlayBet).order_by(ParlayBet.id))
    rows.extend(_leg_to_entry(leg).to_ledger_row() for leg in legs)
    return rows


def fetch_parlay_legs(session: Session, parlay_name: str) -> list[ParlayLegEntry]:
    """Legs of the named parlay in entry order; empty when there are none."""

    if not parlay_name:
        return []
    stmt = select(ParlayBet).where(ParlayBet.parlay_name == parlay_name).order_by(ParlayBet.id)
    return [_leg_to_entry(leg) for leg in session.scalars(stmt)]


def fetch_legs_by_parent(session: Session, parlay_names: Iterable[str]) -> dict[str, list[ParlayLegEntry]]:
    """Legs for several parlays in one query, keyed by parent label."""

    names = {name for name in parlay_names if name}
    grouped: dict[str, list[ParlayLegEntry]] = {name: [] for name in names}
    if not names:
        return grouped
    stmt = select(ParlayBet).where(ParlayBet.parlay_name.in_(names)).order_by(ParlayBet.id)
    for leg in session.scalars(stmt):
        grouped[leg.parlay_name].append(_leg_to_entry(leg))
    return grouped
