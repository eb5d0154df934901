"""ORM models for the BetLedger store.

Column names match the spreadsheet export the ledger is kept in, so money and
odds columns are stored as the text that was entered (``$1,250.00``, ``+150``).
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base declarative class."""


class Bet(Base):
    """A wager, parlay, or bankroll adjustment."""

    __tablename__ = "bets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[str | None] = mapped_column("Date", String(32))
    bet: Mapped[str | None] = mapped_column("Bet", String(255))
    stake: Mapped[str | None] = mapped_column("Stake", String(32))
    odds: Mapped[str | None] = mapped_column("Odds", String(16))
    to_win: Mapped[str | None] = mapped_column("To_Win", String(32))
    bet_type: Mapped[str | None] = mapped_column("Type", String(64))
    result: Mapped[str | None] = mapped_column("Result", String(16))
    balance: Mapped[str | None] = mapped_column("Balance", String(32))


class ParlayBet(Base):
    """One leg of a parlay, linked to the parent bet through its label."""

    __tablename__ = "parlay_bets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parlay_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    date: Mapped[str | None] = mapped_column(String(32))
    individual_bet: Mapped[str | None] = mapped_column(String(255))
    odds: Mapped[str | None] = mapped_column(String(16))
    bet_type: Mapped[str | None] = mapped_column("type", String(64))
    result: Mapped[str | None] = mapped_column(String(16))
