"""Dataclasses passed between the ledger store, the engine, and the views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class LedgerRow:
    """Minimal bet-like record consumed by the statistics engine."""

    odds: str | float | None = None
    result: str | None = None
    balance: str | float | None = 0
    bet_type: str | None = None


@dataclass
class BetEntry:
    """One line of the ledger as stored in the ``bets`` table."""

    date: str | None = None
    bet: str | None = None
    stake: str | float | None = None
    odds: str | float | None = None
    to_win: str | float | None = None
    bet_type: str | None = None
    result: str | None = None
    balance: str | float | None = None
    id: int | None = None

    def to_ledger_row(self) -> LedgerRow:
        return LedgerRow(
            odds=self.odds,
            result=self.result,
            balance=self.balance,
            bet_type=self.bet_type,
        )


@dataclass
class ParlayLegEntry:
    """A single leg of a parlay, keyed to its parent bet by label."""

    parlay_name: str
    date: str | None = None
    individual_bet: str | None = None
    odds: str | float | None = None
    bet_type: str | None = None
    result: str | None = None
    id: int | None = None

    def to_ledger_row(self) -> LedgerRow:
        # legs carry no money of their own; the parent bet holds the balance
        return LedgerRow(odds=self.odds, result=self.result, balance=0, bet_type=self.bet_type)


@dataclass
class AggregateStats:
    """Win/loss, odds, and net-total summary for a group of wagers."""

    win_pct: str = "0%"
    wins: int = 0
    losses: int = 0
    avg_odds: str = "+0"
    expected_pct: str = "0%"
    totals: str = "$0.00"

    def as_row(self) -> list[Any]:
        """Positional form served to the singles/parlays summary tables."""

        return [self.win_pct, self.wins, self.losses, self.avg_odds, self.expected_pct, self.totals]

    def as_record(self, bet_type: str) -> dict[str, Any]:
        return {
            "type": bet_type,
            "win_pct": self.win_pct,
            "wins": self.wins,
            "losses": self.losses,
            "avg_odds": self.avg_odds,
            "expected_pct": self.expected_pct,
            "totals": self.totals,
        }


@dataclass
class PnlSeries:
    """Cumulative profit/loss points for the daily chart."""

    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.labels)
