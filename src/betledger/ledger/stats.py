"""Aggregate win/loss, odds, and balance statistics for the ledger."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Any

from betledger.ledger.formatting import parse_currency, to_fixed
from betledger.ledger.odds import american_to_decimal, decimal_to_american, expected_percentage
from betledger.ledger.types import AggregateStats, LedgerRow

SETTLED_RESULTS = ("win", "loss")
ADJUSTMENT_TYPES = frozenset({"credit", "deposit", "withdrawal"})
UNKNOWN_TYPE = "Unknown"


def is_adjustment(bet_type: str | None) -> bool:
    """Credits, deposits and withdrawals move money but are not wagers."""

    return (bet_type or "").lower() in ADJUSTMENT_TYPES


def _has_odds(odds: Any) -> bool:
    if odds is None:
        return False
    if isinstance(odds, str):
        return bool(odds.strip())
    return bool(odds)


def aggregate(rows: Sequence[LedgerRow]) -> AggregateStats:
    """Summarize a group of wagers.

    Only ``win``/``loss`` results count toward the record and the net total,
    while every row carrying odds contributes to the average price.
    """

    wins = losses = 0
    totals = 0.0
    odds_sum = 0.0
    odds_count = 0
    for row in rows:
        if is_adjustment(row.bet_type):
            continue
        result = (row.result or "").lower()
        if result == "win":
            wins += 1
        elif result == "loss":
            losses += 1
        if result in SETTLED_RESULTS:
            totals += parse_currency(row.balance)
        if _has_odds(row.odds):
            dec = american_to_decimal(row.odds)
            if not math.isnan(dec):
                odds_sum += dec
                odds_count += 1

    total = wins + losses
    avg_dec = odds_sum / odds_count if odds_count else 1.0
    return AggregateStats(
        win_pct=to_fixed(wins / total * 100, 1) + "%" if total else "0%",
        wins=wins,
        losses=losses,
        avg_odds=decimal_to_american(avg_dec),
        expected_pct=expected_percentage(avg_dec),
        totals="$" + to_fixed(totals, 2),
    )


def aggregate_by_type(rows: Iterable[LedgerRow]) -> list[dict[str, Any]]:
    """Per bet-type breakdown in first-seen order."""

    groups: dict[str, list[LedgerRow]] = {}
    for row in rows:
        if is_adjustment(row.bet_type):
            continue
        groups.setdefault(row.bet_type or UNKNOWN_TYPE, []).append(row)
    return [aggregate(group).as_record(bet_type) for bet_type, group in groups.items()]


def current_balance(balances: Iterable[Any]) -> str:
    """Sum every row's stored balance; each row holds its own net contribution."""

    return "$" + to_fixed(sum(parse_currency(value) for value in balances), 2)
