"""Filtering, sorting, and daily profit/loss series for the bet history views."""

from __future__ import annotations

import calendar
import math
from collections.abc import Iterable, Sequence
from datetime import date

from betledger.ledger.formatting import normalize_date_key, parse_currency, parse_float_prefix
from betledger.ledger.stats import is_adjustment
from betledger.ledger.types import BetEntry, PnlSeries

SINGLES_FILTER = "singles"
SORTABLE_KEYS = ("date", "bet", "stake", "odds", "to_win", "bet_type", "result", "balance")
_CURRENCY_KEYS = frozenset({"stake", "to_win", "balance"})


def filter_bets(
    bets: Iterable[BetEntry],
    type_filter: str = "",
    result_filter: str = "",
    start: str = "",
    end: str = "",
) -> list[BetEntry]:
    """Apply the history table's type, result, and inclusive date filters."""

    wanted_type = (type_filter or "").lower()
    wanted_result = (result_filter or "").lower()
    start_key = normalize_date_key(start)
    end_key = normalize_date_key(end)

    selected = []
    for bet in bets:
        bet_type = (bet.bet_type or "").lower()
        if wanted_type == SINGLES_FILTER:
            if bet_type in ("parlay", "credit"):
                continue
        elif wanted_type and bet_type != wanted_type:
            continue
        if wanted_result and (bet.result or "").lower() != wanted_result:
            continue
        day = normalize_date_key(bet.date)
        if start_key and (not day or day < start_key):
            continue
        if end_key and (not day or day > end_key):
            continue
        selected.append(bet)
    return selected


def type_filter_options(bets: Iterable[BetEntry]) -> list[str]:
    options = {(bet.bet_type or "").upper() for bet in bets}
    options.discard("")
    options.discard("CREDIT")
    options.add(SINGLES_FILTER.upper())
    return sorted(options)


def _sort_value(bet: BetEntry, key: str) -> tuple[int, float | str]:
    raw = getattr(bet, key)
    if key == "date":
        return (1, normalize_date_key(raw))
    if key in _CURRENCY_KEYS:
        return (0, parse_currency(raw))
    text = "" if raw is None else str(raw)
    number = parse_float_prefix(text)
    if not math.isnan(number):
        return (0, number)
    return (1, text.lower())


def sort_bets(bets: Iterable[BetEntry], key: str, descending: bool = False) -> list[BetEntry]:
    """Sort on one column; numbers compare numerically and sort before text."""

    if key not in SORTABLE_KEYS:
        raise ValueError(f"Unsupported sort key: {key}")
    return sorted(bets, key=lambda bet: _sort_value(bet, key), reverse=descending)


def _newest_first(bets: Iterable[BetEntry]) -> list[BetEntry]:
    return sorted(bets, key=lambda bet: normalize_date_key(bet.date), reverse=True)


def wager_rows(bets: Iterable[BetEntry]) -> list[BetEntry]:
    return _newest_first(bet for bet in bets if not is_adjustment(bet.bet_type))


def credit_rows(bets: Iterable[BetEntry]) -> list[BetEntry]:
    return _newest_first(bet for bet in bets if is_adjustment(bet.bet_type))


def daily_pnl(bets: Sequence[BetEntry], start: str = "", end: str = "") -> PnlSeries:
    """Cumulative profit/loss per day inside an inclusive date window.

    A win adds the bet's ``to_win`` and a loss subtracts its stake. The series
    starts from an unlabeled zero point so the first day draws as a segment.
    """

    start_key = normalize_date_key(start)
    end_key = normalize_date_key(end)
    daily: dict[str, float] = {}
    for bet in bets:
        if is_adjustment(bet.bet_type):
            continue
        day = normalize_date_key(bet.date)
        if not day or (start_key and day < start_key) or (end_key and day > end_key):
            continue
        result = (bet.result or "").lower()
        amount = 0.0
        if result == "win":
            amount = parse_currency(bet.to_win)
        elif result == "loss":
            amount = -parse_currency(bet.stake)
        daily[day] = daily.get(day, 0.0) + amount

    if not daily:
        return PnlSeries()
    series = PnlSeries(labels=[""], values=[0.0])
    running = 0.0
    for day in sorted(daily):
        running += daily[day]
        _, month, dom = day.split("-")
        series.labels.append(f"{month}/{dom}")
        series.values.append(running)
    return series


def month_window(today: date | None = None) -> tuple[str, str]:
    """First and last day of ``today``'s month as date keys."""

    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return (
        today.replace(day=1).isoformat(),
        today.replace(day=last_day).isoformat(),
    )
