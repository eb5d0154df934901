"""Streamlit interface for BetLedger."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

import pandas as pd
import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from betledger.api.auth import check_password
from betledger.db import queries
from betledger.db.database import get_session, init_db
from betledger.ledger import history
from betledger.ledger.formatting import format_currency, format_date_display, parse_currency
from betledger.ledger.stats import aggregate, aggregate_by_type, current_balance
from betledger.ledger.types import BetEntry

init_db()

st.set_page_config(page_title="BetLedger", layout="wide", page_icon="📒")

SUMMARY_COLUMNS = ["Win %", "Wins", "Losses", "Avg Odds", "Expected %", "Totals"]
SORT_LABELS = {
    "Date": "date",
    "Bet": "bet",
    "Stake": "stake",
    "Odds": "odds",
    "To Win": "to_win",
    "Type": "bet_type",
    "Result": "result",
    "Balance": "balance",
}


@dataclass
class DashboardState:
    """Filter and chart selections owned by this page, kept in ``st.session_state``."""

    type_filter: str = ""
    result_filter: str = ""
    start: date | None = None
    end: date | None = None
    sort_key: str = "date"
    descending: bool = True
    chart_window: tuple[str, str] = field(default_factory=history.month_window)


def _state() -> DashboardState:
    if "dashboard" not in st.session_state:
        st.session_state["dashboard"] = DashboardState()
    return st.session_state["dashboard"]


def render_login() -> bool:
    if st.session_state.get("authenticated"):
        return True
    st.title("📒 BetLedger")
    with st.form("login_form"):
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Unlock")
    if submitted:
        try:
            ok = check_password(password)
        except RuntimeError as exc:
            st.error(str(exc))
            return False
        if ok:
            st.session_state["authenticated"] = True
            st.rerun()
        st.error("Incorrect password")
    return False


def load_ledger() -> tuple[list[BetEntry], dict[str, list]] | None:
    try:
        with get_session() as session:
            bets = queries.fetch_bets(session)
            rows = {
                "singles": queries.fetch_settled_rows(session, parlays=False),
                "parlays": queries.fetch_settled_rows(session, parlays=True),
                "types": queries.fetch_type_rows(session),
            }
    except SQLAlchemyError:
        return None
    return bets, rows


def render_balance(bets: Sequence[BetEntry] | None) -> None:
    if bets is None:
        st.metric("Current balance", "Error")
        return
    balance = current_balance(bet.balance for bet in bets)
    st.metric("Current balance", balance)
    if parse_currency(balance) < 0:
        st.caption(":red[Balance is negative]")


def render_summaries(rows: dict[str, list]) -> None:
    col_singles, col_parlays = st.columns(2)
    for column, key, title in ((col_singles, "singles", "Singles"), (col_parlays, "parlays", "Parlays")):
        column.subheader(title)
        column.dataframe(
            pd.DataFrame([aggregate(rows[key]).as_row()], columns=SUMMARY_COLUMNS),
            hide_index=True,
            use_container_width=True,
        )
    st.subheader("By bet type")
    breakdown = aggregate_by_type(rows["types"])
    if breakdown:
        st.dataframe(pd.DataFrame(breakdown), hide_index=True, use_container_width=True)
    else:
        st.caption("No settled bets yet.")


def _bets_frame(bets: Sequence[BetEntry]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Date": format_date_display(bet.date),
                "Bet": bet.bet or "",
                "Stake": format_currency(bet.stake),
                "Odds": "" if bet.odds is None else str(bet.odds),
                "To Win": format_currency(bet.to_win),
                "Type": bet.bet_type or "",
                "Result": bet.result or "",
                "Balance": format_currency(bet.balance),
            }
            for bet in bets
        ],
        columns=list(SORT_LABELS),
    )


def render_bets(bets: Sequence[BetEntry], state: DashboardState) -> None:
    st.subheader("All bets")
    with st.expander("Filter & sort", expanded=False):
        cols = st.columns(4)
        options = [""] + history.type_filter_options(bets)
        state.type_filter = cols[0].selectbox(
            "Type",
            options,
            index=options.index(state.type_filter.upper()) if state.type_filter.upper() in options else 0,
            format_func=lambda value: value or "All",
        )
        results = ["", "win", "loss", "pending"]
        state.result_filter = cols[1].selectbox(
            "Result",
            results,
            index=results.index(state.result_filter) if state.result_filter in results else 0,
            format_func=lambda value: value.title() or "All",
        )
        state.start = cols[2].date_input("From", value=state.start)
        state.end = cols[3].date_input("To", value=state.end)
        sort_cols = st.columns(2)
        labels = list(SORT_LABELS)
        current = next((label for label, key in SORT_LABELS.items() if key == state.sort_key), "Date")
        state.sort_key = SORT_LABELS[sort_cols[0].selectbox("Sort by", labels, index=labels.index(current))]
        state.descending = sort_cols[1].toggle("Descending", value=state.descending)
        if st.button("Clear filters"):
            st.session_state["dashboard"] = DashboardState(chart_window=state.chart_window)
            st.rerun()

    filtered = history.filter_bets(
        history.wager_rows(bets),
        type_filter=state.type_filter,
        result_filter=state.result_filter,
        start=state.start.isoformat() if state.start else "",
        end=state.end.isoformat() if state.end else "",
    )
    ordered = history.sort_bets(filtered, state.sort_key, descending=state.descending)
    st.dataframe(_bets_frame(ordered), hide_index=True, use_container_width=True)
    render_parlay_legs([bet for bet in ordered if (bet.bet_type or "").lower() == "parlay"])


def render_parlay_legs(parlays: Sequence[BetEntry]) -> None:
    if not parlays:
        return
    try:
        with get_session() as session:
            legs_by_parent = queries.fetch_legs_by_parent(session, (parlay.bet or "" for parlay in parlays))
    except SQLAlchemyError:
        legs_by_parent = None
    for parlay in parlays:
        label = parlay.bet or ""
        with st.expander(f"{format_date_display(parlay.date)} · {label}"):
            if legs_by_parent is None:
                st.caption("Error loading")
                continue
            legs = legs_by_parent.get(label, [])
            if not legs:
                st.caption("No details")
                continue
            st.dataframe(
                pd.DataFrame(
                    [
                        {
                            "Date": format_date_display(leg.date),
                            "Bet": leg.individual_bet or "",
                            "Odds": "" if leg.odds is None else str(leg.odds),
                            "Type": leg.bet_type or "",
                            "Result": leg.result or "",
                        }
                        for leg in legs
                    ]
                ),
                hide_index=True,
                use_container_width=True,
            )


def render_credits(bets: Sequence[BetEntry]) -> None:
    st.subheader("Credits")
    credits = history.credit_rows(bets)
    if not credits:
        st.caption("No deposits, withdrawals, or credits recorded.")
        return
    st.dataframe(
        pd.DataFrame(
            [{"Date": bet.date or "", "Amount": format_currency(bet.balance)} for bet in credits]
        ),
        hide_index=True,
        use_container_width=True,
    )


def render_pnl_chart(bets: Sequence[BetEntry], state: DashboardState) -> None:
    st.subheader("Daily P/L")
    start_default, end_default = state.chart_window
    cols = st.columns([0.4, 0.4, 0.2])
    start = cols[0].date_input("Chart from", value=date.fromisoformat(start_default))
    end = cols[1].date_input("Chart to", value=date.fromisoformat(end_default))
    if cols[2].button("This month"):
        state.chart_window = history.month_window()
        st.rerun()
    state.chart_window = (start.isoformat(), end.isoformat())

    series = history.daily_pnl(bets, *state.chart_window)
    if not series:
        st.info("No settled bets in this date range.")
        return
    df = pd.DataFrame({"Cumulative P/L": series.values}, index=pd.Index(series.labels, name="Date"))
    st.line_chart(df, height=300, use_container_width=True)


# ----- Page Layout ------------------------------------------------------------
if render_login():
    state = _state()
    ledger = load_ledger()
    st.title("📒 BetLedger")
    with st.sidebar:
        if ledger is None:
            st.error("Ledger unavailable.")
        render_balance(ledger[0] if ledger else None)
        if st.button("Lock"):
            st.session_state.clear()
            st.rerun()

    if ledger is not None:
        bets, rows = ledger
        render_summaries(rows)
        col_main, col_right = st.columns([0.65, 0.35], gap="large")
        with col_main:
            render_bets(bets, state)
        with col_right:
            render_pnl_chart(bets, state)
            render_credits(bets)
