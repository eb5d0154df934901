"""Pydantic schemas for the BetLedger API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

Amount = str | float | None


class LoginRequest(BaseModel):
    password: str = ""


class LoginResponse(BaseModel):
    success: bool


class AuthStatusResponse(BaseModel):
    authenticated: bool


class BalanceResponse(BaseModel):
    balance: str


class SummaryStats(BaseModel):
    win_pct: str
    wins: int
    losses: int
    avg_odds: str
    expected_pct: str
    totals: str


class SummaryResponse(BaseModel):
    singles: SummaryStats
    parlays: SummaryStats


class BetTypeStats(BaseModel):
    type: str
    win_pct: str
    wins: int
    losses: int
    avg_odds: str
    expected_pct: str
    totals: str


class BetRecord(BaseModel):
    """A ledger row, keyed the way the spreadsheet columns are named."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    date: str | None = Field(default=None, alias="Date")
    bet: str | None = Field(default=None, alias="Bet")
    stake: Amount = Field(default=None, alias="Stake")
    odds: Amount = Field(default=None, alias="Odds")
    to_win: Amount = Field(default=None, alias="To_Win")
    bet_type: str | None = Field(default=None, alias="Type")
    result: str | None = Field(default=None, alias="Result")
    balance: Amount = Field(default=None, alias="Balance")


class ParlayLegRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str | None = None
    individual_bet: str | None = None
    odds: Amount = None
    bet_type: str | None = Field(default=None, alias="type")
    result: str | None = None
