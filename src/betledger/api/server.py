"""FastAPI backend for the BetLedger dashboard."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.middleware.sessions import SessionMiddleware

from betledger import __version__
from betledger.api import auth
from betledger.api.schemas import (
    AuthStatusResponse,
    BalanceResponse,
    BetRecord,
    BetTypeStats,
    LoginRequest,
    LoginResponse,
    ParlayLegRecord,
    SummaryResponse,
    SummaryStats,
)
from betledger.config import get_settings
from betledger.db import queries
from betledger.db.database import SessionLocal, init_db
from betledger.ledger.stats import aggregate, aggregate_by_type, current_balance
from betledger.ledger.types import AggregateStats

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("BetLedger API %s ready", __version__)
    yield


app = FastAPI(
    title="BetLedger API",
    version=__version__,
    description="Aggregate statistics and raw rows for a personal betting ledger.",
    lifespan=lifespan,
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=settings.session_max_age,
    same_site="lax",
)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SessionDep = Annotated[Session, Depends(get_db)]
AuthDep = Annotated[None, Depends(auth.require_session)]
ParlayNameQuery = Annotated[str | None, Query()]


@contextmanager
def ledger_read(what: str) -> Iterator[None]:
    """Turn store failures into a 503 instead of a bare 500."""

    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Failed to read %s: %s", what, exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Ledger unavailable",
        ) from exc


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/login", response_model=LoginResponse)
def api_login(payload: LoginRequest, request: Request) -> LoginResponse:
    return LoginResponse(success=auth.login(request, payload.password))


@app.get("/api/auth-status", response_model=AuthStatusResponse)
def api_auth_status(request: Request) -> AuthStatusResponse:
    return AuthStatusResponse(authenticated=auth.is_authenticated(request))


@app.post("/api/logout", response_model=LoginResponse)
def api_logout(request: Request) -> LoginResponse:
    auth.logout(request)
    return LoginResponse(success=True)


@app.get("/api/balance", response_model=BalanceResponse)
def api_balance(_: AuthDep, session: SessionDep) -> BalanceResponse:
    with ledger_read("balance"):
        balances = queries.fetch_balances(session)
    return BalanceResponse(balance=current_balance(balances))


def _summary(session: Session, parlays: bool) -> AggregateStats:
    with ledger_read("parlays" if parlays else "singles"):
        rows = queries.fetch_settled_rows(session, parlays=parlays)
    return aggregate(rows)


@app.get("/api/singles", response_model=list[str | int])
def api_singles(_: AuthDep, session: SessionDep) -> list[Any]:
    return _summary(session, parlays=False).as_row()


@app.get("/api/parlays", response_model=list[str | int])
def api_parlays(_: AuthDep, session: SessionDep) -> list[Any]:
    return _summary(session, parlays=True).as_row()


@app.get("/api/summary", response_model=SummaryResponse)
def api_summary(_: AuthDep, session: SessionDep) -> SummaryResponse:
    singles = _summary(session, parlays=False)
    parlays = _summary(session, parlays=True)
    return SummaryResponse(
        singles=SummaryStats(**vars(singles)),
        parlays=SummaryStats(**vars(parlays)),
    )


@app.get("/api/bettypes", response_model=list[BetTypeStats])
def api_bet_types(_: AuthDep, session: SessionDep) -> list[BetTypeStats]:
    with ledger_read("bet types"):
        rows = queries.fetch_type_rows(session)
    return [BetTypeStats(**record) for record in aggregate_by_type(rows)]


@app.get("/api/parlay_bets", response_model=list[ParlayLegRecord])
def api_parlay_bets(
    _: AuthDep,
    session: SessionDep,
    parlay_name: ParlayNameQuery = None,
) -> list[ParlayLegRecord]:
    with ledger_read("parlay legs"):
        legs = queries.fetch_parlay_legs(session, parlay_name or "")
    return [
        ParlayLegRecord(
            date=leg.date,
            individual_bet=leg.individual_bet,
            odds=leg.odds,
            bet_type=leg.bet_type,
            result=leg.result,
        )
        for leg in legs
    ]


@app.get("/api/bets", response_model=list[BetRecord])
def api_bets(_: AuthDep, session: SessionDep) -> list[BetRecord]:
    with ledger_read("bets"):
        bets = queries.fetch_bets(session)
    return [BetRecord(**vars(bet)) for bet in bets]
