"""Shared-password gate backed by the signed session cookie."""

from __future__ import annotations

import logging
import secrets

from fastapi import HTTPException, Request, status

from betledger.config import get_dashboard_password

logger = logging.getLogger(__name__)

SESSION_KEY = "authenticated"


def is_authenticated(request: Request) -> bool:
    return bool(request.session.get(SESSION_KEY))


def check_password(candidate: str) -> bool:
    expected = get_dashboard_password()
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def login(request: Request, password: str) -> bool:
    """Mark the session authenticated when ``password`` matches."""

    try:
        ok = check_password(password)
    except RuntimeError as exc:
        logger.error("Login attempted without a configured password: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Dashboard password is not configured",
        ) from exc
    if not ok:
        logger.warning("Rejected dashboard login from %s", request.client.host if request.client else "?")
        request.session.pop(SESSION_KEY, None)
        return False
    request.session[SESSION_KEY] = True
    return True


def logout(request: Request) -> None:
    request.session.clear()


def require_session(request: Request) -> None:
    if not is_authenticated(request):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
