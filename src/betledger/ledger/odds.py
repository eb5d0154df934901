"""American/decimal odds conversion."""

from __future__ import annotations

import math

from betledger.ledger.formatting import parse_float_prefix, round_half_up, to_fixed


def american_to_decimal(odds: str | float | int | None) -> float:
    """Convert American odds (``+150``, ``-200`` or bare ``150``) to decimal odds.

    Missing odds map to ``1.0``. A value without a numeric part yields ``nan``;
    callers averaging odds are expected to skip it.
    """

    if not odds:
        return 1.0
    text = str(odds).strip()
    if not text:
        return 1.0
    if text.startswith("+"):
        return 1 + parse_float_prefix(text[1:]) / 100
    if text.startswith("-"):
        magnitude = parse_float_prefix(text[1:])
        if magnitude == 0:
            return math.inf
        return 1 + 100 / magnitude
    return 1 + parse_float_prefix(text) / 100


def decimal_to_american(dec: float) -> str:
    """Render decimal odds in American notation for display.

    Used on averaged decimal odds, so the result approximates rather than
    reproduces the average of the original American prices.
    """

    if not math.isfinite(dec) or dec == 1:
        return "+0"
    if dec < 2:
        return str(round_half_up(-100 / (dec - 1)))
    return "+" + str(round_half_up((dec - 1) * 100))


def expected_percentage(dec: float) -> str:
    """Implied win probability (break-even rate) of decimal odds."""

    if not dec > 0:
        return "0%"
    return to_fixed(100 / dec, 2) + "%"
