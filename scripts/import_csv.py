#!/usr/bin/env python3
"""Load ledger spreadsheet exports (bets and parlay legs) into the database."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from betledger.db.database import get_session, init_db
from betledger.db.models import Bet, ParlayBet

logger = logging.getLogger("import_csv")

BET_COLUMNS = {
    "Date": "date",
    "Bet": "bet",
    "Stake": "stake",
    "Odds": "odds",
    "To_Win": "to_win",
    "Type": "bet_type",
    "Result": "result",
    "Balance": "balance",
}
LEG_COLUMNS = {
    "parlay_name": "parlay_name",
    "date": "date",
    "individual_bet": "individual_bet",
    "odds": "odds",
    "type": "bet_type",
    "result": "result",
}


def _records(path: Path, columns: dict[str, str]) -> list[dict[str, str | None]]:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = [name for name in columns if name not in df.columns]
    if missing:
        raise SystemExit(f"{path}: missing columns {', '.join(missing)}")
    df = df[list(columns)].rename(columns=columns)
    return [
        {key: (value.strip() or None) for key, value in row.items()}
        for row in df.to_dict(orient="records")
    ]


def import_ledger(bets_csv: Path | None, legs_csv: Path | None, replace: bool = False) -> dict[str, int]:
    init_db()
    summary = {"bets": 0, "parlay_bets": 0}
    with get_session() as session:
        if replace:
            session.query(ParlayBet).delete()
            session.query(Bet).delete()
        if bets_csv:
            for record in _records(bets_csv, BET_COLUMNS):
                session.add(Bet(**record))
                summary["bets"] += 1
        if legs_csv:
            for record in _records(legs_csv, LEG_COLUMNS):
                if not record["parlay_name"]:
                    logger.warning("Skipping parlay leg without a parent: %s", record)
                    continue
                session.add(ParlayBet(**record))
                summary["parlay_bets"] += 1
    return summary


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--bets", type=Path, help="CSV with Date,Bet,Stake,Odds,To_Win,Type,Result,Balance")
    parser.add_argument("--parlay-bets", type=Path, help="CSV with parlay_name,date,individual_bet,odds,type,result")
    parser.add_argument("--replace", action="store_true", help="Delete existing rows before importing.")
    args = parser.parse_args()
    if not args.bets and not args.parlay_bets:
        parser.error("nothing to import; pass --bets and/or --parlay-bets")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    summary = import_ledger(args.bets, args.parlay_bets, replace=args.replace)
    logger.info("Imported %(bets)d bets and %(parlay_bets)d parlay legs", summary)


if __name__ == "__main__":
    main()
