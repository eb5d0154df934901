#!/usr/bin/env python3
"""Write the BetLedger API's OpenAPI document to disk."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from betledger.api.server import app

DEFAULT_OUTPUT = Path("docs/betledger-openapi.json")


def write_schema(output: Path) -> dict:
    """Dump the ledger API schema to ``output`` and return it."""

    schema = app.openapi()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(schema, indent=2, sort_keys=True) + "\n")
    return schema


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Where to write the JSON schema.")
    args = parser.parse_args()
    schema = write_schema(args.output)
    print(f"{len(schema['paths'])} ledger routes written to {args.output}")


if __name__ == "__main__":  # pragma: no cover
    main()
