"""CLI entrypoint to run the BetLedger FastAPI server."""

from __future__ import annotations

import logging
import os

import uvicorn

from betledger.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    port = int(os.getenv("PORT", str(settings.port)))
    uvicorn.run("betledger.api.server:app", host="0.0.0.0", port=port, reload=False)


if __name__ == "__main__":  # pragma: no cover
    main()
