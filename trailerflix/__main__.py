"""Run the dispatcher with ``python -m trailerflix``."""

from __future__ import annotations

import logging

import uvicorn

from app.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Serve ``app.main:app`` on the configured host and port."""

    if not settings.tmdb_api_key:
        logger.warning("Starting without TMDB_API_KEY; the proxy will answer 500")
    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
        log_level="info",
    )


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
