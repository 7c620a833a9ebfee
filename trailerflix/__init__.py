"""Trailerflix: TMDB proxy and headless browse client.

Re-exports the FastAPI app so ``uvicorn trailerflix:app`` works.
"""

from __future__ import annotations

from app.main import app, create_app

__all__ = ["app", "create_app"]
