"""Trailerflix FastAPI application package."""
