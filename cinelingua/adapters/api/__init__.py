"""Adaptateurs des API externes."""

from .tmdb_client import DEFAULT_APPEND, TMDBClient

__all__ = ["DEFAULT_APPEND", "TMDBClient"]
