"""
Tests de la configuration pydantic-settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cinelingua.config import Settings


class TestSettings:
    """Chargement des parametres depuis l'environnement."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CINELINGUA_TMDB_API_KEY", raising=False)

        settings = Settings(_env_file=None)

        assert settings.default_language == "en-US"
        assert settings.tmdb_base_url == "https://api.themoviedb.org/3"
        assert settings.base_path == ""
        assert not settings.tmdb_enabled

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("CINELINGUA_DEFAULT_LANGUAGE", "fr-FR")
        monkeypatch.setenv("CINELINGUA_TMDB_API_KEY", "secret")

        settings = Settings(_env_file=None)

        assert settings.default_language == "fr-FR"
        assert settings.tmdb_api_key == "secret"
        assert settings.tmdb_enabled

    def test_base_path_trailing_slash_is_stripped(self):
        settings = Settings(_env_file=None, base_path="https://cinelingua.example/")
        assert settings.base_path == "https://cinelingua.example"

    def test_log_file_home_is_expanded(self):
        settings = Settings(_env_file=None, log_file="~/logs/cinelingua.log")
        assert settings.log_file == Path.home() / "logs" / "cinelingua.log"

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, tmdb_timeout=0)
