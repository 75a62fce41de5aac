"""
Fixtures pytest partagees pour les tests CineLingua.

Ce module contient les fixtures communes utilisees dans les tests:
- Faux client API de metadonnees (reponses en memoire, appels enregistres)
- Etat partage d'un visiteur avec historique des instantanes
- Settings de test avec chemins temporaires
"""

import asyncio
import copy
from pathlib import Path
from typing import Optional, Sequence

import httpx
import pytest

from cinelingua.config import Settings
from cinelingua.core.entities.media import Entity
from cinelingua.core.ports.api_clients import EntityKind, IMetadataAPIClient
from cinelingua.services.app_state import AppState, AppStateRef
from cinelingua.services.i18n import I18n
from tests.fixtures.tmdb_responses import (
    TMDB_MOVIE_RESPONSE,
    TMDB_PERSON_RESPONSE,
    TMDB_TV_RESPONSE,
)


class FakeMetadataAPI(IMetadataAPIClient):
    """
    Client API en memoire.

    Les reponses sont indexees par (type, id) ; `failures` contient les
    (type, id, langue) qui levent une erreur. Chaque appel est enregistre.
    `gate` permet de suspendre les appels jusqu'a ce qu'un evenement soit leve.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[EntityKind, str], Entity] = {
            (EntityKind.MOVIE, "550"): TMDB_MOVIE_RESPONSE,
            (EntityKind.PERSON, "287"): TMDB_PERSON_RESPONSE,
            (EntityKind.TV, "1399"): TMDB_TV_RESPONSE,
        }
        self.failures: set[tuple[EntityKind, str, str]] = set()
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[EntityKind, str, Optional[str]]] = []
        self.closed = False

    @property
    def source(self) -> str:
        return "fake"

    async def fetch(
        self,
        kind: EntityKind,
        entity_id: int | str,
        language: Optional[str] = None,
        append: Optional[Sequence[str]] = None,
    ) -> Entity:
        key = str(entity_id)
        self.calls.append((kind, key, language))
        gate = self.gates.get(language or "")
        if gate is not None:
            await gate.wait()
        if (kind, key, language) in self.failures:
            raise RuntimeError(f"{kind.value} {key} indisponible en {language}")
        if (kind, key) not in self.responses:
            request = httpx.Request("GET", f"https://api.test/{kind.value}/{key}")
            raise httpx.HTTPStatusError(
                "Not Found", request=request, response=httpx.Response(404, request=request)
            )
        data = copy.deepcopy(self.responses[(kind, key)])
        data["_language"] = language
        return data

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_api() -> FakeMetadataAPI:
    """Client API en memoire avec un film, une personnalite et une serie."""
    return FakeMetadataAPI()


@pytest.fixture
def app_state() -> AppStateRef:
    """Etat partage vierge."""
    return AppStateRef()


@pytest.fixture
def state_history(app_state: AppStateRef) -> list[AppState]:
    """Liste des instantanes publies par `app_state`, dans l'ordre."""
    history: list[AppState] = []
    app_state.subscribe(history.append)
    return history


@pytest.fixture
def i18n() -> I18n:
    """Catalogues de l'interface livres avec l'application."""
    return I18n(default_language="en-US")


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test isoles de l'environnement.

    Utilise tmp_path de pytest pour le fichier de log.
    """
    return Settings(
        tmdb_api_key="test_api_key",
        tmdb_base_url="https://api.themoviedb.org/3",
        default_language="en-US",
        base_path="https://cinelingua.test",
        log_file=tmp_path / "test.log",
    )
