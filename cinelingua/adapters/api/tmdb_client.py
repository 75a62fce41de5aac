"""
Client TMDB pour la récupération des films, séries et personnalités.

Implémente l'interface IMetadataAPIClient pour TMDB (The Movie Database).
Le client décore un httpx.AsyncClient lié à une seule clé API, lue une fois
à la construction. Aucune logique de retry, de pagination ou de cache :
les erreurs HTTP sont propagées telles quelles.

Usage:
    client = TMDBClient(api_key="your_key")
    movie = await client.movie(42, language="fr-FR")
    person = await client.person(287)
    await client.close()
"""

from types import MappingProxyType
from typing import Optional, Sequence

import httpx
from loguru import logger

from ...core.entities.media import Entity
from ...core.ports.api_clients import EntityKind, IMetadataAPIClient

DEFAULT_LANGUAGE = "en"

# Sous-ressources jointes par défaut à chaque type d'entité
DEFAULT_APPEND = MappingProxyType({
    EntityKind.MOVIE: ("credits", "translations"),
    EntityKind.PERSON: ("movie_credits", "tv_credits", "translations"),
    EntityKind.TV: ("credits", "translations"),
})


class TMDBClient(IMetadataAPIClient):
    """
    Client API TMDB pour les métadonnées de films, séries et personnalités.

    Implémente IMetadataAPIClient avec un constructeur de requête unique,
    paramétré par le type d'entité :
    - langue "en" si non précisée
    - sous-ressources par défaut selon le type (DEFAULT_APPEND)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3

    Example:
        client = TMDBClient(api_key="xxx")
        movie = await client.movie(27205, language="fr-FR")
        print(movie["title"], len(movie["credits"]["cast"]))
        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = TMDB_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Clé API TMDB (API Key v3 ou Read Access Token v4)
            client: Client httpx à décorer (créé à la demande si absent)
            base_url: URL de base utilisée si le client est créé ici
            timeout: Timeout en secondes si le client est créé ici
        """
        self._api_key = api_key or ""
        self._base_url = base_url
        self._timeout = timeout
        self._client = client
        if client is not None:
            self._bind_credentials(client)

    def _credentials(self) -> tuple[dict[str, str], dict[str, str]]:
        """
        Retourne les headers et paramètres d'authentification.

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caractères hex) : passée en paramètre api_key
        - Read Access Token v4 (long JWT) : passé en header Bearer
        """
        headers = {"Accept": "application/json"}
        params = {}
        if len(self._api_key) > 40:
            headers["Authorization"] = f"Bearer {self._api_key}"
        else:
            params["api_key"] = self._api_key
        return headers, params

    def _bind_credentials(self, client: httpx.AsyncClient) -> None:
        """Ajoute la clé API aux paramètres par défaut d'un client existant."""
        headers, params = self._credentials()
        client.headers.update(headers)
        client.params = client.params.merge(params)

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le crée si nécessaire (lazy init).

        Returns:
            httpx.AsyncClient configuré pour l'API TMDB
        """
        if self._client is None or self._client.is_closed:
            headers, params = self._credentials()
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def fetch(
        self,
        kind: EntityKind,
        entity_id: int | str,
        language: Optional[str] = None,
        append: Optional[Sequence[str]] = None,
    ) -> Entity:
        """
        Récupère une entité TMDB avec ses sous-ressources.

        Args:
            kind: Type d'entité (détermine le chemin et les sous-ressources par défaut)
            entity_id: ID TMDB de l'entité
            language: Code de langue ("en" si absent ou vide)
            append: Sous-ressources à joindre (défaut selon le type)

        Returns:
            Corps JSON de la réponse

        Raises:
            httpx.HTTPStatusError: Si l'API répond avec un statut d'erreur
            httpx.HTTPError: Pour les erreurs de transport
        """
        kind = EntityKind(kind)
        if append is None:
            append = DEFAULT_APPEND[kind]

        params = {"language": language or DEFAULT_LANGUAGE}
        if append:
            params["append_to_response"] = ",".join(append)

        client = self._get_client()
        logger.debug(
            "Requête TMDB", kind=kind.value, entity_id=str(entity_id), language=params["language"]
        )
        response = await client.get(f"/{kind.value}/{entity_id}", params=params)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
