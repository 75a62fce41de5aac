"""
Container d'injection de dépendances via dependency-injector.

Fournit une gestion centralisée des dépendances pour les interfaces CLI et Web.
"""

import httpx
from dependency_injector import containers, providers

from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .services.i18n import I18n
from .web.sessions import VisitorSessions


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        client = container.tmdb_client()
        movie = await client.movie(42, language="fr-FR")
    """

    # Configuration - singleton chargé une seule fois
    config = providers.Singleton(Settings)

    # Client HTTP partagé, décoré par le client TMDB
    http_client = providers.Singleton(
        httpx.AsyncClient,
        base_url=config.provided.tmdb_base_url,
        timeout=config.provided.tmdb_timeout,
    )

    # Client API - Singleton avec api_key lue une fois depuis la config
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        client=http_client,
        base_url=config.provided.tmdb_base_url,
        timeout=config.provided.tmdb_timeout,
    )

    # Catalogues de traduction de l'interface
    i18n = providers.Singleton(
        I18n,
        default_language=config.provided.default_language,
    )

    # Sessions visiteurs (état partagé par visiteur)
    visitor_sessions = providers.Singleton(
        VisitorSessions,
        max_sessions=config.provided.max_sessions,
        idle_timeout=config.provided.session_idle_timeout,
    )
