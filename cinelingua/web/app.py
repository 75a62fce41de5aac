"""
Application FastAPI de CineLingua.

Initialise l'application web avec le Container DI, construit les pages
d'entités, configure les fichiers statiques, les gestionnaires d'erreurs
et monte les routes.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from loguru import logger

from ..container import Container
from .deps import get_session, language_of, layout_response, translator_for, with_session_cookie
from .pages import build_pages
from .routes.entities import router as entities_router
from .routes.home import router as home_router
from .routes.language import router as language_router

_WEB_DIR = Path(__file__).parent


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Crée l'application web.

    Args:
        container: Container DI à utiliser (un nouveau container par défaut)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Construit les pages au démarrage et ferme le client API à l'arrêt."""
        app.state.container = container or Container()
        api = app.state.container.tmdb_client()
        app.state.pages = build_pages(api)
        if not app.state.container.config().tmdb_enabled:
            logger.warning("Clé API TMDB absente : les fiches d'entités seront indisponibles")
        yield
        await api.close()

    app = FastAPI(title="CineLingua", lifespan=lifespan)

    # Fichiers statiques
    app.mount("/static", StaticFiles(directory=_WEB_DIR / "static"), name="static")

    # Routes
    app.include_router(home_router)
    app.include_router(language_router)
    app.include_router(entities_router)

    @app.exception_handler(httpx.HTTPStatusError)
    async def upstream_status_error(request: Request, exc: httpx.HTTPStatusError):
        """Erreur de l'API au chargement initial : 404 si l'entité n'existe pas, 502 sinon."""
        upstream_status = exc.response.status_code
        logger.error(
            f"Erreur API {upstream_status} sur {request.url.path}",
            upstream_url=str(exc.request.url.copy_remove_param("api_key")),
        )
        status_code = 404 if upstream_status == 404 else 502
        return _error_page(request, status_code)

    @app.exception_handler(httpx.HTTPError)
    async def upstream_transport_error(request: Request, exc: httpx.HTTPError):
        """API injoignable au chargement initial."""
        logger.error(f"API injoignable sur {request.url.path}: {exc}")
        return _error_page(request, 502)

    return app


def _error_page(request: Request, status_code: int):
    session = get_session(request)
    language = language_of(request, session)
    t = translator_for(request, language.resolved, ["common"])
    response = layout_response(request, "error.html", t, language, status_code=status_code)
    return with_session_cookie(response, session)


app = create_app()
