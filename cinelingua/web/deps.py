"""
Dépendances partagées de l'application web.

Fournit les templates Jinja2 et les accès au container et aux sessions
utilisés par toutes les routes.
"""

import tomllib
from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from markupsafe import Markup
from starlette.responses import Response

from ..core.entities.language import LanguageSelection
from ..services.i18n import Translator
from .sessions import SESSION_COOKIE, VisitorSession

_WEB_DIR = Path(__file__).parent
_PROJECT_ROOT = _WEB_DIR.parent.parent

templates = Jinja2Templates(directory=_WEB_DIR / "templates")

# Version dynamique lue depuis pyproject.toml, disponible dans tous les templates
_PYPROJECT = _PROJECT_ROOT / "pyproject.toml"
if _PYPROJECT.exists():
    with open(_PYPROJECT, "rb") as f:
        _pyproject = tomllib.load(f)
    templates.env.globals["app_version"] = f"CineLingua v{_pyproject['project']['version']}"
else:
    templates.env.globals["app_version"] = "CineLingua"


def get_session(request: Request) -> VisitorSession:
    """Renvoie la session du visiteur (créée si le cookie est absent ou inconnu)."""
    sessions = request.app.state.container.visitor_sessions()
    return sessions.get_or_create(request.cookies.get(SESSION_COOKIE))


def language_of(request: Request, session: VisitorSession) -> LanguageSelection:
    """Sélection de langue courante du visiteur."""
    settings = request.app.state.container.config()
    return LanguageSelection(session.translation_code, settings.default_language)


def translator_for(
    request: Request, language: Optional[str], namespaces: list[str]
) -> Translator:
    return request.app.state.container.i18n().translator(language, namespaces)


def with_session_cookie(response: Response, session: VisitorSession) -> Response:
    """Pose le cookie de session sur la réponse."""
    response.set_cookie(
        SESSION_COOKIE,
        session.session_id,
        max_age=60 * 60 * 24 * 30,
        httponly=True,
        samesite="lax",
    )
    return response


def layout_response(
    request: Request,
    body_template: str,
    t: Translator,
    language: LanguageSelection,
    status_code: int = 200,
    **context,
) -> Response:
    """Rend une page simple (sans entité) dans le layout commun."""
    return templates.TemplateResponse(
        request,
        "layout.html",
        {
            "head": Markup(""),
            "body_template": body_template,
            "current_url": str(request.url.path),
            "language": language,
            "available_languages": [],
            "loading": False,
            "t": t,
            **context,
        },
        status_code=status_code,
    )
