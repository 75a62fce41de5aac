"""
Route de la page d'accueil.

Affiche le formulaire de recherche d'une entité par type et identifiant.
"""

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse

from ...core.ports.api_clients import EntityKind
from ..deps import get_session, language_of, layout_response, translator_for, with_session_cookie

router = APIRouter()


@router.get("/")
async def home(request: Request):
    """Page d'accueil avec le formulaire d'accès direct."""
    session = get_session(request)
    language = language_of(request, session)
    t = translator_for(request, language.resolved, ["home", "common"])
    response = layout_response(
        request,
        "home.html",
        t,
        language,
        kinds=[kind.value for kind in EntityKind],
        ui_languages=request.app.state.container.i18n().available_languages,
    )
    return with_session_cookie(response, session)


@router.get("/lookup")
async def lookup(kind: EntityKind = Query(...), entity_id: int = Query(..., alias="id")):
    """Redirige le formulaire d'accueil vers la page de l'entité."""
    return RedirectResponse(f"/{kind.value}/{entity_id}", status_code=303)
