"""
Route de changement de langue.

Le visiteur choisit une langue de traduction ; la page courante reçoit la
nouvelle sélection et recharge son entité dans cette langue.
"""

from dataclasses import replace

from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse

from ..deps import get_session, language_of, translator_for, with_session_cookie
from .entities import render_page

router = APIRouter()


@router.post("/language")
async def change_language(request: Request, language: str = Form("")):
    """
    Change la langue de traduction du visiteur.

    Une valeur vide revient à la langue par défaut. Sans page courante,
    redirige vers l'accueil.
    """
    session = get_session(request)
    session.translation_code = language or None
    selection = language_of(request, session)

    instance = session.page
    if instance is None:
        return with_session_cookie(RedirectResponse("/", status_code=303), session)

    next_props = replace(
        instance.props,
        language=selection,
        translator=translator_for(
            request, selection.resolved, instance.page.namespaces_required
        ),
    )
    await instance.update(next_props)
    return render_page(request, instance.render(), session)
