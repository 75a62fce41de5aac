"""
Routes des fiches d'entités : films, séries et personnalités.

`/{type}/{id}` affiche l'entité dans la langue du visiteur,
`/{type}/{id}/{langue}` est la version linguistique référencée par les
liens hreflang.
"""

from typing import Optional

from fastapi import APIRouter, Request

from ...core.entities.language import LanguageSelection
from ...core.ports.api_clients import EntityKind
from ..deps import get_session, language_of, templates, translator_for, with_session_cookie
from ..page import PageContext, PageProps, PageWithId, RenderedPage
from ..sessions import VisitorSession

router = APIRouter()


def render_page(request: Request, rendered: RenderedPage, session: VisitorSession):
    """Transforme une page rendue en réponse HTML avec cookie de session."""
    response = templates.TemplateResponse(
        request,
        rendered.template,
        rendered.context,
        status_code=rendered.status_code,
    )
    return with_session_cookie(response, session)


def _reusable(page: Optional[PageWithId], language: LanguageSelection) -> bool:
    """
    Une instance est réutilisée pour naviguer vers une autre entité du même
    type si elle affiche déjà une entité dans la même langue. Après un échec
    de rechargement (état vide), une nouvelle instance est montée.
    """
    return (
        page is not None
        and bool(page.props.data)
        and bool(page.state.data)
        and page.props.language == language
    )


async def show_entity(
    request: Request,
    kind: EntityKind,
    entity_id: int,
    translation_code: Optional[str] = None,
):
    """Charge et rend la fiche d'une entité pour le visiteur courant."""
    session = get_session(request)
    if translation_code is not None:
        session.translation_code = translation_code
    language = language_of(request, session)
    settings = request.app.state.container.config()
    page = request.app.state.pages[kind]

    initial = await page.get_initial_props(
        PageContext(query_id=entity_id, language=language, app_state=session.app_state)
    )
    props = PageProps(
        data=initial.data,
        base_path=settings.base_path,
        pathname=f"/{kind.value}/{entity_id}",
        language=language,
        app_state=session.app_state,
        translator=translator_for(request, language.resolved, initial.namespaces_required),
    )

    instance = session.current_page(kind)
    if _reusable(instance, language):
        await instance.update(props)
    else:
        instance = page(props)
        instance.mount()
        session.show(kind, instance)

    return render_page(request, instance.render(), session)


@router.get("/{kind}/{entity_id}")
async def entity_detail(request: Request, kind: EntityKind, entity_id: int):
    """Fiche d'une entité dans la langue du visiteur."""
    return await show_entity(request, kind, entity_id)


@router.get("/{kind}/{entity_id}/{language}")
async def entity_detail_translated(
    request: Request, kind: EntityKind, entity_id: int, language: str
):
    """Fiche d'une entité dans une langue donnée (cible des liens hreflang)."""
    return await show_entity(request, kind, entity_id, translation_code=language)
