"""
Pages d'entités rendues côté serveur à partir d'un identifiant de route.

`with_calling_api` décore une vue qui affiche une entité (film, série,
personnalité) identifiée par `id` dans la route.

Cycle de vie d'une page :

Rendu serveur
- get_initial_props -> appel API dans la langue effective
- construction (état = données initiales)
- mount -> projection dans la langue choisie
- render

Réutilisation de l'instance par le même visiteur
- update -> effets calculés par plan_effects (traductions, projection, re-requête)
- render
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from ..core.entities.language import LanguageSelection
from ..core.entities.media import Entity, entity_translations
from ..services.app_state import AppStateRef
from ..services.i18n import Translator
from ..services.page_effects import Effect, PageInputs, plan_effects
from ..services.translations import retrieve_data_with_fallback
from .hreflang import render_hreflang_tags

ApiCall = Callable[[Any, str], Awaitable[Entity]]


@dataclass
class PageContext:
    """
    Contexte fourni par la route au chargement initial.

    Attributs :
        query_id : Identifiant de l'entité extrait de la route
        language : Sélection de langue du visiteur
        app_state : État partagé du visiteur
    """

    query_id: Any
    language: LanguageSelection
    app_state: Optional[AppStateRef] = None


@dataclass(frozen=True)
class InitialProps:
    """Résultat du chargement initial, consommé par la route."""

    data: Optional[Entity]
    namespaces_required: list[str]


@dataclass
class PageProps:
    """Entrées d'une instance de page."""

    data: Optional[Entity]
    base_path: str
    pathname: str
    language: LanguageSelection
    app_state: AppStateRef
    translator: Translator

    @property
    def inputs(self) -> PageInputs:
        return PageInputs(self.data, self.language)


@dataclass
class PageBody:
    """Template et contexte produits par une vue."""

    template: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class RenderedPage:
    """Page complète prête à être rendue par Jinja2."""

    template: str
    context: dict[str, Any]
    status_code: int = 200


@dataclass
class PageState:
    """État d'affichage : None avant chargement, en cas d'absence ou d'échec."""

    data: Optional[Entity] = None


async def prepare_params_and_call_api(
    api_call: ApiCall, entity_id: Any, language: LanguageSelection
) -> Entity:
    """Appelle l'API dans la langue effective de la sélection."""
    logger.debug("Appel API", entity_id=str(entity_id), language=language.resolved)
    return await api_call(entity_id, language.resolved)


class PageWithId:
    """
    Instance de page liée à un visiteur.

    Conserve les props reçues et l'état d'affichage ; réagit aux nouvelles
    props via update().
    """

    def __init__(self, page: "CallingApiPage", props: PageProps) -> None:
        self.page = page
        self.props = props
        # Les données initiales sont copiées dans l'état pour pouvoir les
        # remplacer lors d'un changement de langue
        self.state = PageState(data=props.data)
        self._fetch_seq = 0
        self._fetch_pending = False
        self._log = logger.bind(page=page.display_name)
        self._log.debug("constructor")

    @property
    def display_name(self) -> str:
        return self.page.display_name

    def push_translations(self) -> None:
        """Publie les traductions de l'entité reçue dans l'état partagé."""
        self.props.app_state.set_translations(entity_translations(self.props.data))

    def set_state_data(self, data: Entity) -> None:
        """
        Stocke l'entité projetée dans la langue choisie, avec repli sur la
        langue par défaut pour les champs non traduits (title, overview,
        biography...).
        """
        self._log.debug("set_state_data")
        self.state.data = retrieve_data_with_fallback(
            data,
            self.props.language.default_code,
            self.props.language.translation_code,
        )

    def mount(self) -> None:
        """Premier affichage : synchronise les traductions et projette les données."""
        self._log.debug("mount")
        self.push_translations()
        if self.props.data:
            self.set_state_data(self.props.data)

    async def update(self, next_props: PageProps) -> list[Effect]:
        """
        Applique de nouvelles props et exécute les effets correspondants.

        Returns:
            Les effets exécutés, dans l'ordre
        """
        prev_props, self.props = self.props, next_props
        effects = plan_effects(
            prev_props.inputs, next_props.inputs, self.page.api_call is not None
        )
        self._log.debug("update", effects=[e.value for e in effects])

        for effect in effects:
            if effect is Effect.PUSH_TRANSLATIONS:
                self.push_translations()
            elif effect is Effect.PROJECT:
                self.cancel_pending_fetch()
                self.set_state_data(next_props.data)
            elif effect is Effect.REFETCH:
                await self.refetch()
        return effects

    def cancel_pending_fetch(self) -> None:
        """
        Invalide la re-requête en cours (navigation vers une autre entité).

        Sa réponse sera ignorée ; l'indicateur de chargement est baissé.
        """
        if not self._fetch_pending:
            return
        self._fetch_seq += 1
        self._fetch_pending = False
        self._log.debug("Re-requête en cours abandonnée", seq=self._fetch_seq)
        self.props.app_state.set_loading(False)

    async def refetch(self) -> None:
        """
        Recharge l'entité courante dans la nouvelle langue.

        L'indicateur de chargement est levé avant la requête et baissé après,
        en cas de succès comme d'échec. Seule la réponse de la dernière
        requête émise est prise en compte.
        """
        self._fetch_seq += 1
        seq = self._fetch_seq
        app_state = self.props.app_state
        entity_id = self.props.data["id"]

        self._fetch_pending = True
        app_state.set_loading(True)
        try:
            data = await prepare_params_and_call_api(
                self.page.api_call, entity_id, self.props.language
            )
        except Exception as e:
            if seq != self._fetch_seq:
                self._log.debug("Échec obsolète ignoré", seq=seq)
                return
            self._log.warning(f"Échec du rechargement de {entity_id}: {e}")
            self._fetch_pending = False
            self.state.data = None
            app_state.set_loading(False)
            return

        if seq != self._fetch_seq:
            self._log.debug("Réponse obsolète ignorée", seq=seq)
            return
        self._fetch_pending = False
        self.set_state_data(data)
        app_state.set_loading(False)
        app_state.set_translations(entity_translations(data))

    @property
    def url(self) -> str:
        return f"{self.props.base_path}{self.props.pathname}"

    def render(self) -> RenderedPage:
        """Compose le layout : liens hreflang, puis la vue ou le message d'erreur."""
        self._log.debug("render")
        app_state = self.props.app_state.current
        head = render_hreflang_tags(self.url, app_state.available_languages_codes)
        t = self.props.translator.with_namespaces(self.page.namespaces)

        status_code = 200
        if not self.state.data and self.page.api_call is not None:
            body = PageBody("error.html")
            status_code = 404
        else:
            body = self.page.view(
                data=self.state.data,
                base_path=self.props.base_path,
                pathname=self.props.pathname,
            )

        context = {
            **body.context,
            "head": head,
            "body_template": body.template,
            "current_url": self.url,
            "language": self.props.language,
            "available_languages": app_state.available_languages_codes,
            "loading": app_state.loading,
            "t": t,
        }
        return RenderedPage("layout.html", context, status_code)


class CallingApiPage:
    """
    Page décorée par with_calling_api.

    Attributes:
        view: Vue affichant l'entité
        api_call: Appel API (id, langue) -> entité, ou None
        namespaces: Namespace i18n principal de la vue
        namespaces_required: Namespaces préchargés pour le rendu
    """

    def __init__(
        self,
        view: Callable[..., PageBody],
        api_call: Optional[ApiCall],
        namespaces: str,
        namespaces_required: list[str],
    ) -> None:
        self.view = view
        self.api_call = api_call
        self.namespaces = namespaces
        self.namespaces_required = list(namespaces_required)
        self.display_name = f"with_calling_api({getattr(view, '__name__', 'view')})"

    async def get_initial_props(self, ctx: PageContext) -> InitialProps:
        """
        Chargement initial, au rendu serveur.

        Les erreurs de l'API sont propagées à la route.
        """
        logger.bind(page=self.display_name).debug("get_initial_props")
        data = None
        if self.api_call is not None:
            data = await prepare_params_and_call_api(
                self.api_call, ctx.query_id, ctx.language
            )
        if ctx.app_state is not None:
            ctx.app_state.set_translations(entity_translations(data))
        return InitialProps(data=data, namespaces_required=self.namespaces_required)

    def __call__(self, props: PageProps) -> PageWithId:
        return PageWithId(self, props)


def with_calling_api(
    *,
    api_call: Optional[ApiCall] = None,
    namespaces: str,
    namespaces_required: list[str],
) -> Callable[[Callable[..., PageBody]], CallingApiPage]:
    """
    Décorateur des vues qui affichent une entité identifiée par `id` dans la route.

    Args:
        api_call: Récupère l'entité pour (id, langue) ; si absent, la vue
            reçoit toujours None
        namespaces: Namespace i18n principal de la vue
        namespaces_required: Namespaces renvoyés par get_initial_props pour
            préparer les traductions

    Example:
        @with_calling_api(
            api_call=lambda id, language: api.movie(id, language=language),
            namespaces="movie",
            namespaces_required=["common", "movie"],
        )
        def movie_view(data, base_path, pathname):
            return PageBody("entities/movie.html", {"movie": data})
    """

    def decorator(view: Callable[..., PageBody]) -> CallingApiPage:
        return CallingApiPage(view, api_call, namespaces, namespaces_required)

    return decorator
