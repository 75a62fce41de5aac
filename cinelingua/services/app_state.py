"""
État applicatif partagé d'un visiteur.

Remplace les stores observables globaux (traductions et UI) par un instantané
immuable. Les fonctions de mutation renvoient un nouvel instantané ; la
référence AppStateRef conserve l'instantané courant et notifie ses abonnés,
ce qui rend l'ordre des mutations explicite et vérifiable.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable

from loguru import logger

Listener = Callable[["AppState"], None]


@dataclass(frozen=True)
class AppState:
    """
    Instantané de l'état partagé.

    Attributs :
        translations : Traductions embarquées de l'entité affichée
        loading : Indicateur global de chargement
    """

    translations: tuple[dict[str, Any], ...] = ()
    loading: bool = False

    @property
    def available_languages_codes(self) -> list[str]:
        """
        Codes complets des langues disponibles pour l'entité (ex: "fr-FR").

        L'ordre des traductions est conservé, les doublons sont ignorés.
        """
        codes: list[str] = []
        for translation in self.translations:
            code = translation_code(translation)
            if code and code not in codes:
                codes.append(code)
        return codes


def translation_code(translation: dict[str, Any]) -> str:
    """Construit le code complet "langue-REGION" d'une traduction TMDB."""
    language = translation.get("iso_639_1") or ""
    region = translation.get("iso_3166_1") or ""
    if language and region:
        return f"{language}-{region}"
    return language


def with_translations(state: AppState, translations: Iterable[dict[str, Any]]) -> AppState:
    """Renvoie un nouvel état avec les traductions remplacées."""
    return replace(state, translations=tuple(translations))


def with_loading(state: AppState, loading: bool) -> AppState:
    """Renvoie un nouvel état avec l'indicateur de chargement mis à jour."""
    return replace(state, loading=loading)


@dataclass
class AppStateRef:
    """
    Référence mutable vers l'instantané courant.

    Passée par référence à chaque opération du cycle de vie des pages.
    Les abonnés reçoivent chaque nouvel instantané, dans l'ordre d'application.
    """

    current: AppState = field(default_factory=AppState)
    _listeners: list[Listener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Abonne un listener aux changements d'état.

        Returns:
            Fonction de désabonnement
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def apply(self, mutation: Callable[..., AppState], *args: Any) -> AppState:
        """Applique une fonction de mutation et publie le nouvel instantané."""
        self.current = mutation(self.current, *args)
        for listener in list(self._listeners):
            listener(self.current)
        return self.current

    def set_translations(self, translations: Iterable[dict[str, Any]]) -> AppState:
        """Publie les traductions de l'entité affichée."""
        return self.apply(with_translations, translations)

    def set_loading(self, loading: bool) -> AppState:
        """Publie l'indicateur de chargement."""
        logger.debug("Indicateur de chargement", loading=loading)
        return self.apply(with_loading, loading)
