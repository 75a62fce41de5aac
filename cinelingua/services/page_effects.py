"""
Réaction d'une page aux changements de ses entrées.

Fonction pure qui compare les entrées précédentes et suivantes d'une page
et renvoie la liste des effets à exécuter, dans l'ordre. Testable sans
framework de rendu.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..core.entities.language import LanguageSelection
from ..core.entities.media import Entity


class Effect(str, Enum):
    """Effets possibles d'une mise à jour de page."""

    PUSH_TRANSLATIONS = "push_translations"
    PROJECT = "project"
    REFETCH = "refetch"


@dataclass(frozen=True)
class PageInputs:
    """
    Entrées d'une page qui déclenchent des effets.

    Attributs :
        data : Entité chargée au rendu serveur (None si absente)
        language : Sélection de langue courante
    """

    data: Optional[Entity]
    language: LanguageSelection

    @property
    def entity_id(self) -> Optional[Any]:
        return self.data.get("id") if self.data else None


def plan_effects(prev: PageInputs, current: PageInputs, can_fetch: bool) -> list[Effect]:
    """
    Calcule les effets d'une mise à jour.

    - PUSH_TRANSLATIONS : toujours (idempotent)
    - PROJECT : l'entité a changé d'identifiant (navigation vers une autre page
      servie par la même instance)
    - REFETCH : une des deux langues a changé, une entité est chargée et la
      page sait appeler l'API

    Args:
        prev: Entrées du rendu précédent
        current: Nouvelles entrées
        can_fetch: La page est configurée avec un appel API

    Returns:
        Effets à exécuter, dans l'ordre
    """
    effects = [Effect.PUSH_TRANSLATIONS]

    if prev.data and current.data and prev.entity_id != current.entity_id:
        effects.append(Effect.PROJECT)

    language_changed = (
        prev.language.translation_code != current.language.translation_code
        or prev.language.default_code != current.language.default_code
    )
    if current.data and can_fetch and language_changed:
        effects.append(Effect.REFETCH)

    return effects
