"""
Entités média renvoyées par TMDB.

Les films, séries et personnalités sont conservés tels que renvoyés par
l'API (JSON brut) : la page d'affichage choisit les champs qu'elle montre.
"""

from typing import Any, Optional

Entity = dict[str, Any]


def entity_translations(data: Optional[Entity]) -> list[dict[str, Any]]:
    """
    Extrait la liste `translations.translations` d'une entité.

    Args:
        data: Entité TMDB (peut être None)

    Returns:
        Liste des traductions embarquées, vide si absente
    """
    if not data:
        return []
    translations = data.get("translations") or {}
    return list(translations.get("translations") or [])
