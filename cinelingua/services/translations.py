"""
Projection d'une entité dans la langue choisie.

Les entités TMDB embarquent la liste de leurs traductions
(`translations.translations`). Chaque traduction porte les valeurs
traduites des champs texte (title, name, overview, biography, tagline...).
La projection remplace les valeurs de l'entité par celles de la traduction
correspondant à la langue effective, et garde les valeurs par défaut pour
les champs non traduits.
"""

from typing import Any, Optional

from ..core.entities.language import LanguageSelection
from ..core.entities.media import Entity, entity_translations


def _split_code(code: str) -> tuple[str, Optional[str]]:
    """Sépare "fr-FR" en ("fr", "FR") et "fr" en ("fr", None)."""
    language, _, region = code.replace("_", "-").partition("-")
    return language.lower(), (region.upper() or None)


def find_translation(
    translations: list[dict[str, Any]], code: str
) -> Optional[dict[str, Any]]:
    """
    Cherche la traduction correspondant à un code de langue.

    La correspondance exacte langue + région est prioritaire ; à défaut,
    la première traduction de la même langue est retenue.

    Args:
        translations: Traductions embarquées de l'entité
        code: Code court ("fr") ou complet ("fr-FR")

    Returns:
        La traduction trouvée, ou None
    """
    language, region = _split_code(code)
    same_language = [
        t for t in translations if (t.get("iso_639_1") or "").lower() == language
    ]
    if region:
        for translation in same_language:
            if (translation.get("iso_3166_1") or "").upper() == region:
                return translation
    return same_language[0] if same_language else None


def retrieve_data_with_fallback(
    data: Entity,
    default_code: str,
    translation_code: Optional[str] = None,
) -> Entity:
    """
    Projette une entité dans la langue effective.

    Args:
        data: Entité brute (non modifiée)
        default_code: Langue par défaut du site
        translation_code: Langue de traduction choisie (optionnelle)

    Returns:
        Nouvelle entité dont les champs traduits non vides remplacent
        les valeurs par défaut
    """
    resolved = LanguageSelection(translation_code, default_code).resolved
    translation = find_translation(entity_translations(data), resolved)
    if translation is None:
        return dict(data)

    overrides = {
        key: value
        for key, value in (translation.get("data") or {}).items()
        if value
    }
    return {**data, **overrides}
