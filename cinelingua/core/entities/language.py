"""
Sélection de langue d'une page.

Une page est affichée dans la langue de traduction choisie par le visiteur
si elle existe, sinon dans la langue par défaut du site.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LanguageSelection:
    """
    Couple (langue de traduction, langue par défaut).

    Attributs :
        translation_code : Code complet choisi par le visiteur (ex: "fr-FR"), ou None
        default_code : Code complet de la langue par défaut du site (ex: "en-US")
    """

    translation_code: Optional[str]
    default_code: str

    @property
    def resolved(self) -> str:
        """Langue effective : la traduction si définie, sinon la langue par défaut."""
        return self.translation_code or self.default_code
