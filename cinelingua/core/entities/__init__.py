"""
Entités du domaine.

Exporte la sélection de langue et les helpers d'accès aux entités TMDB.
"""

from .language import LanguageSelection
from .media import Entity, entity_translations

__all__ = ["Entity", "LanguageSelection", "entity_translations"]
