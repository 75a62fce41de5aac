"""
Interfaces ports pour les clients API.

Interface abstraite (port) définissant le contrat de l'API de métadonnées
externe. L'adaptateur TMDB fournit l'implémentation concrète.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

from ..entities.media import Entity


class EntityKind(str, Enum):
    """Types d'entités exposés par l'API de métadonnées."""

    MOVIE = "movie"
    PERSON = "person"
    TV = "tv"


class IMetadataAPIClient(ABC):
    """
    Interface des APIs de métadonnées média.

    Chaque opération prend un identifiant et une langue, et renvoie l'entité
    complète (avec ses sous-ressources ajoutées) telle que renvoyée par l'API.
    """

    @abstractmethod
    async def fetch(
        self,
        kind: EntityKind,
        entity_id: int | str,
        language: Optional[str] = None,
        append: Optional[Sequence[str]] = None,
    ) -> Entity:
        """
        Récupère une entité d'un type donné.

        Args :
            kind : Type d'entité (film, personnalité, série)
            entity_id : Identifiant de l'entité côté API
            language : Code de langue de la réponse
            append : Sous-ressources à joindre à la réponse

        Retourne :
            Le corps JSON de la réponse
        """
        ...

    async def movie(
        self,
        entity_id: int | str,
        language: Optional[str] = None,
        append: Optional[Sequence[str]] = None,
    ) -> Entity:
        """Récupère un film."""
        return await self.fetch(EntityKind.MOVIE, entity_id, language, append)

    async def person(
        self,
        entity_id: int | str,
        language: Optional[str] = None,
        append: Optional[Sequence[str]] = None,
    ) -> Entity:
        """Récupère une personnalité."""
        return await self.fetch(EntityKind.PERSON, entity_id, language, append)

    async def tv(
        self,
        entity_id: int | str,
        language: Optional[str] = None,
        append: Optional[Sequence[str]] = None,
    ) -> Entity:
        """Récupère une série TV."""
        return await self.fetch(EntityKind.TV, entity_id, language, append)

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...
