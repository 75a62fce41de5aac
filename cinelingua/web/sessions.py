"""
Sessions des visiteurs.

Chaque visiteur (identifié par un cookie) possède son propre état partagé,
sa langue de traduction et l'instance de la dernière page affichée. La
navigation vers une autre entité du même type réutilise cette instance,
comme un changement de langue.
"""

import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Optional

from loguru import logger

from ..core.ports.api_clients import EntityKind
from ..services.app_state import AppStateRef
from .page import PageWithId

SESSION_COOKIE = "cinelingua_session"


@dataclass
class VisitorSession:
    """
    Session d'un visiteur.

    Attributs :
        session_id : Identifiant du cookie de session
        app_state : État partagé (traductions, chargement)
        translation_code : Langue de traduction choisie, None pour la langue par défaut
        page_kind : Type de la page courante
        page : Instance de la page courante
        last_seen : Horodatage (horloge monotone) du dernier accès
    """

    session_id: str
    app_state: AppStateRef = field(default_factory=AppStateRef)
    translation_code: Optional[str] = None
    page_kind: Optional[EntityKind] = None
    page: Optional[PageWithId] = None
    last_seen: float = 0.0

    def current_page(self, kind: EntityKind) -> Optional[PageWithId]:
        """Renvoie l'instance de page courante si elle sert ce type d'entité."""
        return self.page if self.page_kind == kind else None

    def show(self, kind: EntityKind, page: PageWithId) -> None:
        self.page_kind = kind
        self.page = page


class VisitorSessions:
    """
    Registre en mémoire des sessions visiteurs.

    Les sessions inactives depuis plus de `idle_timeout` secondes sont
    expirées ; au-delà de `max_sessions`, les moins récemment utilisées
    sont évincées.
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        idle_timeout: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._sessions: OrderedDict[str, VisitorSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get_or_create(self, session_id: Optional[str]) -> VisitorSession:
        """Renvoie la session du cookie, ou en crée une nouvelle."""
        now = self._clock()
        self._expire(now)

        session = self._sessions.get(session_id) if session_id else None
        if session is None:
            session = VisitorSession(session_id=uuid.uuid4().hex)
            self._sessions[session.session_id] = session
            self._evict()
        else:
            self._sessions.move_to_end(session.session_id)
        session.last_seen = now
        return session

    def _expire(self, now: float) -> None:
        """Supprime les sessions inactives (les plus anciennes sont en tête)."""
        while self._sessions:
            session_id, session = next(iter(self._sessions.items()))
            if now - session.last_seen <= self.idle_timeout:
                break
            del self._sessions[session_id]
            logger.debug("Session expirée", session_id=session_id)

    def _evict(self) -> None:
        while len(self._sessions) > self.max_sessions:
            session_id, _ = self._sessions.popitem(last=False)
            logger.debug("Session évincée", session_id=session_id)
