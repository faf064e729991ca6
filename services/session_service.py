"""Session Service Module

Keeps one ConversationController per active chat session. Sessions live only
in memory: restarting the server starts every visitor from the greeting.
Sessions idle for longer than the configured TTL are dropped the next time
the registry is touched.
"""
import logging
import threading
import time
import uuid
from typing import Callable, Dict, List, Optional

from agents.astrologer_agent import AstrologerAgent
from config.settings import SESSION_IDLE_TTL_SECONDS
from services.conversation import ConversationController

logger = logging.getLogger(__name__)


class InMemorySessionService:
    """
    In-memory registry of conversation sessions.

    Features:
    - Create/Get/Delete sessions
    - A fresh AstrologerAgent per session so a re-selected key stays local
    - Idle sessions expire after `idle_ttl_seconds` (None keeps them forever)
    """

    def __init__(self, agent_factory: Callable[[], AstrologerAgent] = AstrologerAgent,
                 idle_ttl_seconds: Optional[float] = SESSION_IDLE_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self._sessions: Dict[str, ConversationController] = {}
        self._created_at: Dict[str, float] = {}
        self._last_seen: Dict[str, float] = {}
        self._agent_factory = agent_factory
        self._idle_ttl = idle_ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def create_session(self, session_id: str = None) -> str:
        """Create a new session and return its id."""
        if session_id is None:
            session_id = uuid.uuid4().hex

        controller = ConversationController(agent=self._agent_factory())
        with self._lock:
            self._evict_idle()
            now = self._clock()
            self._sessions[session_id] = controller
            self._created_at[session_id] = now
            self._last_seen[session_id] = now

        logger.info(f"Created session: {session_id}")
        return session_id

    def get_session(self, session_id: str) -> Optional[ConversationController]:
        """Get a session's controller by ID and mark it as active."""
        with self._lock:
            self._evict_idle()
            controller = self._sessions.get(session_id)
            if controller is not None:
                self._last_seen[session_id] = self._clock()
            return controller

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        with self._lock:
            if not self._drop(session_id):
                return False

        logger.info(f"Deleted session: {session_id}")
        return True

    def list_sessions(self) -> List[str]:
        """List all session ids, oldest first."""
        with self._lock:
            self._evict_idle()
            return sorted(self._sessions, key=self._created_at.__getitem__)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _drop(self, session_id: str) -> bool:
        # Caller holds _lock
        if self._sessions.pop(session_id, None) is None:
            return False
        self._created_at.pop(session_id, None)
        self._last_seen.pop(session_id, None)
        return True

    def _evict_idle(self):
        # Caller holds _lock. Sessions with a call in flight are kept.
        if self._idle_ttl is None:
            return
        cutoff = self._clock() - self._idle_ttl
        expired = [sid for sid, seen in self._last_seen.items()
                   if seen < cutoff and not self._sessions[sid].busy]
        for sid in expired:
            self._drop(sid)
        if expired:
            logger.info(f"Expired {len(expired)} idle session(s)")
