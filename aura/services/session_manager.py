# This module keeps server-side conversation sessions in memory.
# Author: Aura Team
# Date: 2025-06-13
# Version: 0.2.0

import asyncio
import time
from typing import Dict, Optional, Tuple
from uuid import uuid4

from aura.core.config import get_settings
from aura.models.common import Conversation
from aura.utils.logger import console

class SessionManager:
    """
    Holds one Conversation per session id, in process memory only.
    Each session has its own lock so two requests on the same session
    never relay concurrently. Idle sessions expire after the configured TTL.
    """

    def __init__(self, ttl_seconds: Optional[int] = None):
        self._session_ttl = ttl_seconds if ttl_seconds is not None else get_settings().SESSION_TTL_SECONDS
        self._sessions: Dict[str, Tuple[Conversation, float]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @staticmethod
    def new_session_id() -> str:
        """Generates a new, unique session ID."""
        return str(uuid4())

    def lock(self, session_id: str) -> asyncio.Lock:
        """Returns the lock guarding `session_id`, creating it on first use."""
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock

    def _purge_expired(self):
        deadline = time.monotonic() - self._session_ttl
        expired = [sid for sid, (_, touched) in self._sessions.items() if touched <= deadline]
        for session_id in expired:
            del self._sessions[session_id]
            console.info(f"Session '{session_id}' expired.")
        # A lock outlives its session only while a request holds it.
        stale = [sid for sid, lock in self._locks.items() if sid not in self._sessions and not lock.locked()]
        for session_id in stale:
            del self._locks[session_id]

    def get_conversation(self, session_id: str) -> Optional[Conversation]:
        """Returns the stored conversation, or None for an unknown or expired session."""
        self._purge_expired()
        entry = self._sessions.get(session_id)
        if entry is None:
            console.info(f"Session '{session_id}' not found.")
            return None
        console.info(f"Session '{session_id}' retrieved.")
        return entry[0]

    def save_conversation(self, session_id: str, conversation: Conversation):
        self._sessions[session_id] = (conversation, time.monotonic())
        console.info(f"Session '{session_id}' saved ({len(conversation.tail)} turns).")

    def __len__(self) -> int:
        return len(self._sessions)

session_manager = SessionManager()
