import asyncio

from aura.core.orchestrator import new_conversation
from aura.services.session_manager import SessionManager


def test_unsaved_session_locks_are_dropped():
    sessions = SessionManager(ttl_seconds=0)
    for i in range(1000):
        sid = f"unknown-{i}"
        sessions.lock(sid)
        assert sessions.get_conversation(sid) is None
    assert len(sessions._locks) == 0


def test_held_lock_survives_purge():
    sessions = SessionManager(ttl_seconds=3600)

    async def scenario():
        async with sessions.lock("busy"):
            sessions.lock("idle")
            sessions.get_conversation("other")
            return set(sessions._locks)

    assert asyncio.run(scenario()) == {"busy"}


def test_saved_session_keeps_lock_until_expiry():
    sessions = SessionManager(ttl_seconds=3600)
    sessions.save_conversation("s1", new_conversation())
    lock = sessions.lock("s1")
    assert sessions.get_conversation("s1") is not None
    assert sessions.lock("s1") is lock


def test_expired_session_and_lock_are_removed():
    sessions = SessionManager(ttl_seconds=0)
    sessions.save_conversation("s1", new_conversation())
    sessions.lock("s1")
    assert sessions.get_conversation("s1") is None
    assert len(sessions) == 0
    assert len(sessions._locks) == 0
