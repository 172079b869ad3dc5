"""
In-memory registry of calculator sessions.

Each browser session owns one adapter (engine + timer queue). All engine
access goes through the registry lock so requests run one at a time.
Sessions idle longer than SESSION_IDLE_TIMEOUT are evicted whenever a new
one is created.
"""

import logging
import os
import threading
import time
import uuid
from datetime import datetime
from typing import Dict, Optional, TypedDict

from ..adapter import KeypadAdapter
from ..timers import TimerQueue

logger = logging.getLogger(__name__)

# Clock for new sessions' timer queues and idle tracking
clock = time.monotonic

SESSION_IDLE_TIMEOUT = float(os.environ.get("KEYPAD_CALC_SESSION_IDLE_TIMEOUT", "1800"))


class SessionState(TypedDict):
    """Session state returned to the browser."""
    session_id: str
    display: str
    current_input: str
    previous_input: Optional[str]
    operation: Optional[str]
    should_reset_display: bool
    is_error_state: bool
    created_at: str


_sessions: Dict[str, KeypadAdapter] = {}
_created: Dict[str, str] = {}
_last_seen: Dict[str, float] = {}
_sessions_lock = threading.Lock()


def create_session() -> SessionState:
    """
    Create a calculator session in its initial state.

    Returns:
        Session state including the new ``session_id``
    """
    session_id = str(uuid.uuid4())
    adapter = KeypadAdapter(timers=TimerQueue(clock))

    with _sessions_lock:
        _evict_idle()
        _sessions[session_id] = adapter
        _created[session_id] = datetime.utcnow().isoformat()
        _last_seen[session_id] = clock()
        logger.info("Created calculator session %s", session_id)
        return _state(session_id)


def get_session(session_id: str) -> Optional[SessionState]:
    """
    Get session state after firing any due auto-clear.

    Args:
        session_id: Session identifier

    Returns:
        Session state or None if not found
    """
    with _sessions_lock:
        adapter = _sessions.get(session_id)
        if adapter is None:
            return None
        _last_seen[session_id] = clock()
        adapter.tick()
        return _state(session_id)


def press(session_id: str, label: str) -> Optional[SessionState]:
    """
    Forward a button label to the session's engine.

    Args:
        session_id: Session identifier
        label: Digit or action label

    Returns:
        Updated session state or None if not found
    """
    with _sessions_lock:
        adapter = _sessions.get(session_id)
        if adapter is None:
            return None
        _last_seen[session_id] = clock()
        adapter.press(label)
        return _state(session_id)


def delete_session(session_id: str) -> bool:
    with _sessions_lock:
        removed = _drop(session_id)
    if removed:
        logger.info("Deleted calculator session %s", session_id)
    return removed


def session_count() -> int:
    with _sessions_lock:
        return len(_sessions)


def clear_sessions() -> None:
    with _sessions_lock:
        _sessions.clear()
        _created.clear()
        _last_seen.clear()


def _evict_idle() -> int:
    """Drop sessions idle past the timeout; caller holds the lock."""
    cutoff = clock() - SESSION_IDLE_TIMEOUT
    stale = [sid for sid, seen in _last_seen.items() if seen <= cutoff]
    for sid in stale:
        _drop(sid)
    if stale:
        logger.info("Evicted %d idle calculator sessions", len(stale))
    return len(stale)


def _drop(session_id: str) -> bool:
    _created.pop(session_id, None)
    _last_seen.pop(session_id, None)
    return _sessions.pop(session_id, None) is not None


def _state(session_id: str) -> SessionState:
    snapshot = _sessions[session_id].engine.snapshot()
    return SessionState(
        session_id=session_id,
        created_at=_created[session_id],
        **snapshot,
    )
