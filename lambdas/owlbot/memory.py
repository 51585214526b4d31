import threading
from dataclasses import dataclass, field
from typing import Dict, Set

STATE_MENU = "menu"
STATE_DIRECTIONS = "directions"
STATE_BUSINESSES = "businesses"

STATES = (STATE_MENU, STATE_DIRECTIONS, STATE_BUSINESSES)


@dataclass
class Session:
    user_id: str
    state: str = STATE_MENU
    clarifying: bool = False
    shown: Dict[str, Set[int]] = field(default_factory=dict)

    def shown_in(self, pool: str) -> Set[int]:
        return self.shown.setdefault(pool, set())

    def to_log(self) -> Dict[str, object]:
        return {
            "user_id": self.user_id,
            "state": self.state,
            "clarifying": self.clarifying,
            "shown": {k: sorted(v) for k, v in self.shown.items()},
        }


class SessionStore:
    """Per-user dialogue sessions, held for the life of the process.

    Nothing is persisted: a restart forgets every user, and the next message
    from them starts a fresh session exactly like first contact. There is no
    delete operation.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, user_id: str) -> Session:
        session = self._sessions.get(user_id)
        if session is not None:
            return session
        with self._guard:
            session = self._sessions.get(user_id)
            if session is None:
                # The lock must exist before the unguarded fast path can see the session
                self._locks.setdefault(user_id, threading.Lock())
                session = Session(user_id=user_id)
                self._sessions[user_id] = session
            return session

    def lock_for(self, user_id: str) -> threading.Lock:
        """One lock per user; turns for different users never contend."""
        self.get(user_id)
        with self._guard:
            return self._locks.setdefault(user_id, threading.Lock())

    def set_state(self, user_id: str, state: str) -> None:
        self.get(user_id).state = state

    def set_clarifying(self, user_id: str, clarifying: bool) -> None:
        self.get(user_id).clarifying = bool(clarifying)

    def record_shown(self, user_id: str, pool: str, index: int) -> None:
        self.get(user_id).shown_in(pool).add(index)

    def reset_pool(self, user_id: str, pool: str) -> None:
        self.get(user_id).shown_in(pool).clear()
