"""Session and attempt ledgers - bounded, append-only, in-memory history.

Both ledgers trim inline on append, so their size bounds hold between
any two observations. There is no update-in-place and no deletion other
than oldest-first eviction on overflow.

Thread safety:
- SessionLedger keeps one re-entrant lock per user. The login service
  holds it across read-history, decide, append and re-check.
- AttemptLedger has a single lock of its own.
"""

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Tuple

from geo_guard.common.constants import GeoConstants, LedgerConstants
from geo_guard.data.schemas.login_attempt import LoginAttemptRecord
from geo_guard.data.schemas.session import Session


Clock = Callable[[], int]


def current_millis() -> int:
    """Wall-clock epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SessionHistory:
    """Read-only view of one user's sessions at a point in time.

    Attributes:
        user_id: Owner of the sessions
        now_millis: Reference time the windows were computed against
        recent: Sessions inside the recent (impossible-travel) window
        active: Sessions inside the active-session window
    """
    user_id: str
    now_millis: int
    recent: Tuple[Session, ...] = ()
    active: Tuple[Session, ...] = ()


class SessionLedger:
    """Per-user bounded history of successful login sessions."""

    def __init__(
        self,
        max_sessions_per_user: int = LedgerConstants.MAX_SESSIONS_PER_USER,
        active_session_window_hours: float = LedgerConstants.ACTIVE_SESSION_WINDOW_HOURS,
        clock: Optional[Clock] = None,
    ):
        """Initialize the ledger.

        Args:
            max_sessions_per_user: Sessions kept per user; oldest are dropped first
            active_session_window_hours: Age under which a session counts as active
            clock: Source of "now" in epoch millis. Wall clock if not provided.
        """
        self.max_sessions_per_user = max_sessions_per_user
        self.active_session_window_hours = active_session_window_hours
        self._clock = clock or current_millis

        self._sessions: Dict[str, Deque[Session]] = {}
        self._user_locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def user_lock(self, user_id: str) -> threading.RLock:
        """Lock serialising all reads and writes of one user's history."""
        with self._registry_lock:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = threading.RLock()
                self._user_locks[user_id] = lock
            return lock

    def append(self, user_id: str, session: Session) -> None:
        """Append a session, evicting the oldest beyond the per-user bound."""
        with self.user_lock(user_id):
            sessions = self._sessions.get(user_id)
            if sessions is None:
                sessions = deque(maxlen=self.max_sessions_per_user)
                self._sessions[user_id] = sessions
            sessions.append(session)

    def all_sessions(self, user_id: str) -> List[Session]:
        """All retained sessions for a user, oldest first."""
        with self.user_lock(user_id):
            return list(self._sessions.get(user_id, ()))

    def recent_since(
        self,
        user_id: str,
        window_hours: float,
        now_millis: Optional[int] = None,
    ) -> List[Session]:
        """Sessions newer than `now - window_hours`, insertion order preserved."""
        now = self._clock() if now_millis is None else now_millis
        cutoff = now - window_hours * GeoConstants.MILLIS_PER_HOUR
        return [s for s in self.all_sessions(user_id) if s.timestamp_millis > cutoff]

    def active_sessions(self, user_id: str, now_millis: Optional[int] = None) -> List[Session]:
        """Sessions inside the configured active-session window."""
        now = self._clock() if now_millis is None else now_millis
        window = self.active_session_window_hours * GeoConstants.MILLIS_PER_HOUR
        return [s for s in self.all_sessions(user_id) if s.is_active(now, window)]

    def history(
        self,
        user_id: str,
        recent_window_hours: float = LedgerConstants.RECENT_SESSION_WINDOW_HOURS,
        now_millis: Optional[int] = None,
    ) -> SessionHistory:
        """Snapshot the recent and active windows for the decision engine."""
        now = self._clock() if now_millis is None else now_millis
        with self.user_lock(user_id):
            return SessionHistory(
                user_id=user_id,
                now_millis=now,
                recent=tuple(self.recent_since(user_id, recent_window_hours, now)),
                active=tuple(self.active_sessions(user_id, now)),
            )

    def session_count(self, user_id: str) -> int:
        with self.user_lock(user_id):
            return len(self._sessions.get(user_id, ()))

    def last_session(self, user_id: str) -> Optional[Session]:
        with self.user_lock(user_id):
            sessions = self._sessions.get(user_id)
            return sessions[-1] if sessions else None

    def now(self) -> int:
        return self._clock()


class AttemptLedger:
    """Global bounded log of every login attempt, oldest first."""

    def __init__(self, max_login_attempts: int = LedgerConstants.MAX_LOGIN_ATTEMPTS):
        self.max_login_attempts = max_login_attempts
        self._attempts: Deque[LoginAttemptRecord] = deque(maxlen=max_login_attempts)
        self._lock = threading.Lock()

    def append(self, record: LoginAttemptRecord) -> None:
        """Append a record, evicting the oldest once capacity is exceeded."""
        with self._lock:
            self._attempts.append(record)

    def all(self) -> List[LoginAttemptRecord]:
        """All retained records in insertion order."""
        with self._lock:
            return list(self._attempts)

    def most_recent_first(self) -> List[LoginAttemptRecord]:
        with self._lock:
            return list(reversed(self._attempts))

    def since(self, cutoff_millis: int) -> List[LoginAttemptRecord]:
        """Records strictly newer than the cutoff."""
        return [a for a in self.all() if a.timestamp_millis > cutoff_millis]

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)
