"""User Store - in-memory credential resolution.

One store per process (or per test), passed explicitly to whoever
needs it.
"""

import logging
import threading
from typing import Dict, List, Optional

from geo_guard.common.exceptions import UserNotFoundError
from geo_guard.data.schemas.user import User


logger = logging.getLogger(__name__)


class UserStore:
    """Owned mapping from user id to User."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def add_user(self, user_id: str, username: str, secret: str) -> User:
        """Create or replace a user."""
        user = User.create(user_id=user_id, username=username, secret=secret)
        with self._lock:
            self._users[user_id] = user
        logger.info("User registered", extra={"user_id": user_id})
        return user

    def get_user(self, user_id: str) -> User:
        """Look up a user by id.

        Raises:
            UserNotFoundError: If no user has this id
        """
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(
                f"User {user_id} not found", details={"user_id": user_id}
            )
        return user

    def resolve(self, username: str) -> Optional[User]:
        """Resolve a username to its user, or None."""
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user
        return None

    def all_users(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


def seed_demo_users(store: UserStore) -> None:
    """Register the two demo accounts used in local development."""
    store.add_user("user1", "john@example.com", "password123")
    store.add_user("user2", "jane@example.com", "password456")
