"""User service with an in-memory implementation."""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable

from userapi.models.user import User, UserPayload

logger = logging.getLogger(__name__)

SEED_USERS: tuple[User, ...] = (
    User(id=1, name="Alice", email="alice@example.com"),
    User(id=2, name="Bob", email="bob@example.com"),
)


class UserService(ABC):
    """Abstract interface for user service."""

    @abstractmethod
    def add_user(self, payload: UserPayload) -> User:
        """Store a new user under a freshly allocated ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Get a user by ID."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    def update_user(self, user_id: int, payload: UserPayload) -> User | None:
        """Replace an existing user, keeping its ID.

        Returns:
            The updated user, or None if no user has that ID
        """
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> bool:
        """Delete a user."""
        pass

    @abstractmethod
    def search_users(self, term: str) -> list[User]:
        """Search for users by name or email (partial match, case-insensitive).

        Args:
            term: Text to look for in name or email

        Returns:
            List of User objects matching the search term
        """
        pass

    def has_user(self, user_id: int) -> bool:
        """Check whether a user exists."""
        return self.get_user(user_id) is not None


class InMemoryUserService(UserService):
    """Service for managing users in memory.

    Owns ID allocation: ``next_id`` starts above the highest seeded ID and
    only ever increases, so IDs of deleted users are never reused.
    """

    def __init__(self, seed: Iterable[User] = SEED_USERS) -> None:
        """Initialize the store.

        Args:
            seed: Users present at startup
        """
        self._lock = threading.Lock()
        self.users: dict[int, User] = {user.id: user.model_copy() for user in seed}
        self.next_id = max(self.users, default=0) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self.users)

    def add_user(self, payload: UserPayload) -> User:
        with self._lock:
            user = User(id=self.next_id, name=payload.name, email=payload.email)
            self.users[user.id] = user
            self.next_id += 1
        logger.info("Created user %s", user.id)
        return user.model_copy()

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            user = self.users.get(user_id)
        return user.model_copy() if user else None

    def list_users(self) -> list[User]:
        with self._lock:
            return [user.model_copy() for user in self.users.values()]

    def update_user(self, user_id: int, payload: UserPayload) -> User | None:
        with self._lock:
            if user_id not in self.users:
                return None
            user = User(id=user_id, name=payload.name, email=payload.email)
            self.users[user_id] = user
        logger.info("Updated user %s", user_id)
        return user.model_copy()

    def delete_user(self, user_id: int) -> bool:
        with self._lock:
            removed = self.users.pop(user_id, None)
        if removed is None:
            return False
        logger.info("Deleted user %s", user_id)
        return True

    def search_users(self, term: str) -> list[User]:
        needle = term.lower()
        return [
            user
            for user in self.list_users()
            if needle in user.name.lower() or needle in user.email.lower()
        ]


def paginate(users: list[User], page: int | None, page_size: int | None) -> list[User]:
    """Apply a skip/take window when both values are positive.

    Args:
        users: Users in store order
        page: 1-based page number
        page_size: Number of users per page

    Returns:
        The requested window, or all users when pagination does not apply
    """
    if page is None or page_size is None or page <= 0 or page_size <= 0:
        return users
    start = (page - 1) * page_size
    return users[start : start + page_size]
