"""Service layer for user login."""

from __future__ import annotations

from hanghive.constants import USERS
from hanghive.core.types import Database, User
from hanghive.utils import generate_id, require, utc_now_iso


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def find_user(data: Database, username: str) -> User | None:
        """Return the user whose username matches ignoring case, if any."""
        wanted = username.strip().lower()
        for user in data[USERS]:
            if user["username"].lower() == wanted:
                return user
        return None

    @staticmethod
    def login(data: Database, username: str) -> tuple[User, bool]:
        """Return the user for ``username``, creating it on first login.

        The second element of the result tells whether the user was created.
        There is no password: the bare username is the identity.
        """
        username = require(username, "Username is required")

        user = UserService.find_user(data, username)
        if user is not None:
            return user, False

        user = {
            "id": generate_id(),
            "username": username,
            "createdAt": utc_now_iso(),
        }
        data[USERS].append(user)
        return user, True
