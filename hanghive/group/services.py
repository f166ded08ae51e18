"""Service layer for group operations."""

from __future__ import annotations

from hanghive.constants import GROUPS
from hanghive.core.types import Database, Group
from hanghive.errors import ConflictError, NotFoundError, ValidationError
from hanghive.utils import clean, generate_group_code, generate_id, require, utc_now_iso

from .utils import find_by_id, find_member, group_matches_search

DEFAULT_CODE_ATTEMPTS = 20


class GroupService:
    """Service class for group-related operations."""

    @staticmethod
    def list_groups(
        data: Database, username: str | None = None, search: str | None = None
    ) -> list[Group]:
        """Return all groups, optionally only those ``username`` belongs to."""
        groups = data[GROUPS]
        if username:
            groups = [g for g in groups if find_member(g, username)]
        if search and search.strip():
            groups = [g for g in groups if group_matches_search(g, search)]
        return groups

    @staticmethod
    def get_group(data: Database, group_id: str) -> Group:
        """Return the group with the given id."""
        group = find_by_id(data[GROUPS], group_id)
        if group is None:
            raise NotFoundError("Group not found")
        return group

    @staticmethod
    def find_by_code(data: Database, code: str) -> Group | None:
        """Return the group whose code matches ignoring case, if any."""
        wanted = code.strip().upper()
        for group in data[GROUPS]:
            if group["code"].upper() == wanted:
                return group
        return None

    @staticmethod
    def _unique_code(data: Database, attempts: int) -> str:
        taken = {g["code"].upper() for g in data[GROUPS]}
        for _ in range(attempts):
            code = generate_group_code()
            if code not in taken:
                return code
        raise ConflictError("Could not generate a unique group code")

    @staticmethod
    def create_group(
        data: Database,
        name: str,
        created_by: str,
        code_attempts: int = DEFAULT_CODE_ATTEMPTS,
    ) -> Group:
        """Create a group whose only member is its creator."""
        name = require(name, "Group name is required")
        created_by = require(created_by, "Creator username is required")

        group: Group = {
            "id": generate_id(),
            "name": name,
            "code": GroupService._unique_code(data, code_attempts),
            "members": [created_by],
            "createdBy": created_by,
            "createdAt": utc_now_iso(),
            "hangouts": [],
            "messages": [],
        }
        data[GROUPS].append(group)
        return group

    @staticmethod
    def join_group(data: Database, code: str, username: str) -> Group:
        """Add ``username`` to the group with the given share code."""
        code = require(code, "Group code is required")
        username = require(username, "Username is required")

        group = GroupService.find_by_code(data, code)
        if group is None:
            raise NotFoundError("No group found with that code")
        if find_member(group, username):
            raise ConflictError("You are already in this group")

        group["members"].append(username)
        return group

    @staticmethod
    def leave_group(data: Database, group_id: str, username: str) -> bool:
        """Remove ``username`` from a group.

        The group is deleted, with its hangouts and messages, once nobody is
        left in it. Returns True when that happened.
        """
        group = GroupService.get_group(data, group_id)
        username = clean(username)
        if not username:
            raise ValidationError("Username is required")

        wanted = username.lower()
        group["members"] = [m for m in group["members"] if m.lower() != wanted]
        if not group["members"]:
            data[GROUPS] = [g for g in data[GROUPS] if g["id"] != group_id]
            return True
        return False
