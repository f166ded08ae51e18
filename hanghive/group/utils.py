"""Utility functions for the group blueprint."""

from __future__ import annotations

from hanghive.core.types import Group


def group_matches_search(group: Group, search_term: str) -> bool:
    """Return True if the group's name or code contains the search term."""
    term = search_term.strip().lower()
    return term in group["name"].lower() or term in group["code"].lower()


def find_by_id(items: list, item_id: str) -> dict | None:
    """Return the first record with the given id."""
    for item in items:
        if item["id"] == item_id:
            return item
    return None


def find_member(group: Group, username: str) -> str | None:
    """Return the stored spelling of ``username`` if they are a member.

    Usernames compare case-insensitively.
    """
    wanted = username.strip().lower()
    for member in group["members"]:
        if member.lower() == wanted:
            return member
    return None
