"""Service layer for hangout operations."""

from __future__ import annotations

import datetime
from typing import Any

from hanghive.constants import FILTER_ALL, GOING, RESPONSES
from hanghive.core.types import Database, Hangout
from hanghive.errors import ForbiddenError, NotFoundError, ValidationError
from hanghive.group.services import GroupService
from hanghive.group.utils import find_by_id, find_member
from hanghive.utils import clean, generate_id, require, utc_now_iso

from .utils import (
    filter_hangouts,
    hangout_matches_search,
    sort_by_date,
    summarize_hangout,
)


class HangoutService:
    """Service class for hangout-related operations."""

    @staticmethod
    def get_hangout(data: Database, group_id: str, hangout_id: str) -> Hangout:
        """Return a hangout of a group."""
        group = GroupService.get_group(data, group_id)
        hangout = find_by_id(group["hangouts"], hangout_id)
        if hangout is None:
            raise NotFoundError("Hangout not found")
        return hangout

    @staticmethod
    def list_hangouts(
        data: Database,
        group_id: str,
        when: str = FILTER_ALL,
        search: str | None = None,
        today: datetime.date | None = None,
    ) -> list[dict[str, Any]]:
        """Return a group's hangouts by date, each with status and counts."""
        group = GroupService.get_group(data, group_id)
        today = today or datetime.date.today()

        hangouts = filter_hangouts(group["hangouts"], when, today)
        if search and search.strip():
            hangouts = [h for h in hangouts if hangout_matches_search(h, search)]

        member_count = len(group["members"])
        return [summarize_hangout(h, member_count) for h in sort_by_date(hangouts)]

    @staticmethod
    def propose(
        data: Database, group_id: str, fields: dict[str, Any], proposed_by: str
    ) -> Hangout:
        """Add a hangout to a group; the proposer is recorded as going."""
        title = clean(fields.get("title"))
        date = clean(fields.get("date"))
        time = clean(fields.get("time"))
        location = clean(fields.get("location"))
        if not (title and date and time and location):
            raise ValidationError("Title, date, time, and location are required")
        proposed_by = require(proposed_by, "Proposer username is required")

        group = GroupService.get_group(data, group_id)
        hangout: Hangout = {
            "id": generate_id(),
            "title": title,
            "date": date,
            "time": time,
            "location": location,
            "description": clean(fields.get("description")),
            "proposedBy": proposed_by,
            "createdAt": utc_now_iso(),
            "responses": {proposed_by: GOING},
        }
        group["hangouts"].append(hangout)
        return hangout

    @staticmethod
    def respond(
        data: Database, group_id: str, hangout_id: str, username: str, response: str
    ) -> Hangout:
        """Record a member's response, replacing any earlier one."""
        if response not in RESPONSES:
            raise ValidationError(
                "Invalid response. Must be: going, maybe, or notGoing"
            )
        username = require(username, "Username is required")

        hangout = HangoutService.get_hangout(data, group_id, hangout_id)
        member = find_member(GroupService.get_group(data, group_id), username)
        if member is None:
            raise ForbiddenError("You are not a member of this group")
        hangout["responses"][member] = response
        return hangout

    @staticmethod
    def delete(
        data: Database, group_id: str, hangout_id: str, requester: str
    ) -> Hangout:
        """Remove a hangout; only its proposer may do so."""
        group = GroupService.get_group(data, group_id)
        hangout = find_by_id(group["hangouts"], hangout_id)
        if hangout is None:
            raise NotFoundError("Hangout not found")
        if clean(requester) != hangout["proposedBy"]:
            raise ForbiddenError(
                "Only the person who proposed this hangout can delete it"
            )

        group["hangouts"] = [h for h in group["hangouts"] if h["id"] != hangout_id]
        return hangout
