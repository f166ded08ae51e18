"""Utility functions for the hangout blueprint."""

from __future__ import annotations

import datetime
from typing import Any

from hanghive.constants import (
    FILTER_PAST,
    FILTER_UPCOMING,
    GOING,
    MAYBE,
    NOT_GOING,
    STATUS_CANCELLED,
    STATUS_CONFIRMED,
    STATUS_PENDING,
)
from hanghive.core.types import Hangout, ResponseCounts


def count_responses(hangout: Hangout) -> ResponseCounts:
    """Count the members per response."""
    counts: ResponseCounts = {GOING: 0, MAYBE: 0, NOT_GOING: 0}
    for response in hangout.get("responses", {}).values():
        if response in counts:
            counts[response] += 1
    return counts


def get_hangout_status(hangout: Hangout, member_count: int) -> str:
    """Derive a hangout's status from its responses.

    More than half of the group's current members going confirms it, more
    than half not going cancels it, anything else is still pending.
    """
    counts = count_responses(hangout)
    if counts[GOING] > member_count / 2:
        return STATUS_CONFIRMED
    if counts[NOT_GOING] > member_count / 2:
        return STATUS_CANCELLED
    return STATUS_PENDING


def parse_hangout_date(hangout: Hangout) -> datetime.date | None:
    """Return the hangout's date, or None if it is not an ISO date."""
    try:
        return datetime.date.fromisoformat(hangout.get("date", ""))
    except (TypeError, ValueError):
        return None


def hangout_matches_search(hangout: Hangout, search_term: str) -> bool:
    """Return True if the title, location or description contains the term."""
    term = search_term.strip().lower()
    return (
        term in hangout["title"].lower()
        or term in hangout["location"].lower()
        or term in hangout.get("description", "").lower()
    )


def filter_hangouts(
    hangouts: list[Hangout], when: str, today: datetime.date
) -> list[Hangout]:
    """Keep upcoming (today or later) or past hangouts; anything else keeps all.

    Hangouts without a parseable date only show up unfiltered.
    """
    if when not in (FILTER_UPCOMING, FILTER_PAST):
        return list(hangouts)

    result = []
    for hangout in hangouts:
        day = parse_hangout_date(hangout)
        if day is None:
            continue
        if when == FILTER_UPCOMING and day >= today:
            result.append(hangout)
        elif when == FILTER_PAST and day < today:
            result.append(hangout)
    return result


def sort_by_date(hangouts: list[Hangout]) -> list[Hangout]:
    """Order hangouts nearest date first, undated ones last."""

    def key(hangout: Hangout) -> tuple[bool, datetime.date]:
        day = parse_hangout_date(hangout)
        return (day is None, day or datetime.date.max)

    return sorted(hangouts, key=key)


def summarize_hangout(hangout: Hangout, member_count: int) -> dict[str, Any]:
    """Return a copy of the hangout with its derived status and counts."""
    summary: dict[str, Any] = dict(hangout)
    summary["status"] = get_hangout_status(hangout, member_count)
    summary["counts"] = count_responses(hangout)
    return summary
