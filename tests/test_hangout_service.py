"""Tests for HangoutService."""

from __future__ import annotations

import datetime
import unittest

from hanghive.errors import ForbiddenError, NotFoundError, ValidationError
from hanghive.group.services import GroupService
from hanghive.hangout.services import HangoutService
from hanghive.hangout.utils import get_hangout_status
from hanghive.store import empty_database

MOVIE_NIGHT = {
    "title": " Movie Night ",
    "date": "2099-03-15",
    "time": "19:00",
    "location": " Jake's house ",
}


class TestHangoutService(unittest.TestCase):
    def setUp(self) -> None:
        self.data = empty_database()
        self.group = GroupService.create_group(self.data, "Friday Gamers", "alice")
        GroupService.join_group(self.data, self.group["code"], "bob")

    def propose(self, proposer="alice", **fields):
        return HangoutService.propose(
            self.data, self.group["id"], dict(MOVIE_NIGHT, **fields), proposer
        )

    def respond(self, hangout_id, username, response):
        return HangoutService.respond(
            self.data, self.group["id"], hangout_id, username, response
        )

    def test_propose_records_proposer_as_going(self) -> None:
        hangout = self.propose()

        self.assertEqual(hangout["title"], "Movie Night")
        self.assertEqual(hangout["location"], "Jake's house")
        self.assertEqual(hangout["description"], "")
        self.assertEqual(hangout["proposedBy"], "alice")
        self.assertEqual(hangout["responses"], {"alice": "going"})
        self.assertEqual(self.group["hangouts"], [hangout])

    def test_propose_requires_fields(self) -> None:
        for missing in ("title", "date", "time", "location"):
            with self.subTest(missing=missing):
                with self.assertRaisesRegex(
                    ValidationError, "Title, date, time, and location are required"
                ):
                    self.propose(**{missing: "  "})
        with self.assertRaises(ValidationError):
            self.propose(proposer="")
        self.assertEqual(self.group["hangouts"], [])

    def test_propose_in_unknown_group(self) -> None:
        with self.assertRaises(NotFoundError):
            HangoutService.propose(self.data, "missing", MOVIE_NIGHT, "alice")

    def test_respond_overwrites_previous_response(self) -> None:
        hangout = self.propose()
        self.respond(hangout["id"], "bob", "maybe")
        HangoutService.respond(
            self.data, self.group["id"], hangout["id"], "bob", "notGoing"
        )

        self.assertEqual(hangout["responses"], {"alice": "going", "bob": "notGoing"})
        self.assertLessEqual(len(hangout["responses"]), len(self.group["members"]))

    def test_respond_rejects_unknown_response(self) -> None:
        hangout = self.propose()
        with self.assertRaisesRegex(ValidationError, "Invalid response"):
            HangoutService.respond(
                self.data, self.group["id"], hangout["id"], "bob", "yes"
            )
        self.assertEqual(hangout["responses"], {"alice": "going"})

    def test_respond_to_unknown_hangout(self) -> None:
        with self.assertRaisesRegex(NotFoundError, "Hangout not found"):
            HangoutService.respond(self.data, self.group["id"], "nope", "bob", "going")

    def test_respond_requires_membership(self) -> None:
        hangout = self.propose()

        for outsider in ("mallory", "eve", "trent"):
            with self.assertRaisesRegex(ForbiddenError, "not a member"):
                self.respond(hangout["id"], outsider, "notGoing")

        self.assertEqual(hangout["responses"], {"alice": "going"})
        members = len(self.group["members"])
        self.assertEqual(get_hangout_status(hangout, members), "pending")

    def test_respond_uses_stored_member_name(self) -> None:
        hangout = self.propose()
        self.respond(hangout["id"], "bob", "maybe")
        self.respond(hangout["id"], "BOB", "going")

        self.assertEqual(hangout["responses"], {"alice": "going", "bob": "going"})

    def test_status_follows_responses(self) -> None:
        hangout = self.propose()
        members = len(self.group["members"])
        self.assertEqual(get_hangout_status(hangout, members), "pending")

        self.respond(hangout["id"], "bob", "going")
        self.assertEqual(get_hangout_status(hangout, members), "confirmed")

    def test_delete_only_by_proposer(self) -> None:
        hangout = self.propose()

        with self.assertRaises(ForbiddenError):
            HangoutService.delete(self.data, self.group["id"], hangout["id"], "bob")
        self.assertEqual(len(self.group["hangouts"]), 1)

        HangoutService.delete(self.data, self.group["id"], hangout["id"], "alice")
        self.assertEqual(self.group["hangouts"], [])

    def test_delete_unknown_hangout(self) -> None:
        with self.assertRaises(NotFoundError):
            HangoutService.delete(self.data, self.group["id"], "nope", "alice")

    def test_list_hangouts_filters_and_sorts(self) -> None:
        today = datetime.date(2024, 3, 10)
        later = self.propose(title="Later", date="2024-04-01")
        soon = self.propose(title="Soon", date="2024-03-10")
        past = self.propose(title="Past", date="2024-03-01", description="Pizza")

        everything = HangoutService.list_hangouts(
            self.data, self.group["id"], today=today
        )
        self.assertEqual(
            [h["id"] for h in everything], [past["id"], soon["id"], later["id"]]
        )
        self.assertEqual(everything[0]["status"], "pending")
        self.assertEqual(
            everything[0]["counts"], {"going": 1, "maybe": 0, "notGoing": 0}
        )

        upcoming = HangoutService.list_hangouts(
            self.data, self.group["id"], when="upcoming", today=today
        )
        self.assertEqual([h["title"] for h in upcoming], ["Soon", "Later"])

        previous = HangoutService.list_hangouts(
            self.data, self.group["id"], when="past", today=today
        )
        self.assertEqual([h["title"] for h in previous], ["Past"])

        searched = HangoutService.list_hangouts(
            self.data, self.group["id"], search="pizza", today=today
        )
        self.assertEqual([h["title"] for h in searched], ["Past"])

    def test_list_hangouts_does_not_mutate_stored_hangouts(self) -> None:
        hangout = self.propose()
        HangoutService.list_hangouts(self.data, self.group["id"])
        self.assertNotIn("status", hangout)


if __name__ == "__main__":
    unittest.main()
