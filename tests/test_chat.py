"""Tests for the chat blueprint."""

import unittest

from tests.helpers import BaseTestCase


class ChatRoutesTestCase(BaseTestCase):
    def setUp(self):
        super().setUp()
        self.group = self.create_group("Friday Gamers", "alice")
        self.join_group(self.group["code"], "bob")

    def react(self, message_id, username, emoji):
        response = self.client.post(
            f"/api/groups/{self.group['id']}/messages/{message_id}/react",
            json={"username": username, "emoji": emoji},
        )
        self.assertEqual(response.status_code, 200)
        return response.get_json()["message"]

    def test_message_and_reaction_scenario(self):
        response = self.client.post(
            f"/api/groups/{self.group['id']}/messages",
            json={"text": "hi", "sender": "alice"},
        )
        body = response.get_json()
        self.assertTrue(body["success"])
        self.assertEqual(len(body["messages"]), 1)
        message = body["message"]
        self.assertEqual(message["reactions"], {})

        reacted = self.react(message["id"], "bob", "👍")
        self.assertEqual(reacted["reactions"], {"👍": ["bob"]})
        reacted = self.react(message["id"], "bob", "👍")
        self.assertEqual(reacted["reactions"], {})

    def test_list_messages(self):
        self.send_message(self.group["id"], "hi", "alice")
        self.send_message(self.group["id"], "hey", "bob")

        response = self.client.get(f"/api/groups/{self.group['id']}/messages")
        messages = response.get_json()["messages"]
        self.assertEqual([m["text"] for m in messages], ["hi", "hey"])

    def test_empty_message_rejected(self):
        response = self.client.post(
            f"/api/groups/{self.group['id']}/messages",
            json={"text": "   ", "sender": "alice"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Message text is required")

    def test_messages_of_unknown_group(self):
        response = self.client.get("/api/groups/missing/messages")
        self.assertEqual(response.status_code, 404)

    def test_react_to_unknown_message(self):
        response = self.client.post(
            f"/api/groups/{self.group['id']}/messages/missing/react",
            json={"username": "bob", "emoji": "👍"},
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "Message not found")


if __name__ == "__main__":
    unittest.main()
