"""Service layer for group chat."""

from __future__ import annotations

from hanghive.core.types import Database, Message
from hanghive.errors import NotFoundError
from hanghive.group.services import GroupService
from hanghive.group.utils import find_by_id
from hanghive.utils import generate_id, require, utc_now_iso


class ChatService:
    """Service class for chat messages and reactions."""

    @staticmethod
    def list_messages(data: Database, group_id: str) -> list[Message]:
        """Return a group's messages in the order they were sent."""
        group = GroupService.get_group(data, group_id)
        return group.get("messages") or []

    @staticmethod
    def send_message(data: Database, group_id: str, text: str, sender: str) -> Message:
        """Append a message to a group's chat."""
        text = require(text, "Message text is required")
        sender = require(sender, "Sender username is required")

        group = GroupService.get_group(data, group_id)
        message: Message = {
            "id": generate_id(),
            "text": text,
            "sender": sender,
            "timestamp": utc_now_iso(),
            "reactions": {},
        }
        group.setdefault("messages", []).append(message)
        return message

    @staticmethod
    def toggle_reaction(
        data: Database, group_id: str, message_id: str, username: str, emoji: str
    ) -> Message:
        """Add the user's reaction, or take it back if it is already there.

        An emoji disappears from the message once nobody reacts with it.
        """
        username = require(username, "Username is required")
        emoji = require(emoji, "Emoji is required")

        group = GroupService.get_group(data, group_id)
        message = find_by_id(group.get("messages") or [], message_id)
        if message is None:
            raise NotFoundError("Message not found")

        reactions = message.setdefault("reactions", {})
        users = reactions.get(emoji, [])
        if username in users:
            users = [u for u in users if u != username]
        else:
            users = users + [username]

        if users:
            reactions[emoji] = users
        else:
            reactions.pop(emoji, None)
        return message
