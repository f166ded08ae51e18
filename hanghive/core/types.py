"""Core data types for the hanghive application."""

from typing import Dict, List, Literal, TypedDict  # noqa: UP035

Response = Literal["going", "maybe", "notGoing"]


class User(TypedDict):
    """A user, created on first login."""

    id: str
    username: str
    createdAt: str


class Hangout(TypedDict):
    """A proposed event inside a group."""

    id: str
    title: str
    date: str
    time: str
    location: str
    description: str
    proposedBy: str
    createdAt: str
    responses: Dict[str, Response]  # noqa: UP006


class Message(TypedDict):
    """A chat message inside a group."""

    id: str
    text: str
    sender: str
    timestamp: str
    reactions: Dict[str, List[str]]  # noqa: UP006


class Group(TypedDict):
    """A named set of members with their hangouts and chat."""

    id: str
    name: str
    code: str
    members: List[str]  # noqa: UP006
    createdBy: str
    createdAt: str
    hangouts: List[Hangout]  # noqa: UP006
    messages: List[Message]  # noqa: UP006


class Database(TypedDict):
    """The single persisted document."""

    users: List[User]  # noqa: UP006
    groups: List[Group]  # noqa: UP006


class ResponseCounts(TypedDict):
    """Number of members per hangout response."""

    going: int
    maybe: int
    notGoing: int
