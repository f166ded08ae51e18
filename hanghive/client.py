"""HTTP client for the Hang Hive API with a local, stale-aware cache.

Clients hold their view of the world in an explicit :class:`AppState` that
every call takes and returns. Nothing is computed locally: the server is the
only place domain rules run. The :class:`LocalCache` keeps the last known
user, groups snapshot and dark-mode flag so that a client that cannot reach
the server can still show something, flagged as stale.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any

import requests

from .constants import CACHE_DARK_MODE, CACHE_GROUPS, CACHE_USER

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """Raised when the server answers with an error."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LocalCache:
    """A small JSON file of client-side keys. Never the source of truth."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _read(self) -> dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable cache {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


@dataclass(frozen=True)
class AppState:
    """Everything a client currently shows."""

    user: dict[str, Any] | None = None
    groups: list[dict[str, Any]] = field(default_factory=list)
    current_group: dict[str, Any] | None = None
    dark_mode: bool = False
    stale: bool = False

    @property
    def username(self) -> str:
        if self.user is None:
            raise ApiError("Not logged in")
        return self.user["username"]

    @property
    def group_id(self) -> str:
        if self.current_group is None:
            raise ApiError("No group selected")
        return self.current_group["id"]


class HangHiveClient:
    """Talks to the REST API and keeps an :class:`AppState` in sync."""

    def __init__(
        self,
        base_url: str,
        cache: LocalCache | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = self.session.request(
            method,
            f"{self.base_url}/api{path}",
            json=payload,
            params=params,
            timeout=self.timeout,
        )
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.ok:
            raise ApiError(
                body.get("error", "Something went wrong"), response.status_code
            )
        return body

    def _remember(self, key: str, value: Any) -> None:
        if self.cache is not None:
            self.cache.set(key, value)

    def restore(self) -> AppState:
        """Build the state a client starts with from the local cache."""
        if self.cache is None:
            return AppState()
        return AppState(
            user=self.cache.get(CACHE_USER),
            groups=self.cache.get(CACHE_GROUPS, []),
            dark_mode=bool(self.cache.get(CACHE_DARK_MODE, False)),
            stale=True,
        )

    def login(self, state: AppState, username: str) -> AppState:
        body = self._request("POST", "/users/login", {"username": username})
        user = body["user"]
        self._remember(CACHE_USER, user)
        return self.refresh_groups(replace(state, user=user, current_group=None))

    def logout(self, state: AppState) -> AppState:
        if self.cache is not None:
            self.cache.remove(CACHE_USER)
        return AppState(dark_mode=state.dark_mode)

    def set_dark_mode(self, state: AppState, enabled: bool) -> AppState:
        self._remember(CACHE_DARK_MODE, enabled)
        return replace(state, dark_mode=enabled)

    def refresh_groups(self, state: AppState) -> AppState:
        """Fetch the user's groups, falling back to the cache when offline."""
        try:
            body = self._request("GET", "/groups", params={"username": state.username})
        except requests.RequestException as e:
            logger.warning(f"Could not reach server, showing cached groups: {e}")
            cached = self.cache.get(CACHE_GROUPS, []) if self.cache else state.groups
            return replace(state, groups=cached, stale=True)

        groups = body["groups"]
        self._remember(CACHE_GROUPS, groups)
        current = state.current_group
        if current is not None:
            current = next((g for g in groups if g["id"] == current["id"]), None)
        return replace(state, groups=groups, current_group=current, stale=False)

    def open_group(self, state: AppState, group_id: str) -> AppState:
        """Select a group, falling back to the cached copy when offline."""
        try:
            body = self._request("GET", f"/groups/{group_id}")
        except requests.RequestException as e:
            cached = next((g for g in state.groups if g["id"] == group_id), None)
            if cached is None:
                raise ApiError("Could not reach server") from e
            logger.warning(f"Could not reach server, showing cached group: {e}")
            return replace(state, current_group=cached, stale=True)
        return self._with_group(state, body["group"])

    def _with_group(self, state: AppState, group: dict[str, Any]) -> AppState:
        if any(g["id"] == group["id"] for g in state.groups):
            groups = [group if g["id"] == group["id"] else g for g in state.groups]
        else:
            groups = state.groups + [group]
        self._remember(CACHE_GROUPS, groups)
        return replace(state, groups=groups, current_group=group, stale=False)

    def create_group(self, state: AppState, name: str) -> AppState:
        body = self._request(
            "POST", "/groups", {"name": name, "createdBy": state.username}
        )
        return self._with_group(state, body["group"])

    def join_group(self, state: AppState, code: str) -> AppState:
        body = self._request(
            "POST", "/groups/join", {"code": code, "username": state.username}
        )
        return self._with_group(state, body["group"])

    def leave_group(self, state: AppState, group_id: str) -> AppState:
        self._request(
            "POST", f"/groups/{group_id}/leave", {"username": state.username}
        )
        groups = [g for g in state.groups if g["id"] != group_id]
        self._remember(CACHE_GROUPS, groups)
        current = state.current_group
        if current is not None and current["id"] == group_id:
            current = None
        return replace(state, groups=groups, current_group=current)

    def list_hangouts(
        self, state: AppState, when: str = "all", search: str | None = None
    ) -> list[dict[str, Any]]:
        params = {"filter": when}
        if search:
            params["search"] = search
        body = self._request(
            "GET", f"/groups/{state.group_id}/hangouts", params=params
        )
        return body["hangouts"]

    def propose_hangout(self, state: AppState, fields: dict[str, Any]) -> AppState:
        payload = dict(fields, proposedBy=state.username)
        body = self._request("POST", f"/groups/{state.group_id}/hangouts", payload)
        group = dict(state.current_group, hangouts=body["hangouts"])
        return self._with_group(state, group)

    def respond_to_hangout(
        self, state: AppState, hangout_id: str, response: str
    ) -> AppState:
        body = self._request(
            "POST",
            f"/groups/{state.group_id}/hangouts/{hangout_id}/respond",
            {"username": state.username, "response": response},
        )
        hangout = body["hangout"]
        hangouts = [
            hangout if h["id"] == hangout["id"] else h
            for h in state.current_group.get("hangouts", [])
        ]
        return self._with_group(state, dict(state.current_group, hangouts=hangouts))

    def delete_hangout(self, state: AppState, hangout_id: str) -> AppState:
        self._request(
            "DELETE",
            f"/groups/{state.group_id}/hangouts/{hangout_id}",
            {"username": state.username},
        )
        hangouts = [
            h for h in state.current_group.get("hangouts", []) if h["id"] != hangout_id
        ]
        return self._with_group(state, dict(state.current_group, hangouts=hangouts))

    def send_message(self, state: AppState, text: str) -> AppState:
        body = self._request(
            "POST",
            f"/groups/{state.group_id}/messages",
            {"text": text, "sender": state.username},
        )
        group = dict(state.current_group, messages=body["messages"])
        return self._with_group(state, group)

    def react(self, state: AppState, message_id: str, emoji: str) -> AppState:
        body = self._request(
            "POST",
            f"/groups/{state.group_id}/messages/{message_id}/react",
            {"username": state.username, "emoji": emoji},
        )
        message = body["message"]
        messages = [
            message if m["id"] == message["id"] else m
            for m in state.current_group.get("messages", [])
        ]
        return self._with_group(state, dict(state.current_group, messages=messages))
