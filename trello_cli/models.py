"""Flat records for the Trello resources this tool reads.

Each record has a ``from_api`` constructor that takes one decoded JSON object
from the Trello REST API. Anything that does not fit the expected shape
raises ``TrelloDecodeError``; the client never hands half-decoded data to the
command flows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from trello_cli.exceptions import TrelloDecodeError


def _expect_object(data: Any, kind: str) -> dict:
    if not isinstance(data, dict):
        raise TrelloDecodeError(f"Expected a JSON object for {kind}, got {type(data).__name__}")
    return data


def _require_str(data: dict, key: str, kind: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise TrelloDecodeError(f"{kind} is missing required field '{key}'")
    return value


def _optional_str(data: dict, key: str, kind: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TrelloDecodeError(f"{kind} field '{key}' should be a string")
    return value


def _str_list(data: dict, key: str, kind: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TrelloDecodeError(f"{kind} field '{key}' should be a list of strings")
    return list(value)


def _short_id(data: dict, kind: str) -> int:
    value = data.get("idShort")
    # bool is an int subclass; reject it explicitly
    if not isinstance(value, int) or isinstance(value, bool):
        raise TrelloDecodeError(f"{kind} field 'idShort' should be an integer")
    return value


@dataclass
class Card:
    """Card summary as returned by ``GET /boards/{id}/cards``"""

    id: str
    short_id: int
    name: str
    member_ids: list[str] = field(default_factory=list)
    list_id: str = ""
    short_link: str = ""

    @classmethod
    def from_api(cls, data: Any) -> Card:
        data = _expect_object(data, "card")
        return cls(
            id=_require_str(data, "id", "Card"),
            short_id=_short_id(data, "Card"),
            name=_optional_str(data, "name", "Card"),
            member_ids=_str_list(data, "idMembers", "Card"),
            list_id=_optional_str(data, "idList", "Card"),
            short_link=_optional_str(data, "shortLink", "Card"),
        )


@dataclass
class Label:
    name: str

    @classmethod
    def from_api(cls, data: Any) -> Label:
        data = _expect_object(data, "label")
        return cls(name=_optional_str(data, "name", "Label"))


@dataclass
class DetailedCard(Card):
    """Full card as returned by ``GET /cards/{id}?members=true&labels=true``"""

    description: str = ""
    closed: bool = False
    labels: list[Label] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Any) -> DetailedCard:
        summary = Card.from_api(data)

        closed = data.get("closed", False)
        if not isinstance(closed, bool):
            raise TrelloDecodeError("Card field 'closed' should be a boolean")

        raw_labels = data.get("labels") or []
        if not isinstance(raw_labels, list):
            raise TrelloDecodeError("Card field 'labels' should be a list")

        return cls(
            id=summary.id,
            short_id=summary.short_id,
            name=summary.name,
            member_ids=summary.member_ids,
            list_id=summary.list_id,
            short_link=summary.short_link,
            description=_optional_str(data, "desc", "Card"),
            closed=closed,
            labels=[Label.from_api(label) for label in raw_labels],
        )


@dataclass
class TrelloList:
    """A list (column) on a board; only used as an id -> name lookup"""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: Any) -> TrelloList:
        data = _expect_object(data, "list")
        return cls(id=_require_str(data, "id", "List"), name=_optional_str(data, "name", "List"))


@dataclass
class Board:
    id: str
    name: str

    @classmethod
    def from_api(cls, data: Any) -> Board:
        data = _expect_object(data, "board")
        return cls(id=_require_str(data, "id", "Board"), name=_optional_str(data, "name", "Board"))


@dataclass
class Organization:
    """A Trello workspace. Its human name lives in ``displayName``."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: Any) -> Organization:
        data = _expect_object(data, "organization")
        return cls(
            id=_require_str(data, "id", "Organization"),
            name=_optional_str(data, "displayName", "Organization"),
        )


@dataclass
class Member:
    id: str
    full_name: str = ""
    username: str = ""

    @classmethod
    def from_api(cls, data: Any) -> Member:
        data = _expect_object(data, "member")
        return cls(
            id=_require_str(data, "id", "Member"),
            full_name=_optional_str(data, "fullName", "Member"),
            username=_optional_str(data, "username", "Member"),
        )

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or self.id


@dataclass
class Comment:
    """A ``commentCard`` action flattened to what the detail view shows"""

    id: str
    text: str
    created_at: str
    author_name: str

    @classmethod
    def from_api(cls, data: Any) -> Comment:
        data = _expect_object(data, "comment")
        action_data = _expect_object(data.get("data") or {}, "comment data")
        creator = _expect_object(data.get("memberCreator") or {}, "comment author")
        return cls(
            id=_require_str(data, "id", "Comment"),
            text=_optional_str(action_data, "text", "Comment"),
            created_at=_optional_str(data, "date", "Comment"),
            author_name=_optional_str(creator, "fullName", "Comment author"),
        )
