"""Show one card, looked up by its board-scoped short ID."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from rich.console import Console

from trello_cli.exceptions import (
    CardNotFoundError,
    InvalidCardIDError,
    InvalidFieldNameError,
    TrelloAPIError,
)
from trello_cli.listing import UNKNOWN_LIST, build_list_map
from trello_cli.models import Card, Comment, DetailedCard
from trello_cli.render import render_markdown
from trello_cli.trello_client import TrelloClient

logger = logging.getLogger("trello_cli.detail")

FIELD_NAMES = ("title", "description", "status", "assignees", "labels", "list")
CARD_URL = "https://trello.com/c/{short_link}"
UNKNOWN_TIME = "Unknown time"


def parse_card_id(value: str) -> int:
    """Parse ``#123`` or ``123`` into 123"""
    digits = value.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    if not digits:
        raise InvalidCardIDError("Invalid card ID format. Use format: #123 or 123", value)
    if not digits.isdecimal() or int(digits) < 1:
        raise InvalidCardIDError(f"Invalid card ID: {digits} (must be numeric)", value)
    return int(digits)


def normalize_field_name(value: str) -> str:
    name = value.strip().lower()
    if name not in FIELD_NAMES:
        raise InvalidFieldNameError(value, FIELD_NAMES)
    return name


def format_comment_time(value: str) -> str:
    """``2024-03-05T14:07:00.000Z`` -> ``Mar 5, 2024 at 2:07 PM``"""
    try:
        # fromisoformat doesn't accept a trailing "Z" before 3.11
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return UNKNOWN_TIME
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year} at {hour}:{moment:%M %p}"


def find_card(cards: Iterable[Card], short_id: int) -> Card:
    """First card with this short ID, in fetch order"""
    for card in cards:
        if card.short_id == short_id:
            return card
    raise CardNotFoundError(short_id)


@dataclass
class CardDocument:
    """Everything the detail view shows, with ids already resolved to names"""

    title: str
    closed: bool
    description: str = ""
    assignees: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    list_name: str | None = None
    comments: list[Comment] = field(default_factory=list)
    short_link: str = ""

    @property
    def status(self) -> str:
        return "Closed" if self.closed else "Open"

    @property
    def url(self) -> str:
        return CARD_URL.format(short_link=self.short_link)

    def field_value(self, name: str) -> str:
        """Plain-text value of one field; multi-value fields are comma joined"""
        name = normalize_field_name(name)
        if name == "title":
            return self.title
        if name == "description":
            return self.description
        if name == "status":
            return self.status
        if name == "assignees":
            return ", ".join(self.assignees)
        if name == "labels":
            return ", ".join(self.labels)
        return self.list_name if self.list_name is not None else UNKNOWN_LIST

    def to_markdown(self) -> str:
        parts = [f"# {self.title}\n\n", f"**{self.status}**\n\n"]

        if self.description:
            parts.append(f"## Description\n\n{self.description}\n\n")

        if self.assignees:
            parts.append("## Assignees\n")
            parts.extend(f"- {name}\n" for name in self.assignees)
            parts.append("\n")

        if self.labels:
            parts.append("## Labels\n")
            parts.extend(f"- {name}\n" for name in self.labels)
            parts.append("\n")

        if self.list_name is not None:
            parts.append(f"## List\n\n{self.list_name}\n\n")

        if self.comments:
            parts.append(f"## Comments ({len(self.comments)})\n\n")
            for number, comment in enumerate(self.comments, start=1):
                when = format_comment_time(comment.created_at)
                parts.append(f"### Comment {number}\n\n")
                parts.append(f"**{comment.author_name}** commented on {when}:\n\n")
                parts.append(f"{comment.text}\n\n")
                parts.append("---\n\n")

        parts.append("## Links\n\n")
        parts.append(f"- View this card on Trello: {self.url}\n")
        return "".join(parts)


def resolve_member_names(client: TrelloClient, member_ids: list[str]) -> list[str]:
    """Member ids -> full names; a failed lookup shows the raw id instead"""
    names = []
    for member_id in member_ids:
        try:
            names.append(client.get_member(member_id).display_name)
        except TrelloAPIError as e:
            logger.debug(f"Could not resolve member {member_id}: {e}")
            names.append(member_id)
    return names


def build_card_document(
    detailed: DetailedCard,
    comments: list[Comment],
    list_names: dict[str, str],
    assignees: list[str],
) -> CardDocument:
    return CardDocument(
        title=detailed.name,
        closed=detailed.closed,
        description=detailed.description,
        assignees=assignees,
        labels=[label.name for label in detailed.labels],
        list_name=list_names.get(detailed.list_id),
        comments=comments,
        short_link=detailed.short_link,
    )


def fetch_card_document(client: TrelloClient, board_id: str, short_id: int) -> CardDocument:
    """Look up a card by short ID and gather everything the detail view needs.

    Raises:
        CardNotFoundError: If no card on the board has this short ID; nothing
            else is fetched in that case
        TrelloAPIError: If any fetch other than a member lookup fails
    """
    card = find_card(client.get_cards(board_id), short_id)
    logger.debug(f"Card #{short_id} is {card.id}")

    detailed = client.get_card_details(card.id)
    comments = client.get_card_comments(card.id)
    list_names = build_list_map(client.get_lists(board_id))
    assignees = resolve_member_names(client, detailed.member_ids)

    return build_card_document(detailed, comments, list_names, assignees)


def show_card(
    client: TrelloClient,
    board_id: str,
    short_id: int,
    console: Console,
    field_name: str | None = None,
) -> CardDocument:
    """Print one card, either in full or a single field"""
    if field_name:
        field_name = normalize_field_name(field_name)

    document = fetch_card_document(client, board_id, short_id)

    if field_name:
        # No newline so the value can be captured as-is by scripts
        print(document.field_value(field_name), end="")
    else:
        render_markdown(document.to_markdown(), console)
    return document
