"""List cards on the configured board as an aligned ``#id title`` table."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from rich.console import Console
from rich.text import Text

from trello_cli.models import Card, TrelloList
from trello_cli.render import RenderConfig
from trello_cli.trello_client import TrelloClient

logger = logging.getLogger("trello_cli.listing")

UNKNOWN_LIST = "Unknown"


@dataclass
class CardRow:
    short_id: int
    name: str
    list_name: str

    @property
    def label(self) -> str:
        return f"#{self.short_id}"


def parse_list_filter(value: str | None) -> set[str] | None:
    """Turn ``" Doing , Done"`` into ``{"doing", "done"}``.

    Returns None (meaning every list) when no usable names were given.
    """
    if not value:
        return None
    names = {name.strip().lower() for name in value.split(",") if name.strip()}
    return names or None


def build_list_map(lists: Iterable[TrelloList]) -> dict[str, str]:
    return {trello_list.id: trello_list.name for trello_list in lists}


def select_cards(
    cards: Iterable[Card],
    list_names: dict[str, str],
    member_id: str | None,
    allowed_lists: set[str] | None = None,
) -> list[CardRow]:
    """Filter and sort cards for display.

    Args:
        cards: Cards in board fetch order
        list_names: list id -> list name
        member_id: Keep only cards assigned to this member; None keeps all
        allowed_lists: Lower-cased list names to keep; None keeps all

    Returns:
        Rows sorted by short ID; equal IDs keep their fetch order
    """
    rows = []
    for card in cards:
        if member_id is not None and member_id not in card.member_ids:
            continue
        list_name = list_names.get(card.list_id) or UNKNOWN_LIST
        if allowed_lists is not None and list_name.lower() not in allowed_lists:
            continue
        rows.append(CardRow(short_id=card.short_id, name=card.name, list_name=list_name))

    # sorted() is stable
    return sorted(rows, key=lambda row: row.short_id)


def format_rows(rows: list[CardRow], render_config: RenderConfig) -> list[Text]:
    width = max((len(row.label) for row in rows), default=0)
    lines = []
    for row in rows:
        line = Text()
        line.append(row.label, style=render_config.id_style)
        line.append(" " * (width - len(row.label) + 1))
        line.append(row.name)
        lines.append(line)
    return lines


def print_cards(rows: list[CardRow], console: Console, render_config: RenderConfig) -> None:
    for line in format_rows(rows, render_config):
        console.print(line, soft_wrap=True)


def list_cards(
    client: TrelloClient,
    board_id: str,
    console: Console,
    render_config: RenderConfig,
    show_all: bool = False,
    list_filter: str | None = None,
) -> list[CardRow]:
    """Fetch, filter and print the board's cards; returns the printed rows"""
    allowed_lists = parse_list_filter(list_filter)

    member_id = None
    if not show_all:
        member_id = client.get_member_id()

    cards = client.get_cards(board_id)
    list_names = build_list_map(client.get_lists(board_id))

    rows = select_cards(cards, list_names, member_id, allowed_lists)
    logger.info(f"Showing {len(rows)} of {len(cards)} cards")

    print_cards(rows, console, render_config)
    return rows
