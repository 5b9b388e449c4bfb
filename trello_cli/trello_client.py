"""Trello API client.

One synchronous GET per operation, no retries. Credentials travel as the
``key``/``token`` query parameters and are never logged or put into error
messages.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from trello_cli.exceptions import (
    TrelloAuthenticationError,
    TrelloDecodeError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloRequestFailed,
    TrelloServerError,
    TrelloTransportError,
)
from trello_cli.models import Board, Card, Comment, DetailedCard, Member, Organization, TrelloList

logger = logging.getLogger("trello_cli.trello_client")

BASE_URL = "https://api.trello.com/1"


class TrelloClient:
    """Read cards, lists, boards and members from the Trello REST API

    Example:
        >>> client = TrelloClient(api_key="...", api_token="...")
        >>> for card in client.get_cards("5f1c..."):
        ...     print(card.short_id, card.name)
    """

    def __init__(self, api_key: str, api_token: str, base_url: str = BASE_URL, timeout: float = 30):
        self.api_key = api_key
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, endpoint: str, params: dict | None = None) -> Any:
        """Make an authenticated GET request and return the decoded JSON body"""
        url = f"{self.base_url}/{endpoint}"
        logger.debug(f"GET /{endpoint} {params or {}}")

        auth_params = {"key": self.api_key, "token": self.api_token}
        if params:
            auth_params.update(params)

        try:
            response = requests.get(url, params=auth_params, timeout=self.timeout)
        except requests.RequestException as e:
            # The exception text can embed the full URL, token included
            raise TrelloTransportError(
                f"Network error for /{endpoint}: {type(e).__name__}. "
                "Check your internet connection and try again."
            ) from e

        if response.status_code != 200:
            self._raise_for_status(endpoint, response)

        try:
            return response.json()
        except ValueError as e:
            raise TrelloDecodeError(
                f"Invalid JSON in response from /{endpoint}",
                status_code=response.status_code,
                response_text=response.text[:200],
            ) from e

    @staticmethod
    def _raise_for_status(endpoint: str, response: requests.Response) -> None:
        status_code = response.status_code
        response_text = response.text

        if status_code in (401, 403):
            raise TrelloAuthenticationError(
                f"HTTP {status_code} for /{endpoint}: invalid API credentials "
                "or no access to this resource",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 404:
            raise TrelloNotFoundError(
                f"HTTP 404 for /{endpoint}: resource not found",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 429:
            raise TrelloRateLimitError(
                f"HTTP 429 for /{endpoint}: rate limit exceeded, wait a moment and try again",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code >= 500:
            raise TrelloServerError(
                f"HTTP {status_code} for /{endpoint}: Trello server error, try again later",
                status_code=status_code,
                response_text=response_text,
            )
        # Bodies are often multi-line HTML; messages stay on one line
        summary = " ".join(response_text.split())[:200]
        raise TrelloRequestFailed(
            f"HTTP {status_code} for /{endpoint}: {summary}",
            status_code=status_code,
            response_text=response_text,
        )

    def _request_list(self, endpoint: str, params: dict | None = None) -> list:
        data = self._request(endpoint, params)
        if not isinstance(data, list):
            raise TrelloDecodeError(f"Expected a JSON array from /{endpoint}")
        return data

    def get_cards(self, board_id: str) -> list[Card]:
        """Get all cards on a board, with member ids populated"""
        items = self._request_list(f"boards/{board_id}/cards", {"members": "true"})
        return [Card.from_api(item) for item in items]

    def get_lists(self, board_id: str) -> list[TrelloList]:
        """Get all lists on a board"""
        items = self._request_list(f"boards/{board_id}/lists")
        return [TrelloList.from_api(item) for item in items]

    def get_boards(self, organization_id: str) -> list[Board]:
        """Get the open (non-archived) boards of a workspace"""
        items = self._request_list(f"organizations/{organization_id}/boards", {"filter": "open"})
        return [Board.from_api(item) for item in items]

    def get_organizations(self) -> list[Organization]:
        """Get the workspaces the authenticated member belongs to"""
        items = self._request_list("members/me/organizations")
        return [Organization.from_api(item) for item in items]

    def get_member_id(self) -> str:
        """Get the authenticated member's id.

        Also the cheapest way to check that a key/token pair works.
        """
        return Member.from_api(self._request("members/me")).id

    def get_member(self, member_id: str) -> Member:
        """Get one member, used to show assignee names"""
        return Member.from_api(self._request(f"members/{member_id}"))

    def get_card_details(self, card_id: str) -> DetailedCard:
        """Get a card with description, members and labels"""
        data = self._request(f"cards/{card_id}", {"members": "true", "labels": "true"})
        return DetailedCard.from_api(data)

    def get_card_comments(self, card_id: str) -> list[Comment]:
        """Get the comments on a card, newest first as Trello returns them"""
        items = self._request_list(f"cards/{card_id}/actions", {"filter": "commentCard"})
        return [Comment.from_api(item) for item in items]
