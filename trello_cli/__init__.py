"""Command-line client for Trello: your cards, and the details of one card."""

from __future__ import annotations

__version__ = "0.1.0"

# Import config store
from trello_cli.config import Config, ConfigStore

# Import card detail flow
from trello_cli.detail import CardDocument, fetch_card_document, show_card

# Import exceptions
from trello_cli.exceptions import (
    CardNotFoundError,
    ConfigError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    InvalidCardIDError,
    InvalidFieldNameError,
    InvalidSelectionError,
    SetupAbortedError,
    SetupError,
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloCLIError,
    TrelloDecodeError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloRequestFailed,
    TrelloServerError,
    TrelloTransportError,
)

# Import card listing flow
from trello_cli.listing import list_cards, select_cards

# Import logging configuration
from trello_cli.logging_config import setup_logging

# Import rendering configuration
from trello_cli.render import RenderConfig

# Import Trello client
from trello_cli.trello_client import TrelloClient

# Import CLI last; it reads __version__
from trello_cli.cli import main

__all__ = [
    # Core classes
    "TrelloClient",
    "Config",
    "ConfigStore",
    "CardDocument",
    "RenderConfig",
    "fetch_card_document",
    "list_cards",
    "select_cards",
    "show_card",
    "setup_logging",
    # Exceptions
    "TrelloCLIError",
    "ConfigError",
    "ConfigReadError",
    "ConfigParseError",
    "ConfigWriteError",
    "TrelloAPIError",
    "TrelloTransportError",
    "TrelloDecodeError",
    "TrelloRequestFailed",
    "TrelloAuthenticationError",
    "TrelloNotFoundError",
    "TrelloRateLimitError",
    "TrelloServerError",
    "CardNotFoundError",
    "InvalidCardIDError",
    "InvalidFieldNameError",
    "SetupError",
    "SetupAbortedError",
    "InvalidSelectionError",
    # CLI
    "main",
]
