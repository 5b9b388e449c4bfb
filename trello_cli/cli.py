"""CLI entry point for trello_cli."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import NoReturn

from rich.console import Console

from trello_cli import __version__
from trello_cli.config import Config, ConfigStore
from trello_cli.detail import FIELD_NAMES, normalize_field_name, parse_card_id, show_card
from trello_cli.exceptions import (
    ConfigError,
    InvalidCardIDError,
    InvalidFieldNameError,
    SetupAbortedError,
    SetupError,
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloCLIError,
)
from trello_cli.listing import list_cards
from trello_cli.logging_config import setup_logging
from trello_cli.prompts import prompt_for_board, prompt_for_credentials, prompt_for_organization
from trello_cli.render import RenderConfig, make_console
from trello_cli.trello_client import TrelloClient

logger = logging.getLogger("trello_cli.cli")

EXAMPLES = """
examples:
    trello-cli                    cards assigned to you
    trello-cli -A -l "Doing,Done"  every card in the Doing and Done lists
    trello-cli -c 42              full details of card #42
    trello-cli -c '#42' -f list   just the list card #42 is in

On first run you are asked for your API key and token
(https://trello.com/power-ups/admin) and then for a workspace and board.
Settings are saved to ~/.config/trello_cli/config.json
(override with TRELLO_CLI_CONFIG). Set CLICOLOR_FORCE=1 to keep colours
when piping.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trello-cli",
        description="List your Trello cards and show card details.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-a",
        "--assigned",
        action="store_true",
        default=True,
        help="show only cards assigned to you (default)",
    )
    parser.add_argument(
        "-A", "--all", action="store_true", dest="show_all", help="show all cards on the board"
    )
    parser.add_argument(
        "-l", "--lists", metavar="NAMES", help="only show cards in these lists (comma-separated)"
    )
    parser.add_argument(
        "-c", "--card", metavar="ID", help="show details for one card (format: #123 or 123)"
    )
    parser.add_argument(
        "-f",
        "--field",
        metavar="NAME",
        help=f"with --card, print only one field: {', '.join(FIELD_NAMES)}",
    )

    logging_group = parser.add_argument_group("logging")
    verbosity = logging_group.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log every API request")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    verbosity.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="set the log level explicitly",
    )
    logging_group.add_argument("--log-file", metavar="PATH", help="also write logs to this file")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_log_level(args: argparse.Namespace) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return args.log_level or "WARNING"


def ensure_configured(
    config: Config,
    store: ConfigStore,
    console: Console,
    client_factory: Callable[[str, str], TrelloClient] = TrelloClient,
    credential_prompt: Callable[[], tuple[str, str]] = prompt_for_credentials,
) -> TrelloClient:
    """Fill in whatever the config is missing, saving after each step.

    Credentials are checked against ``/members/me`` before they are saved.

    Raises:
        SetupError: If a prompt fails or the new credentials are rejected
        TrelloAPIError: If fetching workspaces or boards fails
        ConfigWriteError: If the config cannot be saved
    """
    if not config.has_credentials:
        console.print("Please provide your Trello API credentials:")
        api_key, api_token = credential_prompt()

        try:
            client_factory(api_key, api_token).get_member_id()
        except TrelloAuthenticationError as e:
            raise SetupError(f"Invalid API credentials: {e}") from e

        config.api_key = api_key
        config.api_token = api_token
        store.save(config)
        logger.info(f"Credentials saved to {store.path}")

    client = client_factory(config.api_key, config.api_token)

    if not config.has_board:
        console.print("Fetching available workspaces...")
        workspace_id = prompt_for_organization(client, console)

        console.print("Fetching available boards...")
        board_id = prompt_for_board(client, workspace_id, console)

        config.workspace_id = workspace_id
        config.board_id = board_id
        store.save(config)
        logger.info(f"Board selection saved to {store.path}")

    return client


def _fail(message: str, exit_code: int = 1) -> NoReturn:
    logger.error(f"❌ {message}")
    sys.exit(exit_code)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(resolve_log_level(args), args.log_file)

    # Usage errors are reported before any file or network access
    short_id = None
    if args.card is not None:
        try:
            short_id = parse_card_id(args.card)
        except InvalidCardIDError as e:
            parser.error(str(e))

    field_name = None
    if args.field:
        try:
            field_name = normalize_field_name(args.field)
        except InvalidFieldNameError as e:
            parser.error(str(e))
        if short_id is None:
            parser.error("--field can only be used together with --card")

    # --assigned is on by default, so any --all run warns
    if args.show_all and args.assigned:
        logger.warning("Both --assigned and --all flags specified. Using --all.")

    render_config = RenderConfig.from_env()
    console = make_console(render_config)
    store = ConfigStore()

    try:
        config = store.load()
    except ConfigError as e:
        _fail(f"Failed to load config: {e}")

    try:
        client = ensure_configured(config, store, console)
    except (SetupAbortedError, KeyboardInterrupt):
        _fail("Setup cancelled", exit_code=130)
    except (SetupError, ConfigError, TrelloAPIError) as e:
        _fail(f"Setup failed: {e}")

    if short_id is not None:
        try:
            show_card(client, config.board_id, short_id, console, field_name=field_name)
        except TrelloCLIError as e:
            _fail(f"Failed to show card #{short_id}: {e}")
        return

    try:
        list_cards(
            client,
            config.board_id,
            console,
            render_config,
            show_all=args.show_all,
            list_filter=args.lists,
        )
    except TrelloCLIError as e:
        _fail(f"Failed to list cards: {e}")


if __name__ == "__main__":
    main()
