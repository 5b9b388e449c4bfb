"""
Shared pytest fixtures for trello_cli tests
"""
import io
import json
import logging
from pathlib import Path

import pytest
from rich.console import Console

from trello_cli.config import Config, ConfigStore


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def board_fixture(fixtures_dir):
    """Load the sample board: member, workspaces, lists, cards, one detailed card"""
    with open(fixtures_dir / "board.json") as f:
        return json.load(f)


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point the config store at a temporary file for the whole test"""
    path = tmp_path / "trello_cli" / "config.json"
    monkeypatch.setenv("TRELLO_CLI_CONFIG", str(path))
    return path


@pytest.fixture
def configured(config_path):
    """A saved config with credentials and a selected board"""
    config = Config(
        api_key="test_key", api_token="test_token", workspace_id="org-1", board_id="board-1"
    )
    ConfigStore(config_path).save(config)
    return config


@pytest.fixture
def console_output():
    """A plain (no colour) console writing into a StringIO"""
    buffer = io.StringIO()
    return Console(file=buffer, force_terminal=False, color_system=None, width=80), buffer


@pytest.fixture(autouse=True)
def reset_trello_cli_logger():
    """Drop handlers main() attached so they don't point at closed capture streams"""
    yield
    logger = logging.getLogger("trello_cli")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
