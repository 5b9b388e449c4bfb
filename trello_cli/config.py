"""Local config file: API credentials and the selected workspace/board."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from trello_cli.exceptions import ConfigParseError, ConfigReadError, ConfigWriteError

logger = logging.getLogger("trello_cli.config")

CONFIG_PATH_ENV = "TRELLO_CLI_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "trello_cli" / "config.json"


@dataclass
class Config:
    """Persisted settings. Every field stays empty until setup fills it in."""

    api_key: str = ""
    api_token: str = ""
    workspace_id: str = ""
    board_id: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_token)

    @property
    def has_board(self) -> bool:
        return bool(self.workspace_id and self.board_id)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            api_key=text("api_key"),
            api_token=text("api_token"),
            workspace_id=text("workspace"),
            board_id=text("board_id"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "api_key": self.api_key,
            "api_token": self.api_token,
            "workspace": self.workspace_id,
            "board_id": self.board_id,
        }


def default_config_path() -> Path:
    """Config location, overridable with $TRELLO_CLI_CONFIG"""
    override = os.getenv(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


class ConfigStore:
    """Load and save the JSON config file

    A missing file is an empty config, not an error. There is no locking;
    one invocation owns the file at a time.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else default_config_path()

    def load(self) -> Config:
        """Read the config file.

        Raises:
            ConfigParseError: If the file is not a JSON object
            ConfigReadError: If the file exists but cannot be read
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No config file at {self.path}, starting empty")
            return Config()
        except OSError as e:
            raise ConfigReadError(
                f"failed to read config file {self.path}: {e}", path=str(self.path)
            ) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigParseError(
                f"failed to parse config file {self.path}: {e}", path=str(self.path)
            ) from e

        if not isinstance(data, dict):
            raise ConfigParseError(
                f"failed to parse config file {self.path}: expected a JSON object",
                path=str(self.path),
            )

        logger.debug(f"Loaded config from {self.path}")
        return Config.from_dict(data)

    def save(self, config: Config) -> None:
        """Write the config file, creating its directory if needed.

        Raises:
            ConfigWriteError: If the directory or file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigWriteError(
                f"failed to create config directory {self.path.parent}: {e}",
                path=str(self.path),
            ) from e

        try:
            self.path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise ConfigWriteError(
                f"failed to write config file {self.path}: {e}", path=str(self.path)
            ) from e

        logger.debug(f"Saved config to {self.path}")
