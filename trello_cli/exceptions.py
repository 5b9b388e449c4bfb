"""Custom exception classes for trello_cli.

This module defines the exception hierarchy for local configuration errors,
Trello API errors and user input errors. Every error is fatal at the top
level; ``cli.main`` reports it on stderr and exits non-zero.
"""

from __future__ import annotations


class TrelloCLIError(Exception):
    """Base exception for all trello_cli errors"""

    pass


# ===== Local configuration =====


class ConfigError(TrelloCLIError):
    """Base exception for config file errors.

    Attributes:
        path: The config file path involved (if known)
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class ConfigReadError(ConfigError):
    """Raised when the config file exists but cannot be read"""

    pass


class ConfigParseError(ConfigError):
    """Raised when the config file is not a valid JSON object"""

    pass


class ConfigWriteError(ConfigError):
    """Raised when the config file or its directory cannot be written"""

    pass


# ===== Trello API =====


class TrelloAPIError(TrelloCLIError):
    """Base exception for Trello API errors"""

    def __init__(
        self, message: str, status_code: int | None = None, response_text: str | None = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class TrelloTransportError(TrelloAPIError):
    """Raised when the request never produced a response (DNS, connection, timeout)"""

    pass


class TrelloDecodeError(TrelloAPIError):
    """Raised when a response body is not the JSON shape we expect"""

    pass


class TrelloRequestFailed(TrelloAPIError):
    """Raised when Trello answers with a non-200 status"""

    pass


class TrelloAuthenticationError(TrelloRequestFailed):
    """Raised when API credentials are invalid or expired (401/403)"""

    pass


class TrelloNotFoundError(TrelloRequestFailed):
    """Raised when a board, card, or resource is not found (404)"""

    pass


class TrelloRateLimitError(TrelloRequestFailed):
    """Raised when the rate limit is exceeded (429)"""

    pass


class TrelloServerError(TrelloRequestFailed):
    """Raised when Trello's servers return an error (5xx)"""

    pass


# ===== User input and lookups =====


class CardNotFoundError(TrelloCLIError):
    """Raised when no card on the board has the requested short ID"""

    def __init__(self, short_id: int):
        self.short_id = short_id
        super().__init__(f"Card with ID #{short_id} not found on this board")


class InvalidFieldNameError(TrelloCLIError):
    """Raised when --field names something other than a known card field"""

    def __init__(self, field: str, valid_fields: tuple[str, ...]):
        self.field = field
        self.valid_fields = valid_fields
        super().__init__(f"Unknown field: {field}. Available fields: {', '.join(valid_fields)}")


class InvalidCardIDError(TrelloCLIError):
    """Raised when --card is not of the form #123 or 123"""

    def __init__(self, message: str, value: str):
        self.value = value
        super().__init__(message)


class SetupError(TrelloCLIError):
    """Base exception for first-run setup failures.

    This can occur when:
    - the terminal form cannot start
    - the account has no workspaces, or the workspace has no open boards
    """

    pass


class SetupAbortedError(SetupError):
    """Raised when the user cancels the credential form (Esc / Ctrl-C)"""

    pass


class InvalidSelectionError(SetupError):
    """Raised when a numbered-menu answer is not a number in range"""

    pass
