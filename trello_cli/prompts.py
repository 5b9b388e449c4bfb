"""First-run setup prompts: the credential form and numbered menus."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Protocol

from rich.console import Console
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, Static

from trello_cli.exceptions import InvalidSelectionError, SetupAbortedError, SetupError
from trello_cli.trello_client import TrelloClient

logger = logging.getLogger("trello_cli.prompts")


class FormState(Enum):
    EDITING_KEY = "editing_key"
    EDITING_TOKEN = "editing_token"
    SUBMITTED = "submitted"
    ABORTED = "aborted"


class FormEvent(Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    SUBMIT = "submit"
    CANCEL = "cancel"


class CredentialForm:
    """State machine behind the API key / token form.

    Tab/Down and Shift-Tab/Up cycle focus between the two fields, Enter on
    the key field moves to the token field and Enter on the token field
    submits. Cancel aborts from anywhere. SUBMITTED and ABORTED are final.
    """

    FIELDS = (FormState.EDITING_KEY, FormState.EDITING_TOKEN)

    def __init__(self) -> None:
        self.state = FormState.EDITING_KEY
        self.api_key = ""
        self.api_token = ""

    @property
    def done(self) -> bool:
        return self.state in (FormState.SUBMITTED, FormState.ABORTED)

    def handle(self, event: FormEvent) -> FormState:
        if self.done:
            return self.state

        if event is FormEvent.CANCEL:
            self.state = FormState.ABORTED
        elif event is FormEvent.SUBMIT and self.state is FormState.EDITING_TOKEN:
            self.state = FormState.SUBMITTED
        elif event in (FormEvent.NEXT, FormEvent.SUBMIT):
            self.state = self._step(1)
        elif event is FormEvent.PREVIOUS:
            self.state = self._step(-1)
        return self.state

    def _step(self, offset: int) -> FormState:
        index = self.FIELDS.index(self.state)
        return self.FIELDS[(index + offset) % len(self.FIELDS)]


class CredentialsApp(App[CredentialForm]):
    """textual front end for ``CredentialForm``"""

    TITLE = "Trello CLI Configuration"

    CSS = """
    #form {
        width: 70;
        height: auto;
        padding: 1 2;
    }

    #form-title {
        text-style: bold;
        padding-bottom: 1;
    }

    Input {
        color: $text-muted;
    }

    Input:focus {
        color: #ff5fd7;
    }

    #form-hint {
        color: $text-muted;
        padding-top: 1;
    }
    """

    BINDINGS = [
        Binding("tab", "next_field", "Next", show=False, priority=True),
        Binding("down", "next_field", "Next", show=False, priority=True),
        Binding("shift+tab", "previous_field", "Previous", show=False, priority=True),
        Binding("up", "previous_field", "Previous", show=False, priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
    ]

    INPUT_IDS = {
        FormState.EDITING_KEY: "api-key",
        FormState.EDITING_TOKEN: "api-token",
    }

    def __init__(self, form: CredentialForm | None = None) -> None:
        super().__init__()
        self.form = form or CredentialForm()

    def compose(self) -> ComposeResult:
        with Vertical(id="form"):
            yield Static("Trello CLI Configuration", id="form-title")
            yield Static("API Key:")
            yield Input(placeholder="Enter your Trello API Key", id="api-key")
            yield Static("API Token:")
            yield Input(placeholder="Enter your Trello API Token", password=True, id="api-token")
            yield Static("Press Enter to continue, Esc to cancel", id="form-hint")

    def on_mount(self) -> None:
        self._sync_focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "api-key":
            self.form.api_key = event.value
        elif event.input.id == "api-token":
            self.form.api_token = event.value

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._dispatch(FormEvent.SUBMIT)

    def action_next_field(self) -> None:
        self._dispatch(FormEvent.NEXT)

    def action_previous_field(self) -> None:
        self._dispatch(FormEvent.PREVIOUS)

    def action_cancel(self) -> None:
        self._dispatch(FormEvent.CANCEL)

    def _dispatch(self, event: FormEvent) -> None:
        self.form.handle(event)
        if self.form.done:
            self.exit(self.form)
        else:
            self._sync_focus()

    def _sync_focus(self) -> None:
        self.query_one(f"#{self.INPUT_IDS[self.form.state]}", Input).focus()


class _FormRunner(Protocol):
    def run(self) -> CredentialForm | None: ...


def prompt_for_credentials(
    app_factory: Callable[[], _FormRunner] = CredentialsApp,
) -> tuple[str, str]:
    """Run the credential form until it is submitted or cancelled.

    Returns:
        (api_key, api_token) with surrounding whitespace removed

    Raises:
        SetupAbortedError: If the user pressed Esc or Ctrl-C
        SetupError: If the terminal form could not run
    """
    app = app_factory()
    try:
        form = app.run()
    except Exception as e:
        raise SetupError(f"Could not start the credential form: {e}") from e

    if form is None or form.state is not FormState.SUBMITTED:
        raise SetupAbortedError("Setup cancelled")

    return form.api_key.strip(), form.api_token.strip()


class _Named(Protocol):
    id: str
    name: str


def prompt_for_selection(
    items: Sequence[_Named], title: str, prompt: str, console: Console, empty_message: str
) -> str:
    """Print a 1-based numbered menu and read one choice.

    Returns:
        The id of the chosen item

    Raises:
        SetupError: If there is nothing to choose from
        InvalidSelectionError: If the answer is not a number in range
    """
    if not items:
        raise SetupError(empty_message)

    console.print(title, markup=False)
    for number, item in enumerate(items, start=1):
        console.print(f"{number}. {item.name}", markup=False)

    try:
        answer = console.input(prompt)
    except EOFError as e:
        raise InvalidSelectionError("Invalid choice: no input") from e

    try:
        choice = int(answer.strip())
    except ValueError as e:
        raise InvalidSelectionError(f"Invalid choice: {answer.strip()!r}") from e

    if not 1 <= choice <= len(items):
        raise InvalidSelectionError(f"Invalid choice: {choice} (expected 1-{len(items)})")

    selected = items[choice - 1]
    logger.debug(f"Selected {selected.name} ({selected.id})")
    return selected.id


def prompt_for_organization(client: TrelloClient, console: Console) -> str:
    organizations = client.get_organizations()
    return prompt_for_selection(
        organizations,
        "Available Workspaces:",
        "Select workspace (number): ",
        console,
        empty_message="No workspaces found",
    )


def prompt_for_board(client: TrelloClient, organization_id: str, console: Console) -> str:
    boards = client.get_boards(organization_id)
    return prompt_for_selection(
        boards,
        "Available Boards:",
        "Select board (number): ",
        console,
        empty_message="No boards found in this workspace",
    )
