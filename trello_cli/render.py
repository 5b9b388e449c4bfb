"""Terminal rendering settings and helpers built on rich.

All colour decisions live in a ``RenderConfig`` that callers pass around
explicitly; nothing here keeps process-wide style state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import IO

from rich.cells import cell_len
from rich.console import Console
from rich.markdown import Markdown
from rich.segment import Segments
from rich.theme import Theme

FORCE_COLOR_ENV = "CLICOLOR_FORCE"

# Room for the bullet or quote gutter rich adds in front of a line
MARKDOWN_INDENT = 8

# Used when colour is forced, e.g. piping into `less -R`
DARK_THEME = Theme(
    {
        "markdown.h1": "bold #ffff87",
        "markdown.h1.border": "#5f5fff",
        "markdown.h2": "bold #00afff",
        "markdown.h3": "bold #00af87",
        "markdown.strong": "bold #eeeeee",
        "markdown.emph": "italic #d0d0d0",
        "markdown.hr": "#585858",
        "markdown.item.bullet": "bold #ff5f87",
        "markdown.link": "#00afff",
        "markdown.link_url": "underline #00afff",
        "markdown.paragraph": "#d0d0d0",
    }
)


@dataclass(frozen=True)
class RenderConfig:
    """How output should be coloured.

    Attributes:
        force_color: Emit ANSI colour even when stdout is not a terminal
        id_style: rich style for the ``#123`` column in card listings
    """

    force_color: bool = False
    id_style: str = "yellow"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RenderConfig:
        environ = os.environ if environ is None else environ
        return cls(force_color=environ.get(FORCE_COLOR_ENV) == "1")


def make_console(config: RenderConfig, file: IO[str] | None = None) -> Console:
    """Build the stdout console for this invocation.

    With ``force_color`` the console always emits 256-colour ANSI codes and
    uses the dark theme; otherwise rich detects the terminal itself.
    """
    if config.force_color:
        return Console(
            file=file,
            force_terminal=True,
            color_system="256",
            no_color=False,
            theme=DARK_THEME,
            highlight=False,
        )
    return Console(file=file, highlight=False)


def render_markdown(markdown: str, console: Console) -> None:
    """Print a markdown document without re-wrapping or cropping long lines.

    rich crops list items at the render width and ``Console.print`` never
    renders wider than the console, so the document is rendered here at least
    as wide as its longest source line and the segments are printed as-is.
    """
    longest = max((cell_len(line) for line in markdown.splitlines()), default=0)
    options = console.options.update(
        width=max(console.width, longest + MARKDOWN_INDENT), no_wrap=True, overflow="ignore"
    )
    segments = list(console.render(Markdown(markdown), options))
    console.print(Segments(segments), soft_wrap=True)
