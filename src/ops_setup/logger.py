"""Log styled messages to the console.

User-facing output of the setup wizard goes through :class:`StyledLogger`,
which colors the first part of a message by severity and prints the rest
unstyled. Diagnostics use the standard ``logging`` module instead.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.style import Style
from rich.text import Text

COLORS = {
    "brightblue": "#0094ff",
    "coolgray": "#5e6769",
    "green": "#5bcf70",
    "red": "#d82727",
    "white": "#ffffff",
    "yellow": "#ffef7f",
}

STYLE_MAP: dict[str, Style] = {
    "error": Style(color=COLORS["red"]),
    "info": Style(color=COLORS["brightblue"]),
    "log": Style.null(),
    "reset": Style.null(),
    "success": Style(color=COLORS["green"]),
    "warn": Style(color=COLORS["yellow"]),
}

Messages = str | Sequence[str]


def get_style(style_name: str) -> Style:
    """Return the style for ``style_name``, falling back to plain output."""
    return STYLE_MAP.get(style_name, STYLE_MAP["log"])


def style_output(style_name: str, messages: Messages) -> Text:
    """Style the first message with ``style_name`` and append the rest plain."""
    if isinstance(messages, str):
        header, content = messages, []
    else:
        header, *content = list(messages) or [""]

    text = Text()
    text.append(header, style=get_style(style_name))
    text.append("".join(content))
    return text


class StyledLogger:
    """Print severity-styled messages through a rich console.

    Each method accepts a string or a list of strings and returns the plain
    text that was printed.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def print(self, level: str, messages: Messages) -> str:
        output = style_output(level, messages)
        self.console.print(output, soft_wrap=True)
        return output.plain

    def log(self, messages: Messages) -> str:
        return self.print("log", messages)

    def info(self, messages: Messages) -> str:
        return self.print("info", messages)

    def success(self, messages: Messages) -> str:
        return self.print("success", messages)

    def warn(self, messages: Messages) -> str:
        return self.print("warn", messages)

    def error(self, messages: Messages) -> str:
        return self.print("error", messages)
