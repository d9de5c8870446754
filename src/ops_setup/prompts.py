"""Interactive prompts."""

from __future__ import annotations

import asyncio
import contextlib
import threading
from collections.abc import Sequence
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from .models import PromptQuestion

MASK_VISIBLE_CHARS = 4


class Prompter(Protocol):
    """Asks each question and returns the answers keyed by question name."""

    def __call__(self, questions: Sequence[PromptQuestion]) -> dict[str, str]: ...


def mask_default(value: str) -> str:
    """Hide all but the last few characters of a prompt default."""
    if len(value) <= MASK_VISIBLE_CHARS:
        return "*" * len(value)
    return "*" * 4 + value[-MASK_VISIBLE_CHARS:]


class RichPrompter:
    """Prompter backed by ``rich.prompt.Prompt``.

    Defaults are shown masked; pressing enter still accepts the full value.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console

    def __call__(self, questions: Sequence[PromptQuestion]) -> dict[str, str]:
        answers: dict[str, str] = {}
        for question in questions:
            message = question.message
            if question.default:
                message = f"{message} {escape(f'[{mask_default(question.default)}]')}"
            answer = Prompt.ask(
                message,
                console=self.console,
                default=question.default,
                show_default=False,
            )
            answers[question.name] = (answer or "").strip()
        return answers


async def ask(prompter: Prompter, questions: Sequence[PromptQuestion]) -> dict[str, str]:
    """Run a blocking prompter off the event loop.

    The prompt runs in a daemon thread so that cancelling the caller (Ctrl+C)
    returns immediately and the pending ``input()`` never holds up exit.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[dict[str, str]] = loop.create_future()

    def _settle(answers: dict[str, str] | None, error: Exception | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(answers or {})

    def _worker() -> None:
        try:
            answers = prompter(questions)
        except Exception as exc:  # noqa: BLE001
            result: tuple[dict[str, str] | None, Exception | None] = (None, exc)
        else:
            result = (answers, None)
        # The loop is gone once the caller has been cancelled and exited.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_settle, *result)

    threading.Thread(target=_worker, name="ops-prompt", daemon=True).start()
    return await future
