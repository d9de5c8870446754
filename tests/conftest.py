"""
Shared test configuration and fixtures for the ops setup wizard.

This module provides:
- Fake providers (command executor, prompter) that record their calls
- A styled logger writing to an in-memory console
- A temporary project directory with a .firebaserc file
- Configuration for test timeouts
"""

import faulthandler
import io
import json
import os
import signal
import sys
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Generator

import pytest
from rich.console import Console

from ops_setup.config import OpsSettings, get_settings
from ops_setup.logger import StyledLogger
from ops_setup.models import ExecResponse, PromptQuestion, RunOptions
from ops_setup.registry import RegistryReader
from ops_setup.steps import StepProviders

# Enable faulthandler to dump tracebacks on hard hangs
faulthandler.enable(file=sys.stderr)

LOGIN_LIST_JSON = json.dumps(
    {"status": "success", "result": [{"user": {"email": "dev@example.com"}}]}
)


def _get_timeout_seconds() -> int:
    """Get timeout configuration from environment variables."""
    try:
        return int(
            os.getenv(
                "PYTEST_PER_TEST_TIMEOUT",
                os.getenv("PYTEST_TIMEOUT", "10"),
            )
        )
    except ValueError:
        return 10


@pytest.fixture(autouse=True)
def per_test_timeout(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """
    Enforce a per-test timeout without external plugins.

    Uses SIGALRM on Unix main thread to fail fast after N seconds.
    Falls back to faulthandler-only on platforms without SIGALRM.
    Configure via env var PYTEST_PER_TEST_TIMEOUT (seconds), default 10.
    """
    timeout = _get_timeout_seconds()
    if timeout <= 0:
        yield
        return

    use_alarm = hasattr(signal, "SIGALRM") and (
        threading.current_thread() is threading.main_thread()
    )
    if not use_alarm or request.config.pluginmanager.hasplugin("timeout"):
        faulthandler.dump_traceback_later(timeout, repeat=False)
        try:
            yield
        finally:
            faulthandler.cancel_dump_traceback_later()
        return

    def _on_timeout(signum: int, frame: Any) -> None:  # noqa: ARG001
        faulthandler.dump_traceback(file=sys.stderr)
        pytest.fail(f"Test timed out after {timeout}s", pytrace=False)

    old_handler = signal.getsignal(signal.SIGALRM)
    signal.signal(signal.SIGALRM, _on_timeout)
    signal.setitimer(signal.ITIMER_REAL, float(timeout))
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0.0)
        signal.signal(signal.SIGALRM, old_handler)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Settings are cached per process; start every test from a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeExecutor:
    """
    Command executor that records commands and replays canned responses.

    Responses are matched by command prefix, longest prefix first. Commands
    without a match succeed with empty output.
    """

    def __init__(
        self,
        responses: dict[str, ExecResponse] | None = None,
        raises: Exception | None = None,
    ) -> None:
        self.responses = {"firebase login:list": ExecResponse(code=0, stdout=LOGIN_LIST_JSON)}
        self.responses.update(responses or {})
        self.raises = raises
        self.calls: list[str] = []
        self.interactive_calls: list[str] = []

    def fail(self, prefix: str, code: int = 1) -> "FakeExecutor":
        self.responses[prefix] = ExecResponse(code=code, stderr="failed")
        return self

    async def __call__(self, command: str, *, interactive: bool = False) -> ExecResponse:
        self.calls.append(command)
        if interactive:
            self.interactive_calls.append(command)
        if self.raises is not None:
            raise self.raises
        for prefix in sorted(self.responses, key=len, reverse=True):
            if command.startswith(prefix):
                return self.responses[prefix]
        return ExecResponse(code=0)


class FakePrompter:
    """Prompter returning fixed answers and recording the questions asked."""

    def __init__(self, answers: dict[str, str] | None = None) -> None:
        self.answers = answers if answers is not None else {"token": "fa-token"}
        self.questions: list[PromptQuestion] = []

    def __call__(self, questions: Sequence[PromptQuestion]) -> dict[str, str]:
        self.questions.extend(questions)
        return dict(self.answers)


def make_console() -> Console:
    """A console writing plain text to memory."""
    return Console(file=io.StringIO(), color_system=None, width=200, highlight=False)


def console_output(styled: StyledLogger) -> str:
    file = styled.console.file
    assert isinstance(file, io.StringIO)
    return file.getvalue()


def write_firebaserc(directory: Path, content: Any) -> Path:
    path = directory / ".firebaserc"
    text = content if isinstance(content, str) else json.dumps(content)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project root whose .firebaserc maps "default" to "acme-prod"."""
    write_firebaserc(tmp_path, {"projects": {"default": "acme-prod", "staging": "acme-staging"}})
    return tmp_path


@pytest.fixture
def options(project_dir: Path) -> RunOptions:
    return RunOptions(directory=str(project_dir), project_key="default", env="development")


@pytest.fixture
def styled() -> StyledLogger:
    return StyledLogger(make_console())


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def settings() -> OpsSettings:
    return OpsSettings(
        _env_file=None,
        font_awesome_token=None,
        font_awesome_token_location="fontawesome.com/account",
        ops_node_env="development",
        ops_project_key=None,
    )


@pytest.fixture
def providers(
    executor: FakeExecutor,
    prompter: FakePrompter,
    settings: OpsSettings,
    styled: StyledLogger,
) -> StepProviders:
    return StepProviders(
        executor=executor,
        prompter=prompter,
        registry=RegistryReader(),
        settings=settings,
        styled=styled,
        environ={},
    )
