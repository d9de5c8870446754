"""Tests for the provider helpers: prompts, Firebase login and npm commands."""

import asyncio
import threading
from collections.abc import Sequence
from typing import Any

import pytest

from conftest import FakeExecutor, make_console
from ops_setup import firebase, fontawesome
from ops_setup.environment import configure_node_env
from ops_setup.models import ExecResponse, PromptQuestion, RunOptions
from ops_setup.prompts import RichPrompter, ask, mask_default


class TestRichPrompter:
    def test_answers_are_keyed_by_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        asked: list[dict[str, Any]] = []

        def fake_ask(prompt: str, **kwargs: Any) -> str:
            asked.append({"prompt": prompt, **kwargs})
            return "  typed-token  "

        monkeypatch.setattr("ops_setup.prompts.Prompt.ask", fake_ask)
        prompter = RichPrompter(console=make_console())

        answers = prompter(
            [PromptQuestion(name="token", message="Enter it.", default="secret-token-1234")]
        )

        assert answers == {"token": "typed-token"}
        assert asked[0]["prompt"] == "Enter it. [****1234]"
        assert "secret-token" not in asked[0]["prompt"]
        assert asked[0]["default"] == "secret-token-1234"
        assert asked[0]["show_default"] is False

    @pytest.mark.parametrize(
        ("value", "masked"),
        [("abcdefgh", "****efgh"), ("abcd", "****"), ("ab", "**")],
    )
    def test_mask_default(self, value: str, masked: str) -> None:
        assert mask_default(value) == masked


class TestAsk:
    @pytest.mark.asyncio
    async def test_answers_come_back_from_the_prompt_thread(self) -> None:
        threads: list[str] = []

        def prompter(questions: Sequence[PromptQuestion]) -> dict[str, str]:
            threads.append(threading.current_thread().name)
            return {q.name: "answer" for q in questions}

        answers = await ask(prompter, [PromptQuestion(name="token", message="?")])

        assert answers == {"token": "answer"}
        assert threads == ["ops-prompt"]

    @pytest.mark.asyncio
    async def test_errors_are_raised_in_the_caller(self) -> None:
        def prompter(questions: Sequence[PromptQuestion]) -> dict[str, str]:
            raise EOFError("no input")

        with pytest.raises(EOFError, match="no input"):
            await ask(prompter, [PromptQuestion(name="token", message="?")])

    @pytest.mark.asyncio
    async def test_cancellation_does_not_wait_for_input(self) -> None:
        release = threading.Event()

        def prompter(questions: Sequence[PromptQuestion]) -> dict[str, str]:
            release.wait(5)
            return {"token": "late"}

        task = asyncio.create_task(
            fontawesome.prompt_for_token(prompter)  # type: ignore[arg-type]
        )
        await asyncio.sleep(0.05)
        task.cancel()
        try:
            with pytest.raises(asyncio.CancelledError):
                await asyncio.wait_for(task, timeout=1)
        finally:
            release.set()


class TestFirebaseLogin:
    @pytest.mark.parametrize(
        ("payload", "email"),
        [
            ({"result": [{"user": {"email": "a@example.com"}}]}, "a@example.com"),
            ({"result": {"user": {"email": "b@example.com"}}}, "b@example.com"),
            ({"result": []}, None),
            ("not an object", None),
        ],
    )
    def test_find_login_email(self, payload: Any, email: str | None) -> None:
        assert firebase.find_login_email(payload) == email

    @pytest.mark.asyncio
    async def test_login_failure(self) -> None:
        executor = FakeExecutor().fail("firebase login")
        result = await firebase.configure_firebase_login(executor)
        assert result.error is True
        assert result.message == firebase.LOGIN_FAILED

    @pytest.mark.asyncio
    async def test_login_list_without_email(self) -> None:
        executor = FakeExecutor({"firebase login:list": ExecResponse(code=0, stdout="[]")})
        result = await firebase.configure_firebase_login(executor)
        assert result.error is True

    @pytest.mark.asyncio
    async def test_login_exception_message(self) -> None:
        executor = FakeExecutor(raises=OSError("spawn failed"))
        result = await firebase.configure_firebase_login(executor)
        assert result.error is True
        assert result.message == "spawn failed"

    @pytest.mark.asyncio
    async def test_configure_firebase_forwards_email(self, styled: Any) -> None:
        outcome = await firebase.configure_firebase(
            RunOptions(project_key="default"), FakeExecutor(), styled
        )
        assert outcome.result.error is False
        assert outcome.result.payload["email"] == "dev@example.com"
        assert outcome.state.email == "dev@example.com"


class TestFontAwesome:
    def test_commands(self) -> None:
        assert fontawesome.registry_command() == (
            "npm config set @fortawesome:registry https://npm.fontawesome.com/"
        )
        assert fontawesome.auth_token_command("a b") == (
            "npm config set //npm.fontawesome.com/:_authToken 'a b'"
        )

    @pytest.mark.asyncio
    async def test_registry_failure_skips_token(self) -> None:
        executor = FakeExecutor().fail("npm config set @fortawesome")
        result = await fontawesome.configure_font_awesome_registry("token", executor)
        assert result.error is True
        assert len(executor.calls) == 1


def test_configure_node_env() -> None:
    environ: dict[str, str] = {}
    assert configure_node_env("production", environ).error is False
    assert environ == {"NODE_ENV": "production"}
    assert configure_node_env("", environ).error is True
