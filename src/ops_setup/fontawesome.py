"""Font Awesome npm registry access."""

from __future__ import annotations

import shlex

from .exec import CommandExecutor
from .models import PromptQuestion, StepResult
from .prompts import Prompter, ask

FONT_AWESOME_NPM_REGISTRY = "npm.fontawesome.com/"
FONT_AWESOME_SCOPE = "@fortawesome"

TOKEN_INVALID = "The Font Awesome token is invalid."


def token_question(default: str = "") -> PromptQuestion:
    return PromptQuestion(
        name="token",
        message="Enter the Font Awesome token.",
        default=default,
    )


async def prompt_for_token(prompter: Prompter, default: str = "") -> StepResult:
    """Ask for the token, rejecting an empty answer."""
    answers = await ask(prompter, [token_question(default)])
    token = (answers.get("token") or "").strip()
    if not token:
        return StepResult.fail(TOKEN_INVALID)
    return StepResult.ok("The Font Awesome token has been provided.", token=token)


def registry_command() -> str:
    scope = shlex.quote(f"{FONT_AWESOME_SCOPE}:registry")
    return f"npm config set {scope} https://{FONT_AWESOME_NPM_REGISTRY}"


def auth_token_command(token: str) -> str:
    key = shlex.quote(f"//{FONT_AWESOME_NPM_REGISTRY}:_authToken")
    return f"npm config set {key} {shlex.quote(token)}"


async def configure_font_awesome_registry(
    token: str, executor: CommandExecutor
) -> StepResult:
    """Point the @fortawesome scope at the Font Awesome registry and store the token."""
    if not token:
        return StepResult.fail(TOKEN_INVALID)

    registry = await executor(registry_command())
    if registry.code != 0:
        return StepResult.fail("The Font Awesome registry could not be configured.")

    auth = await executor(auth_token_command(token))
    if auth.code != 0:
        return StepResult.fail("The Font Awesome token could not be configured.")
    return StepResult.ok("Font Awesome is ready.")
