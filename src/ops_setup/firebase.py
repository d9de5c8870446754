"""Firebase project configuration.

Linking the Firebase project takes three commands: enabling the
``webframeworks`` experiment, an interactive ``firebase login`` and
``firebase use <projectKey>``. ``configure_firebase`` runs them as a
sub-sequence through the step runner.
"""

from __future__ import annotations

import json
import logging
import shlex
from typing import Any

from .exec import CommandExecutor
from .logger import StyledLogger
from .models import RunOptions, StepOutcome, StepResult
from .runner import Step, run_steps

logger = logging.getLogger(__name__)

LOGIN_FAILED = "The Firebase login attempt failed."


async def configure_firebase_web_frameworks(executor: CommandExecutor) -> StepResult:
    """Enable Firebase's experimental webframeworks feature."""
    response = await executor("firebase experiments:enable webframeworks")
    if response.code != 0:
        return StepResult.fail("The Firebase webframeworks feature could not be enabled.")
    return StepResult.ok("The Firebase webframeworks feature has been enabled.")


def find_login_email(payload: Any) -> str | None:
    """Find the first account email in ``firebase login:list --json`` output."""
    if isinstance(payload, dict):
        email = payload.get("email")
        if isinstance(email, str) and email:
            return email
        values = list(payload.values())
    elif isinstance(payload, list):
        values = payload
    else:
        return None
    for value in values:
        email = find_login_email(value)
        if email:
            return email
    return None


async def configure_firebase_login(executor: CommandExecutor) -> StepResult:
    """Sign in to Firebase interactively and report the signed-in email.

    Errors raised by the executor are reported by message only.
    """
    try:
        response = await executor("firebase login", interactive=True)
        if response.code != 0:
            return StepResult.fail(LOGIN_FAILED)
        accounts = await executor("firebase login:list --json")
    except Exception as e:  # noqa: BLE001
        logger.debug("firebase login raised", exc_info=True)
        return StepResult.fail(str(e) or LOGIN_FAILED)

    if accounts.code != 0:
        return StepResult.fail(LOGIN_FAILED)
    try:
        email = find_login_email(json.loads(accounts.stdout))
    except json.JSONDecodeError:
        email = None
    if not email:
        return StepResult.fail(LOGIN_FAILED)
    return StepResult.ok("The user has been logged in to Firebase.", email=email)


async def configure_firebase_project(
    project_key: str | None, executor: CommandExecutor
) -> StepResult:
    if not project_key:
        return StepResult.fail("The projectKey option is required.")
    response = await executor(f"firebase use {shlex.quote(project_key)}")
    if response.code != 0:
        return StepResult.fail("The Firebase project could not be configured.")
    return StepResult.ok("The Firebase project has been configured.")


def make_firebase_configuration_steps(
    executor: CommandExecutor, styled: StyledLogger
) -> tuple[Step, ...]:
    async def enable_web_frameworks(options: RunOptions) -> StepOutcome:
        styled.info(["Enabling Firebase's experimental webframeworks feature ..."])
        return StepOutcome(await configure_firebase_web_frameworks(executor), options)

    async def sign_in(options: RunOptions) -> StepOutcome:
        styled.info(["Signing into Firebase ..."])
        result = await configure_firebase_login(executor)
        return StepOutcome(result, options.evolve(email=result.payload.get("email")))

    async def use_project(options: RunOptions) -> StepOutcome:
        styled.info(["Configuring the Firebase project ..."])
        return StepOutcome(
            await configure_firebase_project(options.project_key, executor), options
        )

    return (enable_web_frameworks, sign_in, use_project)


async def configure_firebase(
    options: RunOptions,
    executor: CommandExecutor,
    styled: StyledLogger,
    steps: tuple[Step, ...] | None = None,
) -> StepOutcome:
    """Run the Firebase steps; failures are returned, not printed."""
    if steps is None:
        steps = make_firebase_configuration_steps(executor, styled)
    result, state = await run_steps(steps, options, styled, report=False)
    if result.error:
        return StepOutcome(result, state)
    return StepOutcome(
        StepResult.ok("Firebase has been configured.", email=state.email), state
    )
