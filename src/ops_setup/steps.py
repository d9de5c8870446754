"""Setup steps and the sequences built from them.

Each step announces itself, delegates to one provider, turns any failure
(non-zero exit, raised exception, empty input) into a failed
:class:`StepResult` with remediation lines, and returns the state for the
next step. Providers are bound when a sequence is built, so tests swap in
fakes through :class:`StepProviders`.
"""

from __future__ import annotations

import inspect
import logging
import os
from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass, field

from .config import OpsSettings
from .environment import NODE_ENV, configure_node_env
from .exec import CommandExecutor, ShellExecutor
from .firebase import configure_firebase
from .fontawesome import configure_font_awesome_registry, prompt_for_token
from .gcloud import configure_google_project
from .logger import StyledLogger
from .models import RunOptions, StepOutcome, StepResult
from .prompts import Prompter, RichPrompter
from .registry import FIREBASERC_FILENAME, RegistryReader
from .runner import Step

logger = logging.getLogger(__name__)


@dataclass
class StepProviders:
    """The external collaborators the steps delegate to."""

    executor: CommandExecutor
    prompter: Prompter
    registry: RegistryReader
    settings: OpsSettings
    styled: StyledLogger = field(default_factory=StyledLogger)
    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)

    @classmethod
    def default(
        cls,
        settings: OpsSettings,
        *,
        registry: RegistryReader | None = None,
        styled: StyledLogger | None = None,
        verbose: bool = False,
    ) -> StepProviders:
        styled = styled or StyledLogger()
        return cls(
            executor=ShellExecutor(verbose=verbose, styled=styled),
            prompter=RichPrompter(console=styled.console),
            registry=registry or RegistryReader(),
            settings=settings,
            styled=styled,
        )


async def attempt(call: Callable[[], StepResult | Awaitable[StepResult]]) -> StepResult:
    """Call a provider, converting a raised exception into a failed result."""
    try:
        result = call()
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:  # noqa: BLE001
        logger.debug("provider raised", exc_info=True)
        return StepResult.fail(str(e) or type(e).__name__)
    return result


def node_env_remediation(env: str) -> list[str]:
    return [
        f"Failed to set the {NODE_ENV} environment variable to {env}.",
        "- Confirm the OPS_NODE_ENV env var in the .env file or the env option on the command line.",
        "- Ensure the env option is set to a valid and desirable value.",
    ]


def project_key_remediation(service: str, project_key: str | None, auth_command: str) -> list[str]:
    return [
        f'Failed to configure {service} using "{project_key}" as the projectKey.',
        '  1. Review the OPS_PROJECT_KEY env var in the .env file or the "projectKey" flag on the command line.',
        "     Ensure the project key is set to a valid and desirable value.",
        "",
        f"  2. Ensure the {FIREBASERC_FILENAME} file has a property for the corresponding project key.",
        f"     Ensure the project name in the {FIREBASERC_FILENAME} file is set to a valid and desirable value.",
        "",
        f"  3. Ensure your account has access to the project referenced in the {FIREBASERC_FILENAME} file.",
        f'     Run "{auth_command}" to review your auth state.',
    ]


def make_configure_node_env_step(providers: StepProviders) -> Step:
    styled = providers.styled

    async def configure_runtime_mode(options: RunOptions) -> StepOutcome:
        styled.info([f"Configuring the {NODE_ENV} environment variable to {options.env} ..."])
        result = await attempt(lambda: configure_node_env(options.env, providers.environ))
        if result.error:
            return StepOutcome(result.with_messages(node_env_remediation(options.env)), options)

        styled.log([f"{NODE_ENV} is set to {options.env}."])
        styled.success(["The environment is ready."])
        return StepOutcome(result, options)

    return configure_runtime_mode


def make_configure_google_step(providers: StepProviders) -> Step:
    styled = providers.styled

    async def configure_cloud_project(options: RunOptions) -> StepOutcome:
        styled.info(["Configuring Google Cloud ..."])
        remediation = project_key_remediation(
            "Google Cloud", options.project_key, "gcloud auth list"
        )

        lookup = await attempt(lambda: providers.registry.project_name(options))
        if lookup.error:
            return StepOutcome(lookup.with_messages(remediation), options)

        project_name = lookup.payload["project_name"]
        result = await attempt(
            lambda: configure_google_project(project_name, providers.executor)
        )
        if result.error:
            return StepOutcome(result.with_messages(remediation), options)

        styled.success(["Google Cloud is ready."])
        return StepOutcome(result, options.evolve(project_name=project_name))

    return configure_cloud_project


def make_configure_firebase_step(providers: StepProviders) -> Step:
    styled = providers.styled

    async def configure_deployment_link(options: RunOptions) -> StepOutcome:
        styled.info(["Configuring Firebase ..."])
        try:
            result, state = await configure_firebase(options, providers.executor, styled)
        except Exception as e:  # noqa: BLE001
            logger.debug("firebase configuration raised", exc_info=True)
            result, state = StepResult.fail(str(e) or type(e).__name__), options

        if result.error:
            remediation = project_key_remediation(
                "Firebase", options.project_key, "firebase login:list"
            )
            return StepOutcome(result.with_messages(remediation), state)

        styled.success(["Firebase is ready."])
        return StepOutcome(result, state)

    return configure_deployment_link


def make_configure_font_awesome_step(providers: StepProviders) -> Step:
    styled = providers.styled
    settings = providers.settings

    async def configure_registry_credential(options: RunOptions) -> StepOutcome:
        styled.info(["Setting up Font Awesome ..."])
        styled.info([f"Obtain the Font Awesome token from {settings.font_awesome_token_location}"])

        answer = await attempt(
            lambda: prompt_for_token(providers.prompter, settings.font_awesome_token_value)
        )
        if answer.error:
            return StepOutcome(answer.with_messages(["Failed to configure Font Awesome."]), options)

        token = answer.payload["token"]
        state = options.evolve(token=token)

        styled.info(["Configuring access to the Font Awesome registry ..."])
        result = await attempt(
            lambda: configure_font_awesome_registry(token, providers.executor)
        )
        if result.error:
            return StepOutcome(result.with_messages(["Failed to configure Font Awesome."]), state)

        styled.success(["Font Awesome is ready."])
        return StepOutcome(result, state)

    return configure_registry_credential


def make_finish_step(providers: StepProviders) -> Step:
    styled = providers.styled

    def finish(options: RunOptions) -> StepOutcome:
        message = "The setup is complete. Happy coding!"
        styled.success([f"\n{message}\n"])
        return StepOutcome(StepResult.ok(message), options)

    return finish


def make_setup_steps(providers: StepProviders) -> tuple[Step, ...]:
    """Full setup: NODE_ENV, Google Cloud, Firebase, Font Awesome, finish."""
    return (
        make_configure_node_env_step(providers),
        make_configure_google_step(providers),
        make_configure_firebase_step(providers),
        make_configure_font_awesome_step(providers),
        make_finish_step(providers),
    )


def make_link_steps(providers: StepProviders) -> tuple[Step, ...]:
    """Link the cloud and Firebase projects only."""
    return (
        make_configure_google_step(providers),
        make_configure_firebase_step(providers),
        make_finish_step(providers),
    )
