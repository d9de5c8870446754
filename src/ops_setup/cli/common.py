"""Helpers shared by the setup commands."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

import typer

from ..config import OpsSettings, get_settings
from ..logger import StyledLogger
from ..models import RunOptions, StepResult
from ..registry import RegistryReader
from ..runner import Step, run_sequence
from ..steps import StepProviders

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_providers(
    settings: OpsSettings,
    registry: RegistryReader,
    styled: StyledLogger,
    verbose: bool,
) -> StepProviders:
    return StepProviders.default(
        settings, registry=registry, styled=styled, verbose=verbose
    )


def resolve_project_key(
    project_key: str | None,
    directory: str,
    settings: OpsSettings,
    registry: RegistryReader,
) -> str | None:
    """Flag, then OPS_PROJECT_KEY, then the first key in .firebaserc."""
    return project_key or settings.ops_project_key or registry.default_project_key(directory)


async def _run_cancellable(
    steps: tuple[Step, ...], options: RunOptions, styled: StyledLogger
) -> StepResult:
    # SIGINT already cancels the main task under asyncio.run; SIGTERM is
    # mapped to the same cancellation so running subprocesses are killed.
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    handled = False
    if task is not None:
        with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
            loop.add_signal_handler(signal.SIGTERM, task.cancel)
            handled = True
    try:
        return await run_sequence(steps, options, styled)
    finally:
        if handled:
            loop.remove_signal_handler(signal.SIGTERM)


def run_or_exit(
    steps: tuple[Step, ...], options: RunOptions, styled: StyledLogger
) -> StepResult:
    """Run ``steps`` and exit non-zero when the final result is a failure."""
    try:
        result = asyncio.run(_run_cancellable(steps, options, styled))
    except (KeyboardInterrupt, asyncio.CancelledError):
        styled.error(["\nThe setup was interrupted."])
        raise typer.Exit(EXIT_INTERRUPTED) from None

    if result.error:
        raise typer.Exit(1)
    return result


def load_context(verbose: bool) -> tuple[OpsSettings, RegistryReader, StyledLogger]:
    configure_logging(verbose)
    return get_settings(), RegistryReader(), StyledLogger()
