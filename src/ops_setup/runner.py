"""The step runner.

A step is a callable taking the current :class:`RunOptions` and returning a
:class:`StepOutcome` (or an awaitable of one). ``run_sequence`` invokes the
steps strictly in order, hands each step the state returned by the previous
one, and stops at the first failing result.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence

from .logger import StyledLogger
from .models import RunOptions, StepOutcome, StepResult

logger = logging.getLogger(__name__)

Step = Callable[[RunOptions], StepOutcome | Awaitable[StepOutcome]]


def report_failure(result: StepResult, styled: StyledLogger) -> None:
    """Print a failed result: the summary as an error, then each remediation line."""
    if result.message:
        styled.error([result.message])
    for line in result.messages or ():
        styled.log([line])


async def run_steps(
    steps: Sequence[Step],
    options: RunOptions,
    styled: StyledLogger | None = None,
    *,
    report: bool = True,
) -> StepOutcome:
    """Run ``steps`` in order, threading the state each step returns.

    Stops at the first failing result. When ``report`` is set the failure is
    printed through ``styled`` before returning.

    Raises:
        ValueError: If ``steps`` is empty
    """
    if not steps:
        raise ValueError("run_steps requires at least one step")

    state = options
    result = StepResult.ok()
    for index, step in enumerate(steps):
        outcome = step(state)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        result, state = outcome
        logger.debug(
            "step %d/%d %s -> error=%s",
            index + 1,
            len(steps),
            getattr(step, "__name__", repr(step)),
            result.error,
        )
        if result.error:
            if report:
                report_failure(result, styled or StyledLogger())
            break
    return StepOutcome(result, state)


async def run_sequence(
    steps: Sequence[Step],
    options: RunOptions,
    styled: StyledLogger | None = None,
) -> StepResult:
    """Run ``steps`` against ``options`` and return the final result.

    Returns the first failing result unchanged, or the last step's result
    when every step succeeds. Step failures are reported, never raised.
    """
    outcome = await run_steps(steps, options, styled)
    return outcome.result
