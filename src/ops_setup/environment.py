"""Runtime mode (NODE_ENV) configuration."""

from __future__ import annotations

import os
from collections.abc import MutableMapping

from .models import StepResult

NODE_ENV = "NODE_ENV"


def configure_node_env(
    env: str, environ: MutableMapping[str, str] | None = None
) -> StepResult:
    """Set NODE_ENV to ``env`` and read it back to confirm."""
    environ = os.environ if environ is None else environ
    if not env:
        return StepResult.fail("The env option is required.")

    environ[NODE_ENV] = env
    if environ.get(NODE_ENV) != env:
        return StepResult.fail(f"{NODE_ENV} could not be set to {env}.")
    return StepResult.ok(f"{NODE_ENV} is set to {env}.")
