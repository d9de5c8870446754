"""Google Cloud project configuration."""

from __future__ import annotations

import shlex

from .exec import CommandExecutor
from .models import StepResult

# --no-user-output-enabled keeps gcloud from writing success messages to
# stderr, which the executor treats as a failure.
# https://cloud.google.com/sdk/gcloud/reference#--user-output-enabled
GCLOUD_QUIET_FLAG = "--no-user-output-enabled"


def validate_google_project_name(project_name: object) -> StepResult:
    if isinstance(project_name, str) and project_name:
        return StepResult.ok("The Google Cloud project name is valid.")
    return StepResult.fail("The Google Cloud project name is invalid.")


def set_project_command(project_name: str) -> str:
    return f"gcloud config set project {shlex.quote(project_name)} {GCLOUD_QUIET_FLAG}"


async def set_google_cloud_project(
    project_name: str, executor: CommandExecutor
) -> StepResult:
    response = await executor(set_project_command(project_name))
    if response.code != 0:
        return StepResult.fail(
            f'Failed to set the Google Cloud project to "{project_name}".'
        )
    return StepResult.ok(
        f'The Google Cloud project has been set to "{project_name}".',
        project_name=project_name,
    )


async def configure_google_project(
    project_name: str | None, executor: CommandExecutor
) -> StepResult:
    """Validate ``project_name`` and select it as the active gcloud project."""
    validation = validate_google_project_name(project_name)
    if validation.error:
        return validation
    return await set_google_cloud_project(project_name or "", executor)
