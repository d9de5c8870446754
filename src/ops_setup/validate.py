"""Validators for options and the .firebaserc file.

Every validator returns a :class:`StepResult`; ``run_validators`` returns the
first failure or the given success result.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .models import StepResult

Validator = Callable[[], StepResult]


def run_validators(validators: Iterable[Validator], success: StepResult) -> StepResult:
    """Run ``validators`` in order, stopping at the first failure."""
    for validator in validators:
        result = validator()
        if result.error:
            return result
    return success


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def validate_directory(directory: Any) -> StepResult:
    if _is_non_empty_string(directory):
        return StepResult.ok("The directory option is valid.")
    return StepResult.fail("The directory option is required.")


def validate_project_key(project_key: Any) -> StepResult:
    if _is_non_empty_string(project_key):
        return StepResult.ok("The projectKey option is valid.")
    return StepResult.fail("The projectKey option is required.")


def validate_project_name(project_name: Any) -> StepResult:
    if _is_non_empty_string(project_name):
        return StepResult.ok("The project name is valid.")
    return StepResult.fail("The project name is invalid.")


def validate_parsed_firebaserc(firebaserc: Any) -> StepResult:
    """The parsed file must be a non-empty JSON object."""
    if isinstance(firebaserc, Mapping) and len(firebaserc) > 0:
        return StepResult.ok("The .firebaserc file contains a valid object.")
    return StepResult.fail("The .firebaserc file contains an empty or invalid object.")


def validate_firebaserc_projects(projects: Any) -> StepResult:
    """``projects`` must be a non-empty mapping."""
    if isinstance(projects, Mapping) and len(projects) > 0:
        return StepResult.ok('The .firebaserc file contains a valid "projects" property.')
    return StepResult.fail(
        'The .firebaserc file does not contain a valid "projects" property.'
    )
