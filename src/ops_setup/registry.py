"""Reading project names from the .firebaserc file.

The .firebaserc file at the project root maps logical project keys to cloud
project names::

    {
      "projects": {
        "default": "project-name"
      }
    }

Every function here returns a :class:`StepResult` instead of raising; OS and
JSON errors are reported by message only, the traceback is noise for the
developer running the setup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import Firebaserc, RunOptions, StepResult
from .validate import (
    run_validators,
    validate_directory,
    validate_firebaserc_projects,
    validate_parsed_firebaserc,
    validate_project_key,
    validate_project_name,
)

logger = logging.getLogger(__name__)

FIREBASERC_FILENAME = ".firebaserc"


def validate_firebaserc(firebaserc: Any) -> StepResult:
    return run_validators(
        [
            lambda: validate_parsed_firebaserc(firebaserc),
            lambda: validate_firebaserc_projects(firebaserc.get("projects")),
        ],
        StepResult.ok("The .firebaserc JSON is valid."),
    )


def validate_options(options: RunOptions) -> StepResult:
    """Validate the directory and project_key options."""
    return run_validators(
        [
            lambda: validate_directory(options.directory),
            lambda: validate_project_key(options.project_key),
        ],
        StepResult.ok("The options are valid."),
    )


def read_firebaserc(directory: str) -> StepResult:
    """Read the raw .firebaserc text from ``directory``."""
    try:
        text = (Path(directory) / FIREBASERC_FILENAME).read_text(encoding="utf-8")
    except OSError as e:
        return StepResult.fail(_error_message(e))
    except UnicodeDecodeError as e:
        return StepResult.fail(f"The .firebaserc file is not valid UTF-8: {e.reason}.")
    return StepResult.ok(firebaserc=text)


def parse_json(text: str) -> StepResult:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        return StepResult.fail(str(e) or type(e).__name__)
    return StepResult.ok(data=data)


def get_firebaserc(directory: str) -> StepResult:
    """Read and parse the .firebaserc file in ``directory``."""
    read = read_firebaserc(directory)
    if read.error:
        return read
    parsed = parse_json(read.payload["firebaserc"])
    if parsed.error:
        return parsed
    return StepResult.ok(firebaserc=parsed.payload["data"])


def find_projects_in_firebaserc(firebaserc: Any) -> StepResult:
    """Validate the parsed file and return its ``projects`` mapping."""
    validation = validate_firebaserc(firebaserc)
    if validation.error:
        return validation
    try:
        model = Firebaserc.model_validate(firebaserc)
    except ValidationError:
        return StepResult.fail(
            'The .firebaserc "projects" property must map keys to project names.'
        )
    return StepResult.ok(projects=model.projects)


def find_project_name_by_key(project_key: str, projects: dict[str, str]) -> StepResult:
    project_name = projects.get(project_key)
    validation = validate_project_name(project_name)
    if validation.error:
        return validation
    return StepResult.ok(project_name=project_name)


def get_firebaserc_projects(directory: str) -> StepResult:
    loaded = get_firebaserc(directory)
    if loaded.error:
        return loaded
    return find_projects_in_firebaserc(loaded.payload["firebaserc"])


class RegistryReader:
    """Reads the .firebaserc projects at most once per directory.

    One reader is created per CLI invocation, so the file is read once even
    though both the CLI defaults and the cloud project step consult it.
    """

    def __init__(self) -> None:
        self._cache: dict[str, StepResult] = {}

    def projects(self, directory: str) -> StepResult:
        key = str(Path(directory).resolve())
        if key not in self._cache:
            logger.debug("Reading %s from %s", FIREBASERC_FILENAME, key)
            self._cache[key] = get_firebaserc_projects(directory)
        return self._cache[key]

    def default_project_key(self, directory: str) -> str | None:
        """The first key of the projects mapping, or None if unreadable."""
        result = self.projects(directory)
        if result.error:
            return None
        return next(iter(result.payload["projects"]), None)

    def project_name(self, options: RunOptions) -> StepResult:
        """Validate ``options`` and look up the project name for its key."""
        validation = validate_options(options)
        if validation.error:
            return validation
        result = self.projects(options.directory)
        if result.error:
            return result
        return find_project_name_by_key(options.project_key or "", result.payload["projects"])


def _error_message(error: OSError) -> str:
    if error.strerror and error.filename:
        return f"{error.strerror}: {error.filename}"
    return str(error)
