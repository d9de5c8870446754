"""Pydantic models shared by the setup steps.

This module provides strongly-typed, validated data models for:
- Step results (the uniform outcome of every setup step)
- Run options (the per-invocation state threaded through a sequence)
- Shell command responses
- The parsed .firebaserc project registry
- Interactive prompt questions

All models use Pydantic v2 and are immutable once built.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StepResult(BaseModel):
    """The outcome of a setup step.

    Attributes:
        error: Whether the step failed
        message: One-line summary, present on success and failure
        messages: Remediation lines, populated only on failure

    Step-specific payload (a project name, a token, an email) is attached as
    extra fields and exposed through ``payload``.
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
    )

    error: bool
    message: str | None = None
    messages: tuple[str, ...] | None = None

    @classmethod
    def ok(cls, message: str | None = None, **payload: Any) -> StepResult:
        """Build a successful result carrying optional payload fields."""
        return cls(error=False, message=message, **payload)

    @classmethod
    def fail(
        cls,
        message: str | None = None,
        messages: list[str] | tuple[str, ...] | None = None,
    ) -> StepResult:
        """Build a failed result."""
        return cls(
            error=True,
            message=message,
            messages=tuple(messages) if messages is not None else None,
        )

    @property
    def payload(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def with_messages(self, messages: list[str] | tuple[str, ...]) -> StepResult:
        """Return a copy of this result with remediation lines attached."""
        return self.model_copy(update={"messages": tuple(messages)})


class RunOptions(BaseModel):
    """Per-invocation input and accumulated state for a step sequence.

    Attributes:
        directory: Project root used to locate the .firebaserc file
        project_key: Property name in the .firebaserc ``projects`` mapping
        env: Desired NODE_ENV value
        project_name: Cloud project name resolved by the cloud project step
        email: Signed-in Firebase account, when known
        token: Font Awesome registry token entered by the user
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    directory: str = "."
    project_key: str | None = None
    env: str = "development"

    project_name: str | None = None
    email: str | None = None
    token: str | None = Field(default=None, repr=False)

    def evolve(self, **changes: Any) -> RunOptions:
        """Return a copy with ``changes`` applied; ``None`` values are ignored."""
        updates = {key: value for key, value in changes.items() if value is not None}
        if not updates:
            return self
        return self.model_copy(update=updates)


class StepOutcome(NamedTuple):
    """A step's result together with the state handed to the next step."""

    result: StepResult
    state: RunOptions


class ExecResponse(BaseModel):
    """The exit code and captured output of a shell command."""

    model_config = ConfigDict(frozen=True)

    code: int
    stdout: str = ""
    stderr: str = ""


class Firebaserc(BaseModel):
    """The parsed .firebaserc file.

    Example::

        {"projects": {"default": "project-name"}}
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
    )

    projects: dict[str, str] = Field(min_length=1)

    @property
    def default_project_key(self) -> str:
        return next(iter(self.projects))


class PromptQuestion(BaseModel):
    """A single question handed to the prompter."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    name: str = Field(min_length=1)
    message: str = Field(min_length=1)
    default: str = ""

    @field_validator("default", mode="before")
    @classmethod
    def none_default_to_empty(cls, v: Any) -> Any:
        """Treat a missing default as an empty string."""
        return "" if v is None else v
