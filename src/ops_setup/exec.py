"""Shell command execution.

Commands run through the shell with asyncio so a setup step can await an
external CLI without blocking cancellation. If the awaiting task is
cancelled (Ctrl+C, SIGTERM) the child process is killed before the
cancellation propagates, so no subprocess is left orphaned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from .logger import StyledLogger
from .models import ExecResponse

logger = logging.getLogger(__name__)


class CommandExecutor(Protocol):
    """Runs a shell command and reports its exit code and output."""

    async def __call__(self, command: str, *, interactive: bool = False) -> ExecResponse: ...


async def _terminate(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        logger.debug("Killing pid %s", process.pid)
        process.kill()
        await process.wait()


async def exec_command(
    command: str,
    *,
    interactive: bool = False,
    fail_on_stderr: bool = True,
    verbose: bool = False,
    styled: StyledLogger | None = None,
) -> ExecResponse:
    """Execute ``command`` through the shell.

    Args:
        command: The shell command string
        interactive: Inherit the terminal instead of capturing output, for
            commands that prompt the user (e.g. ``firebase login``)
        fail_on_stderr: Report ``code=1`` whenever the command wrote to
            stderr, regardless of its exit status
        verbose: Echo the command and its output through ``styled``
        styled: Logger used for verbose output

    Returns:
        ExecResponse with the exit code and captured stdout/stderr

    Raises:
        OSError: If the shell cannot be spawned
    """
    styled = styled or StyledLogger()
    if verbose:
        styled.log([f"Executing `{command}` ..."])
    logger.debug("exec: %s (interactive=%s)", command, interactive)

    pipe = None if interactive else asyncio.subprocess.PIPE
    process = await asyncio.create_subprocess_shell(command, stdout=pipe, stderr=pipe)
    try:
        stdout_b, stderr_b = await process.communicate()
    except asyncio.CancelledError:
        await _terminate(process)
        raise

    stdout = (stdout_b or b"").decode("utf-8", errors="replace")
    stderr = (stderr_b or b"").decode("utf-8", errors="replace")
    if verbose and stdout:
        styled.info(["STDOUT: ", stdout])
    if verbose and stderr:
        styled.error([f"STDERR: {stderr}"])

    code = process.returncode if process.returncode is not None else 1
    if fail_on_stderr and stderr and code == 0:
        # Tools are expected to write only real errors to stderr.
        code = 1
    logger.debug("exec: %s exited with %s", command, code)
    return ExecResponse(code=code, stdout=stdout, stderr=stderr)


class ShellExecutor:
    """The CommandExecutor used outside of tests."""

    def __init__(
        self,
        *,
        verbose: bool = False,
        fail_on_stderr: bool = True,
        styled: StyledLogger | None = None,
    ) -> None:
        self.verbose = verbose
        self.fail_on_stderr = fail_on_stderr
        self.styled = styled or StyledLogger()

    async def __call__(self, command: str, *, interactive: bool = False) -> ExecResponse:
        return await exec_command(
            command,
            interactive=interactive,
            fail_on_stderr=self.fail_on_stderr,
            verbose=self.verbose,
            styled=self.styled,
        )
