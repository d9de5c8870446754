"""The full development environment setup."""

from __future__ import annotations

import typer

from ..models import RunOptions
from ..steps import make_setup_steps
from . import common

app = typer.Typer(
    name="setup",
    help="Setup the development environment",
    no_args_is_help=False,
)


@app.callback(invoke_without_command=True)
def setup(
    ctx: typer.Context,
    env: str | None = typer.Option(
        None,
        "--env",
        "-e",
        help="The desired NODE_ENV value [default: OPS_NODE_ENV or development]",
    ),
    project_key: str | None = typer.Option(
        None,
        "--projectKey",
        "-p",
        help="The property name in the .firebaserc file [default: OPS_PROJECT_KEY or the first key]",
    ),
    directory: str = typer.Option(
        ".",
        "--directory",
        "-d",
        help="The project's root directory, containing .firebaserc",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Echo commands and their output"),
) -> None:
    """
    Setup the development environment.

    Steps:
    - NODE_ENV
    - Google Cloud project
    - Firebase project (webframeworks, login, project link)
    - Font Awesome npm registry token
    """
    if ctx.invoked_subcommand is not None:
        return

    settings, registry, styled = common.load_context(verbose)
    options = RunOptions(
        directory=directory,
        project_key=common.resolve_project_key(project_key, directory, settings, registry),
        env=env or settings.ops_node_env,
    )
    providers = common.build_providers(settings, registry, styled, verbose)

    styled.info(["Setting up the environment ..."])
    common.run_or_exit(make_setup_steps(providers), options, styled)
