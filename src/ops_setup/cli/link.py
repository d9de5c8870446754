"""Link the Google Cloud and Firebase projects only."""

from __future__ import annotations

import typer

from ..models import RunOptions
from ..steps import make_link_steps
from . import common

app = typer.Typer(
    name="link",
    help="Link the Google Cloud and Firebase projects",
    no_args_is_help=False,
)


@app.callback(invoke_without_command=True)
def link(
    ctx: typer.Context,
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
    """Link the Google Cloud and Firebase projects for a .firebaserc key."""
    if ctx.invoked_subcommand is not None:
        return

    settings, registry, styled = common.load_context(verbose)
    options = RunOptions(
        directory=directory,
        project_key=common.resolve_project_key(project_key, directory, settings, registry),
        env=settings.ops_node_env,
    )
    providers = common.build_providers(settings, registry, styled, verbose)

    styled.info(["Linking the project ..."])
    common.run_or_exit(make_link_steps(providers), options, styled)
