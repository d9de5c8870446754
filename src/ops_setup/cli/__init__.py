"""Command-line interface for the ops setup wizard."""

from __future__ import annotations

import importlib.metadata

import typer
from rich.console import Console

# Initialize Typer app and Rich console
app = typer.Typer(
    name="ops",
    help="Manage the application - setup wizard for the development environment",
    add_completion=False,
    no_args_is_help=False,
)
console = Console()

# Import and register command groups
from . import link, setup  # noqa: E402

app.add_typer(setup.app, name="setup")
app.add_typer(link.app, name="link")


def version_callback(show_version: bool) -> None:
    """Show version and exit."""
    if show_version:
        try:
            version = importlib.metadata.version("ops-setup")
            console.print(f"ops version {version}")
        except importlib.metadata.PackageNotFoundError:
            console.print("ops version: [yellow]unknown[/yellow] (development)")
        raise typer.Exit(0)


@app.command(name="help")
def show_help(ctx: typer.Context) -> None:
    """Show the help text."""
    parent = ctx.parent or ctx
    console.print(parent.get_help(), highlight=False)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Manage the application.

    Run "ops setup" to configure NODE_ENV, Google Cloud, Firebase and the
    Font Awesome registry, or "ops link" to link the cloud projects only.
    """
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help(), highlight=False)
        raise typer.Exit(0)


def cli_main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli_main()
