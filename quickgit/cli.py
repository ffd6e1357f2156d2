"""quickgit command line interface."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from quickgit.config import ConfigStore
from quickgit.exceptions import ConfigurationError
from quickgit.logging import configure_logging
from quickgit.orchestrator import ProvisioningOrchestrator
from quickgit.prompts import ConsolePrompter
from quickgit.ssh import check_ssh_access
from quickgit.types.request import Platform

app = typer.Typer(
    no_args_is_help=True,
    help="Create a remote repository and bind a fresh local repository to it.",
)

_console = Console()


@app.command()
def init(
    workdir: Path = typer.Option(
        Path("."),
        "--workdir",
        "-C",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory to initialize.",
    ),
    no_ssh_check: bool = typer.Option(False, "--no-ssh-check", help="Skip the SSH pre-flight check."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git commands and HTTP requests."),
) -> None:
    """Create the remote repository and push an initial commit."""
    configure_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        handler=RichHandler(console=_console, show_time=False, show_path=False),
        format_string="%(message)s",
    )

    orchestrator = ProvisioningOrchestrator(
        store=ConfigStore.from_env(),
        prompter=ConsolePrompter(_console),
        workdir=workdir,
        ssh_check=None if no_ssh_check else check_ssh_access,
    )
    ok = orchestrator.initialize()
    raise typer.Exit(code=0 if ok else 1)


@app.command()
def logout(platform: Platform = typer.Argument(..., help="Platform to forget credentials for.")) -> None:
    """Clear the stored credentials of a platform."""
    try:
        ConfigStore.from_env().clear_credentials(platform)
    except ConfigurationError as e:
        _console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from e
    _console.print(f"[green]Cleared {platform.display_name} credentials[/green]")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
