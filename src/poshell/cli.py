"""CLI entry point for poshell."""

from __future__ import annotations

import logging

import typer

from poshell.config import ShellConfig
from poshell.errors import CommandError, PoshellError
from poshell.session import Shell

app = typer.Typer(
    name="poshell",
    help="Run commands in a long-lived PowerShell session.",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_config(config_file: str | None, code_page: int | None) -> ShellConfig:
    config = ShellConfig.load(config_file)
    if code_page is not None:
        config = config.model_copy(update={"code_page": code_page})
    return config


def _open_shell(config: ShellConfig) -> Shell:
    try:
        return Shell.new(config)
    except PoshellError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _run(shell: Shell, command: str) -> bool:
    """Execute one command, echoing its output. Returns False on failure."""
    try:
        typer.echo(shell.exec(command), nl=False)
    except CommandError as e:
        typer.echo(e.stdout, nl=False)
        typer.echo(e.stderr, err=True, nl=False)
        return False
    except PoshellError as e:
        typer.echo(f"Error: {e}", err=True)
        return False
    return True


@app.command("exec")
def exec_(
    commands: list[str] = typer.Argument(help="Commands to run, in order."),
    code_page: int | None = typer.Option(
        None, "--code-page", "-c", help="Use this code page instead of detecting it."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    config_file: str | None = typer.Option(
        None, "--config", help="Path to a JSON config file."
    ),
) -> None:
    """Run each command in one session and print its output."""
    setup_logging(verbose)
    config = _load_config(config_file, code_page)

    ok = True
    with _open_shell(config) as shell:
        for command in commands:
            ok = _run(shell, command) and ok
    if not ok:
        raise typer.Exit(1)


@app.command()
def codepage(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    config_file: str | None = typer.Option(
        None, "--config", help="Path to a JSON config file."
    ),
) -> None:
    """Print the shell's active code page."""
    setup_logging(verbose)
    config = _load_config(config_file, None)
    with _open_shell(config) as shell:
        typer.echo(str(shell.code_page))


@app.command()
def repl(
    code_page: int | None = typer.Option(
        None, "--code-page", "-c", help="Use this code page instead of detecting it."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    config_file: str | None = typer.Option(
        None, "--config", help="Path to a JSON config file."
    ),
) -> None:
    """Read commands interactively until 'exit' or end of input."""
    setup_logging(verbose)
    config = _load_config(config_file, code_page)

    with _open_shell(config) as shell:
        typer.echo(f"poshell (code page {shell.code_page}), 'exit' to quit")
        while True:
            try:
                line = typer.prompt("PS", prompt_suffix="> ")
            except (EOFError, typer.Abort):
                break
            if line.strip().lower() == "exit":
                break
            _run(shell, line)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
