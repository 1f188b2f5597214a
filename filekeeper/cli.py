"""Command-line access to file handles.

Usage:
    filekeeper cat PATH
    filekeeper append PATH TEXT
    filekeeper mv SOURCE DESTINATION
    filekeeper rm PATH
    filekeeper mktemp PATTERN [--dir DIR]

A failing command prints the error message and exits with the error kind's code.
"""

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from filekeeper.config.settings import FileSettings
from filekeeper.domain.errors import Result
from filekeeper.file import File

app = typer.Typer(
    help="Filekeeper - read, write, move and delete files with explicit error kinds",
    no_args_is_help=True,
)
console = Console()

logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Load settings and configure logging for every command."""
    try:
        settings = FileSettings()
    except ValidationError as e:
        console.print("[red]Configuration Error:[/red]")
        for error in e.errors():
            field = " → ".join(str(x) for x in error["loc"])
            console.print(f"  {field}: {error['msg']}")
        console.print("\n[yellow]Tip:[/yellow] Check FILEKEEPER_* variables in .env or environment")
        raise typer.Exit(1) from e

    level = logging.DEBUG if verbose else settings.log_level
    logging.getLogger("filekeeper").setLevel(level)
    ctx.obj = settings


def _exit_on_failure(result: Result, path: str) -> None:
    if not result:
        console.print(f"[red]Error: {result.message}[/red] ({path})")
        raise typer.Exit(result.error.code)


@app.command()
def cat(ctx: typer.Context, path: str = typer.Argument(..., help="File to print")):
    """Print a file's contents."""
    f = File(path, settings=ctx.obj)
    _exit_on_failure(f.open_read(), path)
    text = f.read_all()
    _exit_on_failure(f.last_result, path)
    _exit_on_failure(f.close(), path)
    typer.echo(text, nl=False)


@app.command()
def append(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to append to (created if missing)"),
    text: str = typer.Argument(..., help="Text to append"),
    newline: bool = typer.Option(False, "--newline", "-n", help="Append a trailing newline"),
):
    """Append text to a file."""
    f = File(path, settings=ctx.obj)
    _exit_on_failure(f.append(text + "\n" if newline else text), path)


@app.command()
def mv(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="File to move"),
    destination: str = typer.Argument(..., help="New path; must not exist"),
):
    """Rename a file without replacing an existing one."""
    f = File(source, settings=ctx.obj)
    _exit_on_failure(f.rename(destination), destination)
    console.print(f"[green]✓[/green] {source} → {destination}")


@app.command()
def rm(ctx: typer.Context, path: str = typer.Argument(..., help="File to delete")):
    """Delete a file."""
    f = File(path, settings=ctx.obj)
    _exit_on_failure(f.remove(), path)


@app.command()
def mktemp(
    ctx: typer.Context,
    pattern: str = typer.Argument("tmp", help="Leading part of the file name"),
    directory: str = typer.Option(None, "--dir", "-d", help="Directory to create the file in"),
):
    """Create a uniquely named empty file and print its path.

    The file is kept; delete it with 'filekeeper rm' when done.
    """
    f = File.create_temp(pattern, directory=directory, settings=ctx.obj)
    if not f.path:
        console.print(f"[red]Error: could not create temp file for '{pattern}'[/red]")
        raise typer.Exit(1)
    typer.echo(f.release())
