"""Command-line interface for portfs."""

import logging
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from portfs import __version__
from portfs.base import FileSystem
from portfs.config import get_settings
from portfs.errors import IOFailure
from portfs.registry import available_backends, get_file_system

app = typer.Typer(
    name="portfs",
    help="Inspect and manipulate files through the portfs backends",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"portfs version {__version__}")
        raise typer.Exit()


def _fail(error: IOFailure) -> NoReturn:
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


def _fs(ctx: typer.Context) -> FileSystem:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    backend: Annotated[
        str | None,
        typer.Option(
            "--backend",
            "-b",
            help=f"Backend to use: auto, {', '.join(available_backends())} (overrides config)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log every native call."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """portfs - portable filesystem operations."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )
    try:
        ctx.obj = get_file_system(backend)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)


@app.command("ls")
def list_directory(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
) -> None:
    """List the immediate children of a directory."""
    fs = _fs(ctx)
    try:
        directory = fs.open_directory(fs.path(path))
        table = Table(title=str(directory.path))
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Size", justify="right")
        for child in sorted(directory, key=lambda p: p.name):
            attributes = fs.read_attributes(child)
            table.add_row(child.name, attributes.entry_type.value, str(attributes.size_bytes))
    except IOFailure as e:
        _fail(e)

    console.print(table)


@app.command("stat")
def show_attributes(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory")],
) -> None:
    """Show the attributes of a file or directory."""
    fs = _fs(ctx)
    target = fs.path(path)
    try:
        attributes = fs.read_attributes(target)
    except IOFailure as e:
        _fail(e)

    permissions = ", ".join(sorted(p.value for p in attributes.permissions)) or "-"
    console.print(
        Panel(
            f"[bold]Type:[/bold] {attributes.entry_type.value}\n"
            f"[bold]Size:[/bold] {attributes.size_bytes} bytes\n"
            f"[bold]Created:[/bold] {attributes.created_at.isoformat()}\n"
            f"[bold]Accessed:[/bold] {attributes.accessed_at.isoformat()}\n"
            f"[bold]Modified:[/bold] {attributes.modified_at.isoformat()}\n"
            f"[bold]Permissions:[/bold] {permissions}",
            title=str(target),
        )
    )


@app.command()
def mkdir(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to create")],
) -> None:
    """Create a directory."""
    fs = _fs(ctx)
    try:
        created = fs.create_directory(fs.path(path))
    except IOFailure as e:
        _fail(e)
    console.print(f"[green]✓[/green] Created directory {created}")


@app.command()
def touch(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to create")],
) -> None:
    """Create an empty file. Fails if it already exists."""
    fs = _fs(ctx)
    try:
        created = fs.create_file(fs.path(path))
    except IOFailure as e:
        _fail(e)
    console.print(f"[green]✓[/green] Created file {created}")


@app.command("cp")
def copy(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File or directory to copy")],
    target: Annotated[str, typer.Argument(help="Destination, must not exist")],
) -> None:
    """Copy a file or directory tree without overwriting."""
    fs = _fs(ctx)
    try:
        copied = fs.copy(fs.path(source), fs.path(target))
    except IOFailure as e:
        _fail(e)
    console.print(f"[green]✓[/green] Copied {source} to {copied}")


@app.command("mv")
def move(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File or directory to move")],
    target: Annotated[str, typer.Argument(help="Destination, must not exist")],
) -> None:
    """Move a file or directory without overwriting."""
    fs = _fs(ctx)
    try:
        moved = fs.move(fs.path(source), fs.path(target))
    except IOFailure as e:
        _fail(e)
    console.print(f"[green]✓[/green] Moved {source} to {moved}")


@app.command("rm")
def remove(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Delete a directory and everything below it"),
    ] = False,
) -> None:
    """Delete a file or empty directory, or a whole tree with -r."""
    fs = _fs(ctx)
    target = fs.path(path)
    if recursive:
        try:
            deleted = fs.delete_directory_recursively(target)
        except IOFailure as e:
            _fail(e)
    else:
        deleted = fs.delete_file(target)

    if not deleted:
        console.print(f"[red]Error:[/red] Could not delete {target}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Deleted {target}")


@app.command()
def config(ctx: typer.Context) -> None:
    """Show current configuration."""
    settings = get_settings()
    fs = _fs(ctx)

    console.print(Panel("[bold]Current Configuration[/bold]", title="portfs"))
    console.print(f"[bold]Configured Backend:[/bold] {settings.backend}")
    console.print(f"[bold]Active Backend:[/bold] {fs.name}")
    console.print(f"[bold]Read Only:[/bold] {settings.read_only}")
    console.print(f"[bold]Copy Buffer Size:[/bold] {settings.copy_buffer_size}")
    console.print(f"[bold]Log Level:[/bold] {settings.log_level}")


if __name__ == "__main__":
    app()
