"""
Command-Line Interface

CLI commands for challenge-vfs.

Commands:
    challenge-vfs validate  - Load a source directory and report problems
    challenge-vfs ls        - List a virtual directory
    challenge-vfs cat       - Show a challenge file
    challenge-vfs info      - Corpus statistics
    challenge-vfs search    - Filter and search challenges
    challenge-vfs shell     - Interactive navigation shell

Usage:
    # Check every source unit
    challenge-vfs validate ./docs/challenges

    # Browse
    challenge-vfs ls Web --dir ./docs/challenges
    challenge-vfs cat Web/mock-challenge-12 --dir ./docs/challenges

    # Search
    challenge-vfs search xss --tag XSS --difficulty 3
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from challenge_vfs.exceptions import ChallengeVFSError

__all__ = ["main", "app"]

app = typer.Typer(
    name="challenge-vfs",
    help="Validate and browse a challenge content repository",
    no_args_is_help=True,
)
console = Console()

EXIT_QUIT = {"exit", "quit"}


def _repository(directory: Optional[Path], config_file: Optional[Path]):
    from challenge_vfs.api.repository import ChallengeRepository
    from challenge_vfs.config import VFSConfig

    config = VFSConfig.from_file(config_file) if config_file else VFSConfig()
    return ChallengeRepository(directory, config=config)


def _fail(error: Exception) -> None:
    console.print(f"[red]{error}[/]")
    raise typer.Exit(code=1)


DirOption = typer.Option(
    None,
    "--dir", "-d",
    help="Challenge source directory (default: config source_dir)",
)
ConfigOption = typer.Option(
    None,
    "--config", "-c",
    help="TOML configuration file",
    exists=True,
    dir_okay=False,
)


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    load_dotenv()
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command()
def validate(
    directory: Optional[Path] = typer.Argument(
        None,
        help="Challenge source directory",
        file_okay=False,
    ),
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Load every source unit and report decode/validation problems."""
    repo = _repository(directory, config_file)
    try:
        result = repo.load()
    except FileNotFoundError as e:
        _fail(e)
        return

    stats = repo.stats()
    style = "green" if result.ok else "yellow"
    console.print(Panel(
        f"[{style}]{stats['records']} challenges accepted[/]\n\n"
        f"  Errors: {stats['errors']}\n"
        f"  Ignored: {stats['skipped']}\n"
        f"  Platforms: {stats['platforms']}\n"
        f"  Tags: {stats['tags']}",
        title=f"Validation: {repo.path}",
        border_style=style,
    ))

    if result.errors:
        table = Table(title="Problems")
        table.add_column("Source", style="cyan")
        table.add_column("Index", justify="right")
        table.add_column("Kind", style="red")
        table.add_column("Field", style="dim")
        table.add_column("Message")
        for error in result.errors:
            table.add_row(
                error.source_unit,
                "" if error.index is None else str(error.index),
                error.kind.value,
                error.field or "",
                error.message,
            )
        console.print(table)
        raise typer.Exit(code=1)


@app.command()
def ls(
    path: str = typer.Argument("", help="Virtual directory path (default: root)"),
    directory: Optional[Path] = DirOption,
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """List a virtual directory."""
    repo = _repository(directory, config_file)
    try:
        shell = repo.shell()
        console.print(shell.ls("/" + path), markup=False, highlight=False)
    except (ChallengeVFSError, FileNotFoundError) as e:
        _fail(e)


@app.command()
def cat(
    path: str = typer.Argument(..., help="Virtual file path, e.g. Web/mock-challenge-12"),
    directory: Optional[Path] = DirOption,
    config_file: Optional[Path] = ConfigOption,
    raw: bool = typer.Option(False, "--raw", help="Print Markdown source"),
) -> None:
    """Show a challenge file."""
    repo = _repository(directory, config_file)
    try:
        content = repo.get_file_content(path)
    except (ChallengeVFSError, FileNotFoundError) as e:
        _fail(e)
        return
    if raw:
        console.print(content, markup=False, highlight=False)
    else:
        console.print(Markdown(content))


@app.command()
def info(
    directory: Optional[Path] = DirOption,
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Display corpus statistics."""
    repo = _repository(directory, config_file)
    try:
        stats = repo.stats()
    except FileNotFoundError as e:
        _fail(e)
        return

    table = Table(title=f"Challenges: {repo.path}")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Challenges", str(stats["records"]))
    table.add_row("Expired", str(stats["expired"]))
    table.add_row("Ignored", str(stats["skipped"]))
    table.add_row("Errors", str(stats["errors"]))
    table.add_row("Platforms", str(stats["platforms"]))
    table.add_row("Tags", str(stats["tags"]))
    console.print(table)


@app.command()
def search(
    query: str = typer.Argument("", help="Free-text query"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Required tag (repeatable)"),
    platform: Optional[str] = typer.Option(None, "--platform", "-p", help="Platform name"),
    difficulty: Optional[List[int]] = typer.Option(
        None, "--difficulty", "-l", help="Difficulty level (repeatable, any-of)",
    ),
    active_only: bool = typer.Option(False, "--active-only", help="Hide expired challenges"),
    directory: Optional[Path] = DirOption,
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Filter and search challenges."""
    repo = _repository(directory, config_file)
    try:
        matches = repo.search(
            query,
            tags=tag,
            difficulty=difficulty,
            platform=platform,
            include_expired=not active_only,
        )
    except FileNotFoundError as e:
        _fail(e)
        return

    table = Table(title=f"{len(matches)} matching challenges")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Platform", style="magenta")
    table.add_column("Level", justify="right")
    table.add_column("Tags", style="dim")
    for record in matches:
        name = f"[strike]{record.name}[/]" if record.is_expired else record.name
        table.add_row(
            record.display_id,
            name,
            record.platform,
            str(record.difficulty_level),
            ", ".join(record.tags),
        )
    console.print(table)


@app.command()
def shell(
    directory: Optional[Path] = DirOption,
    config_file: Optional[Path] = ConfigOption,
) -> None:
    """Interactive navigation shell (pwd, ls, cd, cat, open, back)."""
    repo = _repository(directory, config_file)
    try:
        vfs_shell = repo.shell()
    except FileNotFoundError as e:
        _fail(e)
        return

    console.print("[dim]Type 'exit' or 'quit' to leave.[/]")
    while True:
        try:
            line = console.input(f"[bold cyan]{vfs_shell.pwd()}[/] $ ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if line.strip() in EXIT_QUIT:
            break
        try:
            output = vfs_shell.execute(line)
        except (ChallengeVFSError, ValueError) as e:
            console.print(f"[red]{e}[/]")
            continue
        if output:
            console.print(output, markup=False, highlight=False)


def main() -> None:
    """Entry point for the CLI."""
    app()
