"""
Command-line interface for the git editor.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__ as PACKAGE_VERSION
from .backup_manager import BackupManager
from .commit_message import (
    BODY_LINE_MAX_LENGTH,
    SUBJECT_MAX_LENGTH,
    parse_commit_message,
    serialize_commit_message,
    strip_comments,
    validate_commit_message,
)
from .conflict_parser import parse_conflict_markers
from .detector import detect_file_type, detect_language
from .file_manager import read_file, write_file
from .git_manager import GitManager
from .models import (
    Exec,
    FileStatus,
    GitEditorError,
    GitFileType,
    Label,
    Merge,
    RebaseEntry,
    Reset,
)
from .rebase_todo import parse_rebase_todo, serialize_rebase_todo


console = Console()
logger = logging.getLogger(__name__)


LOG_ENV_VAR = "GIT_EDITOR_LOG"
NO_BACKUP_ENV_VAR = "GIT_EDITOR_NO_BACKUP"


def _print_version(ctx, param, value):
    """Eager option callback to print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"git-editor {PACKAGE_VERSION}")
    ctx.exit()


def _default_log_path() -> Path:
    """Determine default log file path (~/.git-editor/git-editor.log)."""
    env_path = os.environ.get(LOG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".git-editor" / "git-editor.log"


def _backups_enabled() -> bool:
    return os.environ.get(NO_BACKUP_ENV_VAR, "").lower() not in ("1", "true", "yes")


def setup_logging(
    verbose: bool = False,
    console_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> Path:
    """Log everything to a rotating file; mirror to the console when requested.

    Returns the log file path.
    """
    log_path = Path(log_file) if log_file else _default_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    # Clear existing handlers to avoid duplication in tests / repeated invocations
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    file_handler = RotatingFileHandler(
        str(log_path), maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    if verbose or console_level:
        level_map = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
        }
        console_handler = RichHandler(console=console, rich_tracebacks=True)
        console_handler.setLevel(level_map.get((console_level or "info").lower(), logging.INFO))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(console_handler)

    return log_path


def _fail(action: str, error: Exception, exit_code: int = 1) -> NoReturn:
    console.print(f"\n❌ **Error {action}:** {error}", style="bold red")
    # Debug stack trace to file logs for diagnostics
    logger.debug(f"Error {action}", exc_info=True)
    sys.exit(exit_code)


def _backup_before_write(path: Path) -> None:
    if not _backups_enabled():
        logger.info(f"Backups disabled via {NO_BACKUP_ENV_VAR}; overwriting {path}")
        return
    backup = BackupManager(path).create_backup()
    console.print(f"[dim]Backup saved to {backup}[/dim]")


@click.group()
@click.option(
    "--version",
    "-V",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose console logging (INFO)")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Console log level. By default, console logging is disabled.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Log file path (defaults to ${LOG_ENV_VAR} or ~/.git-editor/git-editor.log)",
)
@click.option(
    "--repo-path",
    type=click.Path(exists=True, path_type=Path),
    help="Path inside the repository (defaults to current directory)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_level: Optional[str],
    log_file: Optional[Path],
    repo_path: Optional[Path],
) -> None:
    """Git Editor - inspect and rewrite the files git asks you to edit."""
    log_path = setup_logging(verbose, console_level=log_level, log_file=log_file)

    ctx.ensure_object(dict)
    ctx.obj["log_path"] = log_path
    ctx.obj["repo_path"] = repo_path.resolve() if isinstance(repo_path, Path) else None
    logger.debug(f"CLI init: cwd={Path.cwd()} repo_path={ctx.obj['repo_path']}")


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
def detect(file: Path) -> None:
    """Show which kind of git editor file FILE is."""
    file_type = detect_file_type(file)
    console.print(f"{file}: [bold cyan]{file_type.value}[/bold cyan]")
    if file_type is GitFileType.UNKNOWN:
        console.print(f"Language: {detect_language(file)}")


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
def conflicts(file: Path) -> None:
    """List conflict regions in FILE. Exits 1 while conflicts remain."""
    try:
        content = read_file(file).content
    except GitEditorError as e:
        _fail("reading file", e)

    result = parse_conflict_markers(content)
    if not result.has_conflicts:
        console.print("✅ No conflict markers found", style="bold green")
        return

    console.print(f"\n⚔️  **{result.total_conflicts} conflict(s) in {file}**")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Lines", style="dim")
    table.add_column("Style", style="blue")
    table.add_column("Local", style="green")
    table.add_column("Remote", style="yellow")

    for region in result.conflicts:
        table.add_row(
            str(region.id),
            f"{region.start_line + 1}-{region.end_line + 1}",
            "diff3" if region.is_diff3 else "standard",
            _preview(region.local_content),
            _preview(region.remote_content),
        )

    console.print(table)
    sys.exit(1)


def _preview(text: str, width: int = 40) -> str:
    first_line = text.split("\n", 1)[0]
    if len(first_line) > width or "\n" in text:
        first_line = first_line[:width] + "…"
    return escape(first_line)


def _describe_entry(entry: RebaseEntry) -> List[str]:
    """Return (command, commit, details) cells for one todo entry."""
    command = entry.command
    if isinstance(command, Exec):
        details = command.command
    elif isinstance(command, (Label, Reset)):
        details = command.label
    elif isinstance(command, Merge):
        details = command.label
        if command.message is not None:
            details += f" # {command.message}"
        return [command.keyword, command.commit or "", escape(details)]
    elif command.carries_commit:
        return [command.keyword, entry.commit_hash, escape(entry.message)]
    else:
        details = ""
    return [command.keyword, "", escape(details)]


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--normalize", is_flag=True, help="Rewrite FILE in canonical short-form syntax")
def todo(file: Path, normalize: bool) -> None:
    """Show the instructions in a git-rebase-todo FILE."""
    try:
        todo_file = parse_rebase_todo(read_file(file).content)
    except GitEditorError as e:
        _fail("reading rebase todo", e)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Command", style="cyan")
    table.add_column("Commit", style="yellow")
    table.add_column("Details")
    for index, entry in enumerate(todo_file.entries, start=1):
        table.add_row(str(index), *_describe_entry(entry))
    console.print(table)

    if normalize:
        try:
            _backup_before_write(file)
            write_file(file, serialize_rebase_todo(todo_file) + "\n")
        except GitEditorError as e:
            _fail("writing rebase todo", e)
        console.print(f"✅ Normalized {file}", style="bold green")


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--validate", is_flag=True, help="Check line lengths; exit 1 on warnings")
@click.option("--strip-comments", "strip", is_flag=True, help="Rewrite FILE without comment lines")
def message(file: Path, validate: bool, strip: bool) -> None:
    """Show the parts of a commit message FILE."""
    try:
        commit_message = parse_commit_message(read_file(file).content)
    except GitEditorError as e:
        _fail("reading commit message", e)

    console.print(f"[bold]Subject:[/bold] {escape(commit_message.subject)}", highlight=False)
    if commit_message.body:
        console.print("[bold]Body:[/bold]")
        console.print(commit_message.body, markup=False, highlight=False)
    for trailer in commit_message.trailers:
        console.print(f"[cyan]{escape(trailer.key)}[/cyan]: {escape(trailer.value)}", highlight=False)

    if strip:
        try:
            _backup_before_write(file)
            write_file(file, serialize_commit_message(strip_comments(commit_message)) + "\n")
        except GitEditorError as e:
            _fail("writing commit message", e)
        console.print(f"✅ Removed comments from {file}", style="bold green")

    if validate:
        validation = validate_commit_message(commit_message)
        if validation.subject_too_long:
            console.print(
                f"⚠️  Subject is {validation.subject_length} characters (limit {SUBJECT_MAX_LENGTH})",
                style="yellow",
            )
        for line_number, length in validation.long_body_lines:
            console.print(
                f"⚠️  Body line {line_number} is {length} characters (limit {BODY_LINE_MAX_LENGTH})",
                style="yellow",
            )
        if not validation.is_valid:
            sys.exit(1)
        console.print("✅ Commit message looks good", style="bold green")


def _status_row(category: str, status: FileStatus) -> List[str]:
    path = status.path
    if status.original_path:
        path = f"{status.original_path} → {status.path}"
    code = status.worktree_status if category == "unstaged" else status.index_status
    return [category, code, escape(path)]


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show staged, unstaged and untracked files."""
    try:
        result = GitManager(ctx.obj.get("repo_path")).get_status()
    except GitEditorError as e:
        _fail("getting status", e)

    console.print(f"\n📊 **{result.repo_root}** on [green]{result.branch_name}[/green]")
    if result.is_clean:
        console.print("✅ Working tree clean", style="bold green")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan")
    table.add_column("Status", style="yellow")
    table.add_column("Path")
    for category, entries in (
        ("staged", result.staged),
        ("unstaged", result.unstaged),
        ("untracked", result.untracked),
    ):
        for entry in entries:
            table.add_row(*_status_row(category, entry))
    console.print(table)


@cli.command("show-files")
@click.argument("commit_hash")
@click.pass_context
def show_files(ctx: click.Context, commit_hash: str) -> None:
    """List the files changed by COMMIT_HASH."""
    try:
        files = GitManager(ctx.obj.get("repo_path")).get_commit_files(commit_hash)
    except GitEditorError as e:
        _fail("listing commit files", e)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Status", style="yellow")
    table.add_column("Path")
    table.add_column("From", style="dim")
    for info in files:
        table.add_row(info.status, escape(info.path), escape(info.original_path or ""))
    console.print(table)


@cli.command()
@click.argument("path")
@click.option("--ref", default="HEAD", show_default=True, help="Revision to blame")
@click.pass_context
def blame(ctx: click.Context, path: str, ref: str) -> None:
    """Show who last changed each line of PATH."""
    try:
        lines = GitManager(ctx.obj.get("repo_path")).blame(path, ref)
    except GitEditorError as e:
        _fail("running blame", e)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Line", justify="right")
    table.add_column("Commit", style="yellow")
    table.add_column("Author", style="cyan")
    table.add_column("Date", style="green")
    table.add_column("Summary")
    for line in lines:
        table.add_row(
            str(line.line_number),
            line.hash,
            escape(line.author),
            line.date,
            escape(line.summary),
        )
    console.print(table)


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
def restore(file: Path) -> None:
    """Restore FILE from its .backup copy."""
    try:
        restored = BackupManager(file).restore_backup()
    except GitEditorError as e:
        _fail("restoring backup", e)
    console.print(f"✅ Restored {restored}", style="bold green")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n\n🚫 **Operation cancelled by user**", style="bold yellow")
        logger.debug("Top-level cancellation (KeyboardInterrupt)", exc_info=True)
        sys.exit(130)
    except Exception as e:
        console.print(f"\n💥 **Unexpected error:** {e}", style="bold red")
        # Debug stack trace to file logs for diagnostics
        logger.debug("Unexpected error in main()", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
