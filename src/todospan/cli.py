"""todospan CLI module.

Typer-based CLI application entry point.
Subcommand groups: span, edit, config, self
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Callable, Optional

import typer

from todospan import __version__
from todospan import mutators
from todospan.config import Config, save_todo_file
from todospan.errors import SpanError
from todospan.span import Span
from todospan.storage import TodoFile, TodoFileLockedError
from todospan.todotxt import (
    get_completion_date,
    get_contexts,
    get_creation_date,
    get_key_values,
    get_priority,
    get_projects,
)

# Main application
app = typer.Typer(
    name="todospan",
    help="Locate and edit fields of todo.txt task lines",
    no_args_is_help=True,
)

# Subcommand groups
span_app = typer.Typer(
    name="span",
    help="Show field spans of a task",
    no_args_is_help=True,
)

edit_app = typer.Typer(
    name="edit",
    help="Edit a task given as text or as a line of todo.txt",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="Configuration commands",
    no_args_is_help=True,
)

self_app = typer.Typer(
    name="self",
    help="Tool information",
    no_args_is_help=True,
)

app.add_typer(span_app, name="span")
app.add_typer(edit_app, name="edit")
app.add_typer(config_app, name="config")
app.add_typer(self_app, name="self")


class GlobalContext:
    """Holds global options for commands."""

    def __init__(self) -> None:
        self.file: str | None = None
        self.json_output: bool = False
        self.verbose: bool = False


# Global context instance
_context = GlobalContext()

TaskArgument = Annotated[
    Optional[str],
    typer.Argument(help="Task text (omit when using --line)"),
]
LineOption = Annotated[
    Optional[int],
    typer.Option(
        "--line",
        "-l",
        help="Edit this zero-based line of todo.txt instead of TASK",
    ),
]


def version_callback(value: bool) -> None:
    """Callback for --version option."""
    if value:
        typer.echo(f"todospan version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    file: Annotated[
        Optional[str],
        typer.Option(
            "--file",
            "-f",
            help="Specify the todo.txt file path",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output in JSON format",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show verbose output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """todospan - locate and edit fields of todo.txt task lines."""
    _context.file = file
    _context.json_output = json_output
    _context.verbose = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(message)s",
        )


def _fail(message: str) -> None:
    """Report an error and exit with status 1."""
    if _context.json_output:
        typer.echo(json.dumps({"error": message}, ensure_ascii=False))
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


# ===== span subcommands =====


def _show_spans(spans: list[Span]) -> None:
    if _context.json_output:
        typer.echo(json.dumps([span.to_dict() for span in spans], ensure_ascii=False))
        return

    for span in spans:
        value = span.value if span.key is None else f"{span.key}={span.value}"
        typer.echo(f"[{span.start}:{span.end}] {span.raw!r} -> {value}")


@span_app.command("contexts")
def span_contexts(
    task: Annotated[str, typer.Argument(help="Task text")],
) -> None:
    """Show @context spans."""
    _show_spans(get_contexts(task))


@span_app.command("projects")
def span_projects(
    task: Annotated[str, typer.Argument(help="Task text")],
) -> None:
    """Show +project spans."""
    _show_spans(get_projects(task))


@span_app.command("keys")
def span_keys(
    task: Annotated[str, typer.Argument(help="Task text")],
    allow_empty: Annotated[
        bool,
        typer.Option(
            "--allow-empty",
            help="Also match keys with an empty value (key:)",
        ),
    ] = False,
) -> None:
    """Show key:value spans."""
    _show_spans(get_key_values(task, allow_empty_value=allow_empty))


@span_app.command("priority")
def span_priority(
    task: Annotated[str, typer.Argument(help="Task text")],
) -> None:
    """Show the priority span."""
    span = get_priority(task)
    _show_spans([span] if span else [])


@span_app.command("created")
def span_created(
    task: Annotated[str, typer.Argument(help="Task text")],
) -> None:
    """Show the creation date span."""
    span = get_creation_date(task)
    _show_spans([span] if span else [])


@span_app.command("completed")
def span_completed(
    task: Annotated[str, typer.Argument(help="Task text")],
) -> None:
    """Show the completion date span."""
    span = get_completion_date(task)
    _show_spans([span] if span else [])


# ===== edit subcommands =====


def _apply(func: Callable[[str], str], task: str | None, line: int | None) -> None:
    """Run a task transformation on TASK text or on a todo.txt line."""
    if (task is None) == (line is None):
        _fail("Provide either TASK or --line")

    if task is not None:
        try:
            result = func(task)
        except (SpanError, ValueError) as e:
            _fail(str(e))

        if _context.json_output:
            typer.echo(json.dumps({"original": task, "result": result}, ensure_ascii=False))
        else:
            typer.echo(result)
        return

    config = Config(_context.file)
    todo_path = config.todo_file_path

    if _context.verbose:
        typer.echo(f"[verbose] todo.txt: {todo_path} (from {config.source})")

    todo_file = TodoFile(todo_path)
    if not todo_file.exists():
        _fail("No tasks found (file does not exist)")

    try:
        original, result = todo_file.update_line(line, func)
    except (IndexError, SpanError, ValueError, TodoFileLockedError) as e:
        _fail(str(e))

    if _context.json_output:
        output = {
            "index": line,
            "original": original,
            "result": result,
            "file": str(todo_path),
        }
        typer.echo(json.dumps(output, ensure_ascii=False))
    else:
        typer.echo(f"[{line}] {result}")


@edit_app.command("done")
def edit_done(
    task: TaskArgument = None,
    line: LineOption = None,
    on: Annotated[
        Optional[str],
        typer.Option(
            "--date",
            "-d",
            help="Completion date (YYYY-MM-DD), defaults to today; overrides completion_date = false",
        ),
    ] = None,
    no_date: Annotated[
        bool,
        typer.Option(
            "--no-date",
            help="Mark complete without a completion date",
        ),
    ] = False,
    pri_tag: Annotated[
        Optional[bool],
        typer.Option(
            "--pri-tag/--no-pri-tag",
            help="Convert priority (A) to pri:A (default from config)",
        ),
    ] = None,
) -> None:
    """Mark a task as complete."""
    config = Config(_context.file)
    # An explicit --date wins over completion_date = false in config.toml
    add_date = not no_date and (on is not None or config.completion_date)
    priority_to_tag = config.priority_to_tag if pri_tag is None else pri_tag

    def complete(text: str) -> str:
        return mutators.mark_completed(
            text,
            date.fromisoformat(on) if on else None,
            add_date=add_date,
            priority_to_tag=priority_to_tag,
        )

    _apply(complete, task, line)


@edit_app.command("undo")
def edit_undo(task: TaskArgument = None, line: LineOption = None) -> None:
    """Mark a task as incomplete."""
    _apply(mutators.mark_incomplete, task, line)


@edit_app.command("pri")
def edit_pri(
    priority: Annotated[str, typer.Argument(help="Priority letter, or - to remove")],
    task: TaskArgument = None,
    line: LineOption = None,
) -> None:
    """Set or remove the priority of a task."""
    letter = None if priority == "-" else priority
    _apply(lambda text: mutators.set_priority(text, letter), task, line)


@edit_app.command("add-project")
def edit_add_project(
    name: Annotated[str, typer.Argument(help="Project name without '+'")],
    task: TaskArgument = None,
    line: LineOption = None,
) -> None:
    """Add a +project tag."""
    _apply(lambda text: mutators.add_project(text, name), task, line)


@edit_app.command("rm-project")
def edit_rm_project(
    name: Annotated[str, typer.Argument(help="Project name without '+'")],
    task: TaskArgument = None,
    line: LineOption = None,
) -> None:
    """Remove a +project tag."""
    _apply(lambda text: mutators.remove_project(text, name), task, line)


@edit_app.command("add-context")
def edit_add_context(
    name: Annotated[str, typer.Argument(help="Context name without '@'")],
    task: TaskArgument = None,
    line: LineOption = None,
) -> None:
    """Add an @context tag."""
    _apply(lambda text: mutators.add_context(text, name), task, line)


@edit_app.command("rm-context")
def edit_rm_context(
    name: Annotated[str, typer.Argument(help="Context name without '@'")],
    task: TaskArgument = None,
    line: LineOption = None,
) -> None:
    """Remove an @context tag."""
    _apply(lambda text: mutators.remove_context(text, name), task, line)


@edit_app.command("set")
def edit_set(
    key: Annotated[str, typer.Argument(help="Key name")],
    value: Annotated[str, typer.Argument(help="New value")],
    task: TaskArgument = None,
    line: LineOption = None,
) -> None:
    """Set a key:value pair, editing it in place when present."""
    _apply(lambda text: mutators.set_key_value(text, key, value), task, line)


@edit_app.command("unset")
def edit_unset(
    key: Annotated[str, typer.Argument(help="Key name")],
    task: TaskArgument = None,
    line: LineOption = None,
) -> None:
    """Remove a key:value pair."""
    _apply(lambda text: mutators.remove_key(text, key), task, line)


# ===== config subcommands =====


@config_app.command("path")
def config_path() -> None:
    """Show the resolved todo.txt path."""
    config = Config(_context.file)

    if _context.json_output:
        result = {
            "path": str(config.todo_file_path),
            "source": config.source,
            "source_description": config.source_description,
            "exists": config.todo_file_path.exists(),
        }
        typer.echo(json.dumps(result, ensure_ascii=False))
    else:
        typer.echo(f"Path: {config.todo_file_path}")
        typer.echo(f"Source: {config.source_description}")
        exists_str = "Yes" if config.todo_file_path.exists() else "No"
        typer.echo(f"Exists: {exists_str}")


@config_app.command("set-path")
def config_set_path(
    path: Annotated[
        str,
        typer.Argument(help="Path to set as default todo.txt"),
    ],
) -> None:
    """Save the default todo.txt path to the config file."""
    abs_path = Path(path).resolve()

    config_file = save_todo_file(str(abs_path))

    if _context.json_output:
        result = {
            "path": str(abs_path),
            "config_file": str(config_file),
        }
        typer.echo(json.dumps(result, ensure_ascii=False))
    else:
        typer.echo(f"Configuration saved: {abs_path}")
        typer.echo(f"Config file: {config_file}")


# ===== self subcommands =====


@self_app.command("version")
def self_version() -> None:
    """Show version information."""
    if _context.json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"todospan version {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
