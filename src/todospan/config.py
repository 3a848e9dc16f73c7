"""Settings for the todospan CLI.

config.toml (under XDG_CONFIG_HOME or APPDATA) may contain:
- todo_file: default todo.txt used by `edit --line`
- completion_date: write a date when completing (default true)
- priority_to_tag: turn (A) into pri:A when completing (default false)

The todo.txt used by `edit --line` is taken from --file, then TODOSPAN_FILE,
then todo_file, then ./todo.txt or ~/todo.txt.
"""

import logging
import os
import re
import sys
from pathlib import Path

# Python 3.11+ has tomllib in standard library
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from todospan.editor import replace_spans
from todospan.span import LiteralEdit

logger = logging.getLogger(__name__)

ENV_VAR_NAME = "TODOSPAN_FILE"

SOURCE_DESCRIPTIONS = {
    "cli": "CLI option (--file)",
    "env": f"Environment variable ({ENV_VAR_NAME})",
    "config": "Config file",
    "default": "Default",
}

# A top-level `todo_file = ...` assignment, on its own line
TODO_FILE_ASSIGNMENT = re.compile(r"^[ \t]*todo_file[ \t]*=.*$", re.MULTILINE)
TABLE_HEADER = re.compile(r"^[ \t]*\[", re.MULTILINE)


def config_file_path() -> Path:
    """Location of config.toml for the current platform."""
    base = os.environ.get("APPDATA" if sys.platform == "win32" else "XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "todospan" / "config.toml"


def load_settings() -> dict:
    """Read config.toml, treating a missing or broken file as empty."""
    path = config_file_path()
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def save_todo_file(todo_file: str) -> Path:
    """Store `todo_file` in config.toml without touching anything else.

    Only the `todo_file` line is rewritten (or added at the top), so other
    keys, tables and comments stay exactly as they were.

    Returns:
        Path of the config file written.
    """
    path = config_file_path()
    text = path.read_text(encoding="utf-8") if path.exists() else ""

    escaped = todo_file.replace("\\", "\\\\").replace('"', '\\"')
    assignment = f'todo_file = "{escaped}"'

    header = TABLE_HEADER.search(text)
    match = TODO_FILE_ASSIGNMENT.search(text, 0, header.start() if header else len(text))
    if match:
        edit = LiteralEdit(match.start(), match.end(), assignment)
    else:
        edit = LiteralEdit(0, 0, assignment + "\n")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(replace_spans(text, [edit]), encoding="utf-8")
    logger.debug("Saved todo_file=%s to %s", todo_file, path)
    return path


class Config:
    """Resolved settings for one CLI invocation.

    Attributes:
        settings: Raw contents of config.toml.
        todo_file_path: todo.txt used by `edit --line`.
        source: Where todo_file_path came from: cli, env, config or default.
    """

    def __init__(self, cli_path: str | None = None) -> None:
        self.settings = load_settings()
        self.todo_file_path, self.source = self._locate_todo_file(cli_path)
        logger.debug("Using todo.txt %s (%s)", self.todo_file_path, self.source)

    def _locate_todo_file(self, cli_path: str | None) -> tuple[Path, str]:
        candidates = [
            ("cli", cli_path),
            ("env", os.environ.get(ENV_VAR_NAME)),
            ("config", self.settings.get("todo_file")),
        ]
        for source, value in candidates:
            if value:
                return Path(value).resolve(), source

        local = Path("todo.txt")
        return (local.resolve() if local.exists() else Path.home() / "todo.txt"), "default"

    @property
    def source_description(self) -> str:
        description = SOURCE_DESCRIPTIONS[self.source]
        if self.source == "config":
            description += f" ({config_file_path()})"
        return description

    @property
    def completion_date(self) -> bool:
        return bool(self.settings.get("completion_date", True))

    @property
    def priority_to_tag(self) -> bool:
        return bool(self.settings.get("priority_to_tag", False))
