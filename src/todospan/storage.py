"""In-place editing of one line of a todo.txt file.

Only the targeted line changes: every other byte of the file, including
line endings, is written back as it was read.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Generator

logger = logging.getLogger(__name__)


class TodoFileLockedError(OSError):
    """Raised when another process holds the todo.txt lock file."""


@contextmanager
def exclusive_lock(path: Path) -> Generator[None, None, None]:
    """Hold `<path>.lock` for the duration of a read-modify-write.

    The lock file is created exclusively, so a second writer fails fast
    instead of overwriting the first one's edit.

    Raises:
        TodoFileLockedError: If the lock file already exists.
    """
    lock_path = path.with_name(path.name + ".lock")
    try:
        fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    except FileExistsError:
        raise TodoFileLockedError(
            f"{path} is being edited by another process (remove {lock_path} if stale)"
        ) from None

    try:
        os.write(fd, str(os.getpid()).encode())
        os.close(fd)
        yield
    finally:
        lock_path.unlink(missing_ok=True)


def _split_ending(line: str) -> tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body) :]


def _replace_file(path: Path, text: str) -> None:
    """Swap in new file content via a temporary file in the same directory."""
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", newline="", dir=path.parent, prefix=".todospan_", delete=False
    ) as tmp:
        tmp.write(text)
        tmp.flush()
        os.fsync(tmp.fileno())
    try:
        os.replace(tmp.name, path)
    except OSError:
        os.unlink(tmp.name)
        raise


class TodoFile:
    """A todo.txt file whose lines are edited one at a time.

    Attributes:
        path: Path to the todo.txt file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def update_line(self, index: int, func: Callable[[str], str]) -> tuple[str, str]:
        """Apply a task transformation to one line under the lock.

        Args:
            index: Zero-based line index.
            func: Function mapping the old task line to the new one.

        Returns:
            Tuple of (old line, new line), both without line endings.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            IndexError: If the index is out of range.
            TodoFileLockedError: If another edit is in progress.
        """
        with exclusive_lock(self.path):
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                lines = f.readlines()

            if not 0 <= index < len(lines):
                raise IndexError(f"Line index {index} out of range (0-{len(lines) - 1})")

            old, ending = _split_ending(lines[index])
            new = func(old)
            if new == old:
                logger.debug("Line %d of %s unchanged", index, self.path)
                return old, new

            lines[index] = new + ending
            _replace_file(self.path, "".join(lines))
            logger.debug("Rewrote line %d of %s", index, self.path)
            return old, new
