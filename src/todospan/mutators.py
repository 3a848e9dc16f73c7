"""Task-level operations built on extractors and the span editor.

All functions are pure: they take a task line and return a new one.
Removing or updating a field that is not present returns the task unchanged.
"""

import re
from datetime import date, datetime
from typing import Callable

from todospan.editor import remove_span, replace_span, replace_spans
from todospan.span import LiteralEdit
from todospan.todotxt import (
    COMPLETION_PREFIX_PATTERN,
    get_contexts,
    get_key_values,
    get_priority,
    get_projects,
    is_completed,
)

PRIORITY_LETTER_PATTERN = re.compile(r"[A-Z]")


def mark_completed(
    task: str,
    completion_date: date | str | None = None,
    *,
    add_date: bool = True,
    today: Callable[[], date] = date.today,
    priority_to_tag: bool = False,
) -> str:
    """Mark a task as complete.

    - Adds `x ` prefix, followed by the completion date unless `add_date`
      is False.
    - With `priority_to_tag`, converts priority (A) to a pri:A key-value.

    Args:
        task: The original task line.
        completion_date: Completion date; defaults to `today()`.
        add_date: Whether to write a completion date at all.
        today: Provider of the current date.
        priority_to_tag: Move the priority into a `pri:` key-value.

    Returns:
        The completed task line, or the task unchanged if already complete.
    """
    if is_completed(task):
        return task

    if priority_to_tag:
        priority = get_priority(task)
        if priority:
            task = set_key_value(remove_span(task, priority), "pri", priority.value)

    if not add_date:
        return f"x {task}"

    if completion_date is None:
        completion_date = today()
    if isinstance(completion_date, datetime):
        completion_date = completion_date.date()
    if isinstance(completion_date, date):
        completion_date = completion_date.isoformat()
    return f"x {completion_date} {task}"


def mark_incomplete(task: str) -> str:
    """Strip the leading `x` and completion date from a task."""
    match = COMPLETION_PREFIX_PATTERN.match(task)
    if not match:
        return task
    return replace_spans(task, [LiteralEdit(match.start(), match.end())])


def set_priority(task: str, priority: str | None) -> str:
    """Set, change or remove the priority of a task.

    Args:
        task: A todo.txt line.
        priority: A single uppercase letter, or None to remove the priority.

    Returns:
        The updated task line.

    Raises:
        ValueError: If priority is not a single uppercase letter.
    """
    if priority is not None and not PRIORITY_LETTER_PATTERN.fullmatch(priority):
        raise ValueError(f"Priority must be a single letter A-Z, got {priority!r}")

    current = get_priority(task)
    if current:
        task = remove_span(task, current)
    if priority:
        task = f"({priority}) {task}"
    return task.strip()


def add_project(task: str, project: str) -> str:
    """Append a `+project` tag unless the task already has it."""
    if project in get_projects(task, with_spans=False):
        return task
    return f"{task} +{project}".strip()


def add_context(task: str, context: str) -> str:
    """Append an `@context` tag unless the task already has it."""
    if context in get_contexts(task, with_spans=False):
        return task
    return f"{task} @{context}".strip()


def remove_project(task: str, project: str) -> str:
    """Remove the first `+project` tag with the given name."""
    span = next((p for p in get_projects(task) if p.value == project), None)
    if span:
        task = remove_span(task, span)
    return task


def remove_context(task: str, context: str) -> str:
    """Remove the first `@context` tag with the given name."""
    span = next((c for c in get_contexts(task) if c.value == context), None)
    if span:
        task = remove_span(task, span)
    return task


def set_key_value(task: str, key: str, value: str) -> str:
    """Replace the value of a `key:value` pair, or append it if absent.

    The existing pair is edited in place so its position and separator
    are kept.
    """
    span = next((kv for kv in get_key_values(task) if kv.key == key), None)
    if span:
        return replace_span(task, span, value)
    return f"{task} {key}:{value}"


def remove_key(task: str, key: str) -> str:
    """Remove the first `key:value` pair with the given key."""
    span = next((kv for kv in get_key_values(task) if kv.key == key), None)
    if span:
        task = remove_span(task, span)
    return task
