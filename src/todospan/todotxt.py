"""todo.txt field extraction module.

Locates fields of a todo.txt line and reports them as spans:
- Completed task: starts with `x` (optionally followed by `YYYY-MM-DD`)
- Priority: `(A)` format at the beginning of the line
- Creation date: YYYY-MM-DD after the completion prefix or priority
- Projects: `+project` format
- Contexts: `@context` format
- Key-values: `key:value` format

Every span includes the whitespace character that separates the token from
its left neighbor, so removing the span also removes the separator.
"""

import re

from todospan.span import Span


# Regular expression patterns for locating todo.txt fields
COMPLETED_PATTERN = re.compile(r"^\s*x\s")
COMPLETION_DATE_PATTERN = re.compile(r"^\s*x\s(\d{4}-\d{2}-\d{2})(?!\S)")
COMPLETION_PREFIX_PATTERN = re.compile(r"^\s*x\s(?:\d{4}-\d{2}-\d{2}(?:\s+|$))?")
PRIORITY_PATTERN = re.compile(r"^\s*\(([A-Z])\)\s")
# Creation date follows an optional completion prefix and an optional priority
CREATION_DATE_PATTERN = re.compile(
    r"^(?:\s*x\s\d{4}-\d{2}-\d{2})?(?:\s*\([A-Z]\)(?=\s))?\s*?(\s?(\d{4}-\d{2}-\d{2}))(?!\S)"
)
PROJECT_PATTERN = re.compile(r"(?:\s|^)\+(\S+)")
CONTEXT_PATTERN = re.compile(r"(?:\s|^)@(\S+)")
KEY_VALUE_PATTERN = re.compile(r"(?:\s|^)([a-zA-Z]+):(\S+)")
KEY_VALUE_EMPTY_PATTERN = re.compile(r"(?:\s|^)([a-zA-Z]+):(\S*)")


def _find_tokens(pattern: re.Pattern, task: str) -> list[Span]:
    """Collect non-overlapping marker tokens, left to right."""
    return [
        Span(value=match.group(1), raw=match.group(0), start=match.start(), end=match.end())
        for match in pattern.finditer(task)
    ]


def get_contexts(task: str, with_spans: bool = True) -> list[Span] | list[str]:
    """Extract `@context` tokens from a task line.

    Args:
        task: A todo.txt line.
        with_spans: Return Span objects instead of bare context names.

    Returns:
        Contexts in order of appearance.
    """
    spans = _find_tokens(CONTEXT_PATTERN, task)
    if with_spans:
        return spans
    return [span.value for span in spans]


def get_projects(task: str, with_spans: bool = True) -> list[Span] | list[str]:
    """Extract `+project` tokens from a task line.

    Args:
        task: A todo.txt line.
        with_spans: Return Span objects instead of bare project names.

    Returns:
        Projects in order of appearance.
    """
    spans = _find_tokens(PROJECT_PATTERN, task)
    if with_spans:
        return spans
    return [span.value for span in spans]


def get_key_values(
    task: str, allow_empty_value: bool = False, with_spans: bool = True
) -> list[Span] | list[tuple[str, str]]:
    """Extract `key:value` tokens from a task line.

    Keys are letters only. The value is everything after the first colon,
    so `url:http://example.com` has the value `http://example.com`.

    Args:
        task: A todo.txt line.
        allow_empty_value: Also match a bare `key:` with an empty value.
        with_spans: Return Span objects instead of (key, value) tuples.

    Returns:
        Key-value pairs in order of appearance. Spans carry the key in `key`.
    """
    pattern = KEY_VALUE_EMPTY_PATTERN if allow_empty_value else KEY_VALUE_PATTERN
    spans = [
        Span(
            value=match.group(2),
            raw=match.group(0),
            start=match.start(),
            end=match.end(),
            key=match.group(1),
        )
        for match in pattern.finditer(task)
    ]
    if with_spans:
        return spans
    return [(span.key, span.value) for span in spans]


def is_completed(task: str) -> bool:
    """Check if a task line is marked as complete.

    Args:
        task: A todo.txt line.

    Returns:
        True if the line starts with `x` followed by whitespace.
    """
    return COMPLETED_PATTERN.match(task) is not None


def get_priority(task: str) -> Span | None:
    """Get the leading `(X) ` priority marker.

    The span covers the whole marker including its trailing space,
    and its value is the priority letter.
    """
    match = PRIORITY_PATTERN.match(task)
    if not match:
        return None
    return Span(value=match.group(1), raw=match.group(0), start=match.start(), end=match.end())


def get_completion_date(task: str) -> Span | None:
    """Get the completion date of a completed task.

    The span covers `x YYYY-MM-DD`; its value is the date.
    """
    match = COMPLETION_DATE_PATTERN.match(task)
    if not match:
        return None
    return Span(value=match.group(1), raw=match.group(0), start=match.start(), end=match.end())


def get_creation_date(task: str) -> Span | None:
    """Get the creation date of a task.

    The completion prefix (`x YYYY-MM-DD`) and a priority marker are skipped
    first, so the completion date is never reported as the creation date.

    Args:
        task: A todo.txt line.

    Returns:
        A Span covering the date and its separating whitespace, or None.
    """
    match = CREATION_DATE_PATTERN.match(task)
    if not match:
        return None
    return Span(value=match.group(2), raw=match.group(1), start=match.start(1), end=match.end(1))
