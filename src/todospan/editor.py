"""Span-based editing of todo.txt lines.

Every function takes a task string and returns a new string; nothing is
edited in place. Batches of edits are applied from the rightmost start
offset to the leftmost, so offsets taken from the original string stay
valid for every edit that has not been applied yet.
"""

import logging
import re
from typing import Iterable

from todospan.errors import InvalidEditError, InvalidSpanError, OutOfBoundsError
from todospan.span import LiteralEdit, Span, SpanEdit

logger = logging.getLogger(__name__)

LEADING_WHITESPACE_PATTERN = re.compile(r"^\s*")


def _is_offset(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _has_offsets(span: object) -> bool:
    return _is_offset(getattr(span, "start", None)) and _is_offset(
        getattr(span, "end", None)
    )


def format_replacement(span: Span | None, new_value: str) -> str:
    """Build the replacement text for a span given a new logical value.

    The first occurrence of the span's value inside its raw text is swapped
    for the new value, which keeps leading whitespace, the `@`/`+` marker and
    any `key:` prefix. Spans without a usable value fall back to keeping only
    the leading whitespace of the raw text.

    Note that when the value also appears earlier in the raw text (for
    example ` a:a`), that earlier occurrence is the one replaced.

    Args:
        span: The span being replaced.
        new_value: The new logical value.

    Returns:
        The text to splice in at the span's offsets.
    """
    raw = getattr(span, "raw", None)
    if not isinstance(raw, str):
        return new_value

    value = getattr(span, "value", None)
    if value and value in raw:
        return raw.replace(value, new_value, 1)

    leading = LEADING_WHITESPACE_PATTERN.match(raw).group(0)
    return f"{leading}{new_value}"


def replace_span(task: str, span: Span, new_value: str) -> str:
    """Replace a single span with a new logical value.

    Args:
        task: The todo.txt line the span was extracted from.
        span: The span to replace.
        new_value: The new logical value (e.g. `2025-06-10`).

    Returns:
        The updated task line.

    Raises:
        InvalidSpanError: If the span has no integer start/end offsets.
    """
    if span is None or not _has_offsets(span):
        raise InvalidSpanError(f"Span must have integer start and end offsets: {span!r}")

    replacement = format_replacement(span, new_value)
    return task[: span.start] + replacement + task[span.end :]


def _normalize(edit: SpanEdit | LiteralEdit) -> tuple[int, int, str]:
    """Resolve an edit request into a (start, end, replacement) triple."""
    if isinstance(edit, SpanEdit):
        if not _has_offsets(edit.span):
            raise InvalidEditError(
                f"Span edit must carry a span with integer offsets: {edit!r}"
            )
        return edit.span.start, edit.span.end, format_replacement(edit.span, edit.new_value)

    if isinstance(edit, LiteralEdit):
        if not _has_offsets(edit):
            raise InvalidEditError(f"Literal edit must have integer start and end: {edit!r}")
        return edit.start, edit.end, edit.replacement

    raise InvalidEditError(f"Unsupported edit request: {edit!r}")


def _check_overlaps(edits: list[tuple[int, int, str]]) -> None:
    """Reject edits whose ranges overlap in the original string."""
    ordered = sorted(edits, key=lambda e: (e[0], e[1]))
    for prev, cur in zip(ordered, ordered[1:]):
        # Two insertions at one offset, or an insertion at a range boundary,
        # do not consume shared text.
        if cur[0] < prev[1]:
            raise InvalidEditError(
                f"Edits overlap: [{prev[0]}:{prev[1]}] and [{cur[0]}:{cur[1]}]"
            )


def replace_spans(
    task: str,
    edits: Iterable[SpanEdit | LiteralEdit],
    *,
    reject_overlaps: bool = False,
) -> str:
    """Apply several edits to a task line.

    Every edit is normalized before anything is applied, so a malformed
    request leaves no partial result. Edits are then applied in descending
    start order against the progressively edited string; input order does
    not matter. Edits that share a start offset keep their input order.

    Overlapping edits are applied as-is unless `reject_overlaps` is set.

    Args:
        task: The todo.txt line all spans were extracted from.
        edits: SpanEdit and/or LiteralEdit requests.
        reject_overlaps: Raise instead of applying overlapping edits.

    Returns:
        The updated task line.

    Raises:
        InvalidEditError: If an edit has no usable span or range, or if
            edits overlap while `reject_overlaps` is set.
        OutOfBoundsError: If an edit range is negative, inverted or extends
            past the end of the string at the time it is applied.
    """
    if isinstance(edits, (str, bytes)) or not isinstance(edits, Iterable):
        raise InvalidEditError(f"Edits must be a sequence of edit requests: {edits!r}")

    normalized = [_normalize(edit) for edit in edits]
    if reject_overlaps:
        _check_overlaps(normalized)

    normalized.sort(key=lambda e: e[0], reverse=True)
    logger.debug("Applying %d edit(s) to %r", len(normalized), task)

    result = task
    for start, end, replacement in normalized:
        if start < 0 or end < start or end > len(result):
            raise OutOfBoundsError(start, end, len(result))
        result = result[:start] + replacement + result[end:]

    return result


def remove_span(task: str, span: Span) -> str:
    """Remove a span, including its leading whitespace and marker.

    Raises:
        InvalidSpanError: If the span has no integer start/end offsets.
    """
    if span is None or not _has_offsets(span):
        raise InvalidSpanError(f"Span must have integer start and end offsets: {span!r}")
    return replace_spans(task, [LiteralEdit(span.start, span.end)])


def remove_spans(task: str, spans: Iterable[Span]) -> str:
    """Remove several spans extracted from the same task line.

    Args:
        task: The todo.txt line the spans were extracted from.
        spans: Spans to remove, in any order.

    Returns:
        The updated task line.

    Raises:
        InvalidEditError: If a span has no integer start/end offsets.
        OutOfBoundsError: If a span does not fit the string.
    """
    edits = []
    for span in spans:
        if span is None or not _has_offsets(span):
            raise InvalidEditError(f"Span must have integer start and end offsets: {span!r}")
        edits.append(LiteralEdit(span.start, span.end))
    return replace_spans(task, edits)


def insert_text(task: str, offset: int, text: str) -> str:
    """Insert literal text at an offset."""
    return replace_spans(task, [LiteralEdit(offset, offset, text)])
