"""todospan - span extraction and offset-safe editing for todo.txt lines."""

from todospan.editor import (
    format_replacement,
    insert_text,
    remove_span,
    remove_spans,
    replace_span,
    replace_spans,
)
from todospan.errors import (
    InvalidEditError,
    InvalidSpanError,
    OutOfBoundsError,
    SpanError,
)
from todospan.mutators import (
    add_context,
    add_project,
    mark_completed,
    mark_incomplete,
    remove_context,
    remove_key,
    remove_project,
    set_key_value,
    set_priority,
)
from todospan.span import LiteralEdit, Span, SpanEdit
from todospan.todotxt import (
    get_completion_date,
    get_contexts,
    get_creation_date,
    get_key_values,
    get_priority,
    get_projects,
    is_completed,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidEditError",
    "InvalidSpanError",
    "LiteralEdit",
    "OutOfBoundsError",
    "Span",
    "SpanEdit",
    "SpanError",
    "__version__",
    "add_context",
    "add_project",
    "format_replacement",
    "get_completion_date",
    "get_contexts",
    "get_creation_date",
    "get_key_values",
    "get_priority",
    "get_projects",
    "insert_text",
    "is_completed",
    "mark_completed",
    "mark_incomplete",
    "remove_context",
    "remove_key",
    "remove_project",
    "remove_span",
    "remove_spans",
    "replace_span",
    "replace_spans",
    "set_key_value",
    "set_priority",
]
