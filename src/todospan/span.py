"""Span data model.

A span describes one matched substring of a todo.txt line:
- `value`: the logical content (e.g. `home` for `@home`)
- `raw`: the exact source text, including leading whitespace and markers
- `start`/`end`: half-open offsets so that `source[start:end] == raw`

Spans are snapshots of a single string. Once that string is edited,
offsets taken from it must not be reused.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Position-tagged descriptor of a matched substring.

    Attributes:
        value: Logical (decoded) value of the field.
        raw: Exact text covered by the span in the source string.
        start: Inclusive start offset.
        end: Exclusive end offset.
        key: Key name for key:value spans, otherwise None.
    """

    value: str
    raw: str
    start: int
    end: int
    key: str | None = None

    @property
    def length(self) -> int:
        return self.end - self.start

    def extract(self, source: str) -> str:
        return source[self.start : self.end]

    def to_dict(self) -> dict:
        """Convert the span to a dictionary for JSON serialization.

        Returns:
            A dictionary representation of the span.
        """
        result = {
            "value": self.value,
            "raw": self.raw,
            "start": self.start,
            "end": self.end,
        }
        if self.key is not None:
            result["key"] = self.key
        return result


@dataclass(frozen=True)
class SpanEdit:
    """Replace a span's value, keeping its decoration (whitespace, marker, key)."""

    span: Span
    new_value: str = ""


@dataclass(frozen=True)
class LiteralEdit:
    """Replace `[start, end)` with literal text.

    A zero-width range (`start == end`) inserts text.
    """

    start: int
    end: int
    replacement: str = ""
