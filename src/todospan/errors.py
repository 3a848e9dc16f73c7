"""Exceptions raised by the span editor."""


class SpanError(ValueError):
    """Base class for malformed span or edit input."""


class InvalidSpanError(SpanError):
    """Raised when a single-span edit receives a span without integer offsets."""


class InvalidEditError(SpanError):
    """Raised when an entry in an edit batch has no usable span or range."""


class OutOfBoundsError(InvalidEditError):
    """Raised when an edit range is negative, inverted or past the string end.

    Attributes:
        start: Start offset of the offending edit.
        end: End offset of the offending edit.
        length: Length of the string the edit was applied to.
    """

    def __init__(self, start: int, end: int, length: int) -> None:
        super().__init__(
            f"Invalid edit range start={start} end={end} for string of length {length}"
        )
        self.start = start
        self.end = end
        self.length = length
