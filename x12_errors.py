"""Exception types raised while resolving separators and decoding segments."""


class X12Error(Exception):
    """Base class for X12 decoding errors.

    Carries the segment code and 1-based segment index when the error is
    tied to a particular segment.
    """

    def __init__(self, message, segment=None, index=None):
        self.message = message
        self.segment = segment
        self.index = index
        super().__init__(self._format_message())

    def _format_message(self):
        parts = [self.message]
        if self.segment:
            parts.append(f"Segment: {self.segment}")
        if self.index is not None:
            parts.append(f"Index: {self.index}")
        return " | ".join(parts)


class FormatError(X12Error):
    """Structural problem: missing or truncated ISA, wrong separator, too many elements."""


class ValidationError(X12Error):
    """A value or a schema violates its declared constraints."""


class SchemaError(ValidationError):
    """A segment schema declares duplicate or non-contiguous field orders."""
