"""Error types raised while loading phrases and generating insults."""

from __future__ import annotations


class InsultError(Exception):
    """Base class for every failure the insult generator reports."""


class IoError(InsultError):
    """A phrase file or export destination could not be read or written."""


class InvalidFormat(InsultError):
    """Phrase text breaks the three-field, tab-delimited line contract."""

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        expected: int | None = None,
        found: int | None = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.expected = expected
        self.found = found


class ParseError(InsultError):
    """The field delimiter rule itself could not be built."""


class SerializationError(InsultError):
    """An export payload could not be encoded as JSON."""


class UnknownWord(InsultError):
    """A mix-your-own word is not present in the phrase vocabulary."""
