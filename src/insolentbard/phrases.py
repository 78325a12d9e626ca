"""Phrase file loading: tab-delimited adjective/adjective/noun triples."""

from __future__ import annotations

import functools
import logging
import re
from importlib.resources import files
from typing import NamedTuple

from insolentbard.errors import InvalidFormat, IoError, ParseError

logger = logging.getLogger(__name__)

# Selecting this path (or None) means the bundled phrases, never the file system
DEFAULT_PHRASES_FILE = "data/phrases"
EXPECTED_FIELDS_PER_LINE = 3

_DELIMITER = r"\t+"


class PhraseRecord(NamedTuple):
    """One source line: two adjectives and a noun."""

    adjective1: str
    adjective2: str
    noun: str


COLUMNS = PhraseRecord._fields


@functools.lru_cache(maxsize=None)
def _field_splitter(pattern: str = _DELIMITER) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ParseError(f"Cannot compile field delimiter {pattern!r}: {e}") from e


def bundled_phrases() -> str:
    """Return the text of the phrase list shipped with the package."""
    return files("insolentbard").joinpath("phrases.txt").read_text(encoding="utf-8")


def parse_line(line: str, line_number: int) -> PhraseRecord:
    """Parse a single non-blank line into a PhraseRecord.

    A run of tabs counts as one delimiter, so "a\\t\\tb" has two fields.
    Raises InvalidFormat when the line does not hold exactly three
    non-empty fields.
    """
    fields = [f.strip() for f in _field_splitter().split(line.strip())]
    if len(fields) != EXPECTED_FIELDS_PER_LINE:
        raise InvalidFormat(
            f"Line {line_number}: expected {EXPECTED_FIELDS_PER_LINE} fields, found {len(fields)}",
            line_number=line_number,
            expected=EXPECTED_FIELDS_PER_LINE,
            found=len(fields),
        )
    for position, value in enumerate(fields, start=1):
        if not value:
            raise InvalidFormat(
                f"Line {line_number}: field {position} is empty",
                line_number=line_number,
                expected=EXPECTED_FIELDS_PER_LINE,
                found=len(fields),
            )
    return PhraseRecord(*fields)


def parse_phrases(text: str) -> list[PhraseRecord]:
    """Parse phrase text into records, in file order.

    Only "\\n" ends a line (with an optional "\\r" before it); other
    separators such as form feed or U+2028 stay inside the line. Blank
    lines are skipped but still advance the line count used in error
    messages. The first malformed line aborts the whole parse.
    """
    phrases = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        if not line.strip():
            continue
        phrases.append(parse_line(line, line_number))
    if not phrases:
        raise InvalidFormat("no valid phrases found")
    return phrases


def load_phrases(path: str | None = None, fallback_text: str | None = None) -> list[PhraseRecord]:
    """Load phrases from a file path, or the built-in list.

    path: None or DEFAULT_PHRASES_FILE selects fallback_text, which itself
        defaults to the bundled phrase list
    Raises IoError if the file cannot be read, InvalidFormat if its content
    breaks the phrase contract.
    """
    if path is None or path == DEFAULT_PHRASES_FILE:
        text = fallback_text if fallback_text is not None else bundled_phrases()
        logger.debug("Loading built-in phrases")
    else:
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise IoError(f"Cannot read phrases from {path}: {e}") from e
        logger.debug("Loading phrases from %s", path)
    phrases = parse_phrases(text)
    logger.debug("Loaded %d phrases", len(phrases))
    return phrases


def vocabulary(phrases: list[PhraseRecord]) -> dict[str, list[str]]:
    """Return each column's distinct words, in first-seen order."""
    columns: dict[str, list[str]] = {name: [] for name in COLUMNS}
    for record in phrases:
        for name, word in zip(COLUMNS, record):
            if word not in columns[name]:
                columns[name].append(word)
    return columns
