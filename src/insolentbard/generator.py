"""Insult generation: random sampling, exhaustive export, and friends."""

from __future__ import annotations

import itertools
import json
import logging
import random
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Iterator

import click

from insolentbard.errors import InvalidFormat, IoError, SerializationError, UnknownWord
from insolentbard.phrases import COLUMNS, PhraseRecord, load_phrases, vocabulary

logger = logging.getLogger(__name__)


@dataclass
class GeneratedInsult:
    """One exported insult and its position in the enumeration."""

    id: int
    insult: str

    def to_dict(self) -> dict:
        return asdict(self)


def format_insult(adjective1: str, adjective2: str, noun: str) -> str:
    return f"Thou {adjective1} {adjective2} {noun}!"


def random_insults(phrases: list[PhraseRecord], count: int, rng=None) -> Iterator[str]:
    """Yield count insults, each from a uniformly chosen record (with replacement).

    Draws happen lazily, one per insult. Nothing is yielded for an empty
    phrase list.
    """
    if not phrases:
        return
    rng = rng or random
    for _ in range(count):
        yield format_insult(*rng.choice(phrases))


def emit_random(phrases: list[PhraseRecord], count: int, file=None, rng=None) -> int:
    """Echo count random insults, one per line, as each is drawn.

    Returns the number of lines written.
    """
    written = 0
    for line in random_insults(phrases, count, rng=rng):
        click.echo(line, file=file)
        written += 1
    return written


def cartesian_insults(phrases: list[PhraseRecord]) -> Iterator[GeneratedInsult]:
    """Yield every (i, j, k) combination, i outermost and k innermost.

    The first adjective comes from phrases[i], the second from phrases[j]
    and the noun from phrases[k]; ids run from 0 to N**3 - 1.
    """
    for n, (first, second, third) in enumerate(itertools.product(phrases, repeat=3)):
        yield GeneratedInsult(n, format_insult(first.adjective1, second.adjective2, third.noun))


def emit_all(phrases: list[PhraseRecord], destination: str, strategy: str = "cartesian") -> int:
    """Write the named export of phrases to destination as pretty-printed JSON.

    Returns the number of input phrase records, not the number of records
    written. Raises SerializationError if the payload cannot be encoded (the
    destination is left untouched) and IoError if it cannot be written.
    """
    from insolentbard.exporters import get_exporter

    exporter = get_exporter(strategy)
    payload = exporter.render(phrases)
    try:
        text = json.dumps(payload, indent=2)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode {exporter.name} export: {e}") from e

    try:
        with open(destination, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise IoError(f"Cannot write {destination}: {e}") from e
    logger.debug("Wrote %s export of %d phrases to %s", exporter.name, len(phrases), destination)
    return len(phrases)


def read_verbatim_export(path: str) -> list[PhraseRecord]:
    """Read the phrase list back out of a verbatim export.

    The records go through the same line parser as a phrase file, so the
    result obeys the same invariants.
    """
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(f"Cannot read export {path}: {e}") from e
    except ValueError as e:
        raise SerializationError(f"Cannot decode export {path}: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("phrases", []), list):
        raise InvalidFormat(f"{path} is not a verbatim export")
    lines = []
    for n, row in enumerate(payload.get("phrases", [])):
        if not isinstance(row, dict) or not all(isinstance(row.get(name), str) for name in COLUMNS):
            raise InvalidFormat(
                f"{path}: phrase {n} is not an object with string {', '.join(COLUMNS)} fields"
            )
        lines.append("\t".join(row[name] for name in COLUMNS))
    return load_phrases(fallback_text="\n".join(lines))


def search_insults(
    phrases: list[PhraseRecord], query: str, limit: int | None = None
) -> list[GeneratedInsult]:
    """Return cartesian insults containing query, case-insensitively.

    Matches keep their cartesian ids so they line up with a full export.
    """
    needle = query.strip().lower()
    if not needle:
        raise ValueError("Search query must not be blank.")
    matches = (g for g in cartesian_insults(phrases) if needle in g.insult.lower())
    return list(itertools.islice(matches, limit))


def hour_key(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return now.strftime("%Y-%m-%d-%H")


def insult_of_the_hour(phrases: list[PhraseRecord], now: datetime | None = None) -> str | None:
    """Return the insult for the current clock hour.

    Every call within the same hour picks the same record; nothing is stored.
    """
    if not phrases:
        return None
    rng = random.Random(hour_key(now))
    return format_insult(*rng.choice(phrases))


def compose_insult(phrases: list[PhraseRecord], adjective1: str, adjective2: str, noun: str) -> str:
    """Build an insult from chosen words, each drawn from its own column.

    Words match case-insensitively and come back in the phrase list's
    spelling. Raises UnknownWord for a word absent from its column.
    """
    words = vocabulary(phrases)
    chosen = []
    for column, word in zip(COLUMNS, (adjective1, adjective2, noun)):
        lookup = {w.lower(): w for w in words[column]}
        try:
            chosen.append(lookup[word.strip().lower()])
        except KeyError:
            raise UnknownWord(f"'{word}' is not a known {column}.") from None
    return format_insult(*chosen)
