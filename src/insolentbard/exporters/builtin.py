"""Built-in export strategies."""

from __future__ import annotations

from insolentbard.generator import cartesian_insults
from insolentbard.phrases import PhraseRecord


class CartesianExporter:
    """Every adjective/adjective/noun combination across rows.

    N phrases produce N**3 records of {"id", "insult"}, ids counting up in
    (i, j, k) order with the noun index varying fastest.
    """

    @property
    def name(self) -> str:
        return "cartesian"

    def render(self, phrases: list[PhraseRecord]) -> dict:
        return {"insults": [insult.to_dict() for insult in cartesian_insults(phrases)]}


class VerbatimExporter:
    """The phrase list itself, one record per source line."""

    @property
    def name(self) -> str:
        return "verbatim"

    def render(self, phrases: list[PhraseRecord]) -> dict:
        return {
            "phrases": [
                {"id": i, **record._asdict()} for i, record in enumerate(phrases)
            ]
        }
