"""Base protocol for export strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from insolentbard.phrases import PhraseRecord


@runtime_checkable
class Exporter(Protocol):
    """Protocol for turning a phrase list into a JSON-ready payload."""

    @property
    def name(self) -> str:
        ...

    def render(self, phrases: list[PhraseRecord]) -> dict:
        """Return the payload to serialize for these phrases."""
        ...
