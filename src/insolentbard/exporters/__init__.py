"""Export strategy registry: get_exporter, list_exporters, register_exporter."""

from __future__ import annotations

from insolentbard.exporters.base import Exporter

_REGISTRY: dict[str, type] = {}

DEFAULT_EXPORTER = "cartesian"


def register_exporter(name: str, cls: type) -> None:
    """Register an Exporter implementation by name."""
    _REGISTRY[name] = cls


def get_exporter(name: str) -> Exporter:
    """Return an instance of the named exporter. Raises KeyError if unknown."""
    if name not in _REGISTRY:
        raise KeyError(f"Unknown export strategy: '{name}'. Available: {', '.join(_REGISTRY)}")
    return _REGISTRY[name]()


def list_exporters() -> list[str]:
    """Return sorted list of registered exporter names."""
    return sorted(_REGISTRY.keys())


# Register built-in exporters
from insolentbard.exporters.builtin import CartesianExporter, VerbatimExporter  # noqa: E402

register_exporter("cartesian", CartesianExporter)
register_exporter("verbatim", VerbatimExporter)
