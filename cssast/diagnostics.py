"""Side channel for parser diagnostics.

Nothing emitted here is part of the parse result. The parser reports
structured events (`next`, `node`, `unexpected-token`, `depth-underflow`,
`unclosed-group`, `ran`) to whatever collaborator the caller supplies.
"""
from __future__ import annotations
import logging
import reprlib
from typing import Any, Protocol, runtime_checkable

__all__ = ["Diagnostics", "LoggingDiagnostics", "NullDiagnostics", "RecordingDiagnostics"]

# Nodes can nest arbitrarily deep, only show the first few levels
_repr = reprlib.Repr()
_repr.maxlevel = 4
_repr.maxstring = _repr.maxother = 120


@runtime_checkable
class Diagnostics(Protocol):
    def emit(self, event: str, **fields: Any) -> None:
        raise NotImplementedError


class LoggingDiagnostics:
    """Write events to a logger, prefixed with a label.

    Args
        logger (logging.Logger | None): Defaults to the `cssast.parse` logger.
        label (str): Prefix for every message. Defaults to `parse`.
        level (int): Level events are logged at. Defaults to `logging.DEBUG`.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        label: str = "parse",
        level: int = logging.DEBUG,
    ) -> None:
        self.log = logger or logging.getLogger("cssast.parse")
        self.label = label
        self.level = level

    def emit(self, event: str, **fields: Any) -> None:
        # Formatting nodes is expensive, skip it when nobody listens
        if not self.log.isEnabledFor(self.level):
            return
        details = " ".join(f"{key}={_repr.repr(val)}" for key, val in fields.items())
        self.log.log(self.level, "[%s] %s %s", self.label, event, details)


class NullDiagnostics:
    def emit(self, event: str, **fields: Any) -> None:
        pass


class RecordingDiagnostics:
    """Keep every event in memory, in the order they were emitted."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def named(self, event: str) -> list[dict[str, Any]]:
        return [fields for name, fields in self.events if name == event]
