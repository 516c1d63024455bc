"""Structural contracts for matches and platform parsers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.request.model import Request


@runtime_checkable
class Cloneable(Protocol):
    """Anything that can hand out an independent copy of itself (e.g. `Match`)."""

    def clone(self) -> Any: ...


@runtime_checkable
class RequestParser(Protocol):
    """A platform-specific parser.

    `parse` returns True only after it has populated `request` (and optionally `session`/`state`).
    On failure the outputs should be left untouched: the dispatcher performs no rollback.
    """

    def parse(self, raw_input: Any, request: Request, session: Any, state: Any) -> bool: ...
