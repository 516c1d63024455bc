"""Parser dispatch (first parser that succeeds wins).

A backend may serve several assistant platforms at once. Each registered parser understands one
platform's raw payload; the dispatcher tries them in registration order until one of them populates
the canonical `Request`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from src.request.model import Request
from src.request.protocols import RequestParser

logger = logging.getLogger(__name__)


class ParserRegistrationError(TypeError):
    """Raised when something that is not a parser instance is registered."""


class ParserErrorPolicy(StrEnum):
    """What the dispatcher does when a parser raises instead of returning False."""

    propagate = "propagate"
    skip = "skip"


@dataclass(frozen=True)
class DispatchResult:
    """Dispatch outcome plus information about which parser produced it."""

    parsed: bool
    parser: RequestParser | None = None
    attempts: int = 0


def _parser_name(parser: Any) -> str:
    return getattr(parser, "name", None) or type(parser).__name__


class Dispatcher:
    """Ordered, append-only parser registry with first-success-wins dispatch.

    Registration is expected to happen at startup. Each dispatch iterates a snapshot of the
    registry, so a parser appended during a running dispatch only takes part in later ones.
    """

    def __init__(
            self,
            parsers: Any = (),
            *,
            parser_errors: ParserErrorPolicy = ParserErrorPolicy.propagate,
    ) -> None:
        self.parsers: list[RequestParser] = []
        self.parser_errors = ParserErrorPolicy(parser_errors)
        for parser in parsers:
            self.add_request_parser(parser)

    def add_request_parser(self, parser: Any) -> RequestParser:
        """Append `parser` to the registry and return it.

        Raises:
            ParserRegistrationError: If `parser` is a class or has no callable `parse`.
        """

        if isinstance(parser, type) or not isinstance(parser, RequestParser):
            raise ParserRegistrationError(f"not a request parser instance: {parser!r}")
        if not callable(parser.parse):
            raise ParserRegistrationError(f"parser.parse is not callable: {parser!r}")

        self.parsers.append(parser)
        logger.debug("registered parser=%s position=%d", _parser_name(parser), len(self.parsers))
        return parser

    def dispatch(
            self,
            raw_input: Any,
            request: Request,
            session: Any = None,
            state: Any = None,
    ) -> DispatchResult:
        """Try each parser in order with the given `raw_input` and stop at the first success.

        A parser succeeds only by returning `True`. Depending on `parser_errors`, an exception raised
        by a parser either propagates or is logged and counted as a failure.
        """

        attempts = 0
        for parser in tuple(self.parsers):
            attempts += 1
            name = _parser_name(parser)
            logger.debug("trying parser=%s", name)
            try:
                parsed = parser.parse(raw_input, request, session, state)
            except Exception:  # noqa: BLE001
                if self.parser_errors is ParserErrorPolicy.propagate:
                    raise
                logger.exception("parser failed parser=%s", name)
                continue

            if parsed is True:
                logger.debug("parsed parser=%s attempts=%d", name, attempts)
                return DispatchResult(parsed=True, parser=parser, attempts=attempts)

        logger.info("no parser accepted the request attempts=%d", attempts)
        return DispatchResult(parsed=False, attempts=attempts)

    def parse(
            self,
            raw_input: Any,
            request: Request,
            session: Any = None,
            state: Any = None,
    ) -> bool:
        """Populate `request` from `raw_input` (convenience wrapper around `dispatch`)."""

        return self.dispatch(raw_input, request, session, state).parsed
