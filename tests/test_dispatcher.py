"""Tests for first-success-wins parser dispatch."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any

import pytest

from src.request.dispatcher import (
    DispatchResult,
    Dispatcher,
    ParserErrorPolicy,
    ParserRegistrationError,
)
from src.request.model import Request


class _RecordingParser:
    def __init__(self, result: Any, request_id: str | None = None) -> None:
        self.result = result
        self.request_id = request_id
        self.calls: list[tuple[Any, ...]] = []

    def parse(self, raw_input: Any, request: Request, session: Any, state: Any) -> Any:
        self.calls.append((raw_input, request, session, state))
        if self.result is True and self.request_id is not None:
            request.request_id = self.request_id
        return self.result


class _RaisingParser:
    name = "raising"

    def parse(self, raw_input: Any, request: Request, session: Any, state: Any) -> bool:
        raise RuntimeError("bad payload")


def test_first_successful_parser_wins() -> None:
    p1 = _RecordingParser(False)
    p2 = _RecordingParser(True, request_id="X")
    p3 = _RecordingParser(True, request_id="Y")
    dispatcher = Dispatcher([p1, p2, p3])
    request = Request()

    assert dispatcher.parse({"payload": 1}, request, {}, {}) is True
    assert request.request_id == "X"
    assert len(p1.calls) == 1
    assert len(p2.calls) == 1
    assert p3.calls == []


def test_every_parser_receives_the_same_arguments() -> None:
    parsers = [_RecordingParser(False) for _ in range(3)]
    dispatcher = Dispatcher(parsers)
    raw = object()
    request = Request()
    session: dict[str, Any] = {}
    state: dict[str, Any] = {}

    assert dispatcher.parse(raw, request, session, state) is False
    for parser in parsers:
        (call,) = parser.calls
        assert call[0] is raw
        assert call[1] is request
        assert call[2] is session
        assert call[3] is state


def test_dispatch_reports_winning_parser() -> None:
    winner = _RecordingParser(True)
    dispatcher = Dispatcher([_RecordingParser(False), winner])

    result = dispatcher.dispatch("raw", Request())

    assert result == DispatchResult(parsed=True, parser=winner, attempts=2)


def test_empty_registry_fails() -> None:
    result = Dispatcher().dispatch("raw", Request())
    assert result.parsed is False
    assert result.parser is None
    assert result.attempts == 0


def test_only_true_counts_as_success() -> None:
    truthy = _RecordingParser(1)
    fallback = _RecordingParser(True, request_id="fallback")
    dispatcher = Dispatcher([truthy, _RecordingParser("yes"), fallback])
    request = Request()

    assert dispatcher.parse("raw", request) is True
    assert request.request_id == "fallback"


def test_registration_order_is_preserved() -> None:
    dispatcher = Dispatcher()
    first = dispatcher.add_request_parser(_RecordingParser(False))
    second = dispatcher.add_request_parser(_RecordingParser(False))
    assert dispatcher.parsers == [first, second]


@pytest.mark.parametrize("candidate", [object(), None, _RecordingParser, SimpleNamespace(parse=5)])
def test_registering_a_non_parser_raises(candidate: object) -> None:
    dispatcher = Dispatcher()
    with pytest.raises(ParserRegistrationError):
        dispatcher.add_request_parser(candidate)
    assert dispatcher.parsers == []


def test_registration_error_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        Dispatcher([object()])


def test_parser_exception_propagates_by_default() -> None:
    dispatcher = Dispatcher([_RaisingParser(), _RecordingParser(True)])
    with pytest.raises(RuntimeError, match="bad payload"):
        dispatcher.parse("raw", Request())


def test_skip_policy_logs_and_continues(caplog: pytest.LogCaptureFixture) -> None:
    fallback = _RecordingParser(True, request_id="ok")
    dispatcher = Dispatcher([_RaisingParser(), fallback], parser_errors="skip")
    request = Request()

    with caplog.at_level(logging.ERROR, logger="src.request.dispatcher"):
        result = dispatcher.dispatch("raw", request)

    assert dispatcher.parser_errors is ParserErrorPolicy.skip
    assert result.parsed is True
    assert result.parser is fallback
    assert result.attempts == 2
    assert request.request_id == "ok"
    assert "parser failed parser=raising" in caplog.text


def test_parser_registered_during_dispatch_joins_later_dispatches() -> None:
    dispatcher = Dispatcher()
    late = _RecordingParser(True)

    class _Registering:
        def parse(self, raw_input: Any, request: Request, session: Any, state: Any) -> bool:
            if late not in dispatcher.parsers:
                dispatcher.add_request_parser(late)
            return False

    dispatcher.add_request_parser(_Registering())

    assert dispatcher.parse("raw", Request()) is False
    assert late.calls == []
    assert dispatcher.parse("raw", Request()) is True
    assert len(late.calls) == 1
