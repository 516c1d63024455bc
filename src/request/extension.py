"""Install request parsing onto an arbitrary host object."""

from __future__ import annotations

import logging
from typing import Any

from src.request.dispatcher import Dispatcher
from src.request.match import Match
from src.request.model import Request

logger = logging.getLogger(__name__)


def add_request_to_app(app: Any, dispatcher: Dispatcher | None = None) -> Dispatcher | None:
    """Add request functionality to `app` and return its dispatcher.

    Installs `request_already_added`, `request_dispatcher`, `parsers` (the dispatcher's registry
    list), `add_request_parser`, `parse`, `Match` and `Request`. Calling it again on the same
    object changes nothing and returns the dispatcher installed the first time.
    """

    if getattr(app, "request_already_added", False) is True:
        return getattr(app, "request_dispatcher", None)

    dispatcher = dispatcher if dispatcher is not None else Dispatcher()

    app.request_already_added = True
    app.request_dispatcher = dispatcher
    app.parsers = dispatcher.parsers
    app.add_request_parser = dispatcher.add_request_parser
    app.parse = dispatcher.parse
    app.Match = Match
    app.Request = Request

    logger.debug("request extension installed app=%s", type(app).__name__)
    return dispatcher
