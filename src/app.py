"""Application composition root.

This module wires together configuration and the request dispatcher for a request-handling
process.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.settings import Settings
from src.request.canonical_parser import CanonicalParser
from src.request.dispatcher import Dispatcher
from src.request.extension import add_request_to_app


@dataclass
class App:
    """Shared application dependencies for handlers.

    `create_app` installs the request extension on the instance (`parse`, `add_request_parser`,
    `Match`, `Request`, ...), so the dataclass stays mutable.
    """

    settings: Settings


def create_app(settings: Settings) -> App:
    """Create the application container with a dispatcher configured from `settings`.

    Platform parsers are registered by the caller via `app.add_request_parser`; the canonical
    parser is registered first when enabled.
    """

    app = App(settings=settings)
    dispatcher = Dispatcher(parser_errors=settings.parser_errors)
    add_request_to_app(app, dispatcher)
    if settings.canonical_parser_enabled:
        dispatcher.add_request_parser(CanonicalParser())
    return app
