"""Parser for the library's own canonical request shape.

Accepts either a decoded dict or a JSON string/bytes in the shape produced by `Request.to_dict()`,
optionally extended with `session` and `state` mappings. Useful for replaying recorded requests and
for backends that normalize upstream of this process.
"""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from typing import Any

from pydantic import ValidationError

from src.request.match import Match
from src.request.model import Request
from src.request.schema import CanonicalRequestPayload

logger = logging.getLogger(__name__)


def payload_from_raw(raw_input: Any) -> CanonicalRequestPayload | None:
    """Decode and validate a canonical payload; return None if `raw_input` is not one."""

    obj = raw_input
    if isinstance(raw_input, (str, bytes, bytearray)):
        try:
            obj = json.loads(raw_input)
        except (ValueError, RecursionError):
            return None

    if not isinstance(obj, dict):
        return None

    try:
        return CanonicalRequestPayload.model_validate(obj)
    except ValidationError as exc:
        logger.debug("canonical payload rejected errors=%d", exc.error_count())
        return None


class CanonicalParser:
    """`RequestParser` for canonical dict/JSON payloads."""

    name = "canonical"

    def parse(self, raw_input: Any, request: Request, session: Any, state: Any) -> bool:
        payload = payload_from_raw(raw_input)
        if payload is None:
            return False

        # Validation is complete at this point; outputs are only touched on success.
        request.request_id = payload.request_id
        request.request_type = payload.request_type
        request.time_stamp = payload.time_stamp
        request.locale = payload.locale
        request.matches = [
            Match(
                m.raw_text,
                m.match_probability,
                m.intent_name,
                m.mapped_values,
                m.locales,
            )
            for m in payload.matches
        ]
        request.reason = payload.reason
        request.error = payload.error

        if payload.session and isinstance(session, MutableMapping):
            session.update(payload.session)
        if payload.state and isinstance(state, MutableMapping):
            state.update(payload.state)
        return True
