"""The platform-independent representation of one inbound interaction.

Construction runs every field through its setter, so an invalid value for one field never prevents
the others from being set. Setters are fail-soft: rejected input leaves the field unset.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from src.request.match import Match
from src.request.normalize import normalize_request_id, optional_str
from src.request.protocols import Cloneable
from src.request.schema import RequestError, RequestType

logger = logging.getLogger(__name__)


def _is_cloneable(candidate: Any) -> bool:
    return (
            not isinstance(candidate, type)
            and isinstance(candidate, Cloneable)
            and callable(candidate.clone)
    )


class Request:
    """Canonical inbound request: id, type, locale, candidate matches and error metadata."""

    def __init__(
            self,
            request_id: Any = None,
            request_type: Any = None,
            time_stamp: Any = None,
            locale: Any = None,
            matches: Any = None,
            reason: Any = None,
            error: Any = None,
    ) -> None:
        self.request_id = request_id
        self.request_type = request_type
        self.time_stamp = time_stamp
        self.locale = locale
        self.matches = matches
        self.reason = reason
        self.error = error

    @property
    def request_id(self) -> str | None:
        return self._request_id

    @request_id.setter
    def request_id(self, value: Any) -> None:
        self._request_id = normalize_request_id(value)

    @property
    def request_type(self) -> RequestType | None:
        return self._request_type

    @request_type.setter
    def request_type(self, value: Any) -> None:
        self._request_type: RequestType | None = None
        if not isinstance(value, str):
            return
        try:
            self._request_type = RequestType(value)
        except ValueError:
            logger.debug("rejecting unknown request type=%r", value)

    @property
    def time_stamp(self) -> Any:
        """Platform time stamp, stored verbatim."""
        return self._time_stamp

    @time_stamp.setter
    def time_stamp(self, value: Any) -> None:
        self._time_stamp = value

    @property
    def locale(self) -> str | None:
        return self._locale

    @locale.setter
    def locale(self, value: Any) -> None:
        self._locale = optional_str(value)

    @property
    def matches(self) -> list[Match]:
        """A fresh list of the owned matches."""
        return list(self._matches)

    @matches.setter
    def matches(self, value: Any) -> None:
        """Replace all matches with clones of the cloneable elements of `value`."""

        self._matches: list[Match] = []
        if not isinstance(value, (list, tuple)):
            return
        for candidate in value:
            if _is_cloneable(candidate):
                self._matches.append(candidate.clone())
            else:
                logger.debug("skipping non-cloneable match candidate=%r", candidate)

    @property
    def match_count(self) -> int:
        return len(self._matches)

    def get_match(self, position: Any) -> Match | None:
        """Return the match at `position`, or None when it is out of bounds."""

        if isinstance(position, bool) or not isinstance(position, int):
            return None
        if 0 <= position < len(self._matches):
            return self._matches[position]
        return None

    @property
    def reason(self) -> str | None:
        """End-of-session reason; see `EndSessionReason` for the recognized values."""
        return self._reason

    @reason.setter
    def reason(self, value: Any) -> None:
        self._reason = optional_str(value)

    @property
    def error(self) -> RequestError | None:
        return self._error

    @error.setter
    def error(self, value: Any) -> None:
        self._error: RequestError | None = None
        if isinstance(value, RequestError):
            self._error = value
            return
        if value is None:
            return
        try:
            self._error = RequestError.model_validate(value)
        except ValidationError:
            logger.debug("rejecting request error=%r", value)

    def to_dict(self) -> dict[str, Any]:
        """Export the request in its canonical dict shape (unset fields omitted).

        Matches are exported through their own `to_dict`; duck-typed clones without one are left
        out, so `len(data["matches"])` can be smaller than `match_count`.
        """

        data: dict[str, Any] = {}
        if self._request_id is not None:
            data["request_id"] = self._request_id
        if self._request_type is not None:
            data["request_type"] = self._request_type.value
        if self._time_stamp is not None:
            data["time_stamp"] = self._time_stamp
        if self._locale is not None:
            data["locale"] = self._locale
        data["matches"] = [
            match.to_dict() for match in self._matches if callable(getattr(match, "to_dict", None))
        ]
        if self._reason is not None:
            data["reason"] = self._reason
        if self._error is not None:
            data["error"] = self._error.to_dict()
        return data

    def __repr__(self) -> str:
        return (
            f"Request(request_id={self._request_id!r}, request_type={self._request_type!r}, "
            f"locale={self._locale!r}, matches={len(self._matches)}, reason={self._reason!r}, "
            f"error={self._error!r})"
        )
