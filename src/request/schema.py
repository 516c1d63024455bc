"""Canonical request enumerations and value objects (Pydantic models).

`MappedValue` and `RequestError` are the passive value objects owned by `Match` and `Request`.
The `Canonical*Payload` models describe the library's own dict/JSON export shape and are used to
validate payloads before anything is written into a `Request`.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator


class RequestType(StrEnum):
    """Kinds of inbound interaction; the only values `Request.request_type` accepts."""

    START_SESSION = "START_SESSION"
    END_SESSION = "END_SESSION"
    INTENT = "INTENT"


class EndSessionReason(StrEnum):
    """Recognized end-of-session reasons (advisory, not enforced by `Request.reason`)."""

    USER_INITIATED = "USER_INITIATED"
    ERROR = "ERROR"


class ErrorCode(StrEnum):
    """Recognized upstream error codes (advisory, free-form strings are accepted)."""

    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class MappedValue(BaseModel):
    """A single recognized slot/entity value attached to a match."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    key: StrictStr
    value: Any


_ERROR_FIELDS = ("type", "message")


class RequestError(BaseModel):
    """Structured description of an upstream failure.

    Only string-typed `type`/`message` values are kept; anything else is dropped before validation.
    At least one of the two must survive.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str | None = None
    message: str | None = None

    @model_validator(mode="before")
    @classmethod
    def keep_string_fields(cls, data: Any) -> dict[str, str]:
        """Reduce arbitrary input (mapping or object) to its string-typed error fields."""

        if data is None:
            return {}
        kept: dict[str, str] = {}
        for name in _ERROR_FIELDS:
            if isinstance(data, Mapping):
                value = data.get(name)
            else:
                value = getattr(data, name, None)
            if isinstance(value, str):
                kept[name] = value
        return kept

    @model_validator(mode="after")
    def validate_not_empty(self) -> RequestError:
        """Validate that at least one of `type`/`message` is present."""

        if self.type is None and self.message is None:
            raise ValueError("error requires a string type or message")
        return self

    def to_dict(self) -> dict[str, str]:
        """Return the error as a plain dict containing only the fields that are set."""

        return self.model_dump(exclude_none=True)


class CanonicalMatchPayload(BaseModel):
    """Canonical dict shape of a single match."""

    model_config = ConfigDict(extra="forbid")

    raw_text: str | None = None
    match_probability: float | None = None
    intent_name: str | None = None
    mapped_values: list[MappedValue] = Field(default_factory=list)
    locales: list[str] = Field(default_factory=list)


class CanonicalRequestPayload(BaseModel):
    """Canonical dict shape of a request, optionally carrying session and state data."""

    model_config = ConfigDict(extra="forbid")

    request_id: str | int | float | None = None
    request_type: RequestType | None = None
    time_stamp: Any = None
    locale: str | None = None
    matches: list[CanonicalMatchPayload] = Field(default_factory=list)
    reason: str | None = None
    error: RequestError | None = None
    session: dict[str, Any] | None = None
    state: dict[str, Any] | None = None
