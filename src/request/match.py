"""A single recognizer hypothesis for a user utterance.

Some platforms return exactly one match (typically with probability 1.0), others return a ranked
list. Platforms that only forward raw text leave `intent_name` unset. All locales in `locales` apply
to the same raw text (e.g. "Hasta la vista, baby" may carry both `en` and `es`).

All setters are fail-soft: invalid input falls back to a default and never raises.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from src.request.normalize import clamp_probability, normalize_locales, optional_str
from src.request.schema import MappedValue

logger = logging.getLogger(__name__)


class Match:
    """One candidate interpretation of an utterance."""

    def __init__(
            self,
            raw_text: Any = None,
            match_probability: Any = None,
            intent_name: Any = None,
            mapped_values: Any = None,
            locales: Any = None,
    ) -> None:
        self.raw_text = raw_text
        self.match_probability = match_probability
        self.intent_name = intent_name
        self.mapped_values = mapped_values
        self.locales = locales

    def clone(self) -> Match:
        """Return a fully independent, value-equal copy."""

        return Match(
            self._raw_text,
            self._match_probability,
            self._intent_name,
            self._mapped_values,
            self._locales,
        )

    @property
    def raw_text(self) -> str | None:
        """Verbatim utterance text, or None if the platform does not expose it."""
        return self._raw_text

    @raw_text.setter
    def raw_text(self, value: Any) -> None:
        self._raw_text = optional_str(value)

    @property
    def match_probability(self) -> float:
        """Recognizer confidence, always within `[0.0, 1.0]`."""
        return self._match_probability

    @match_probability.setter
    def match_probability(self, value: Any) -> None:
        self._match_probability = clamp_probability(value)

    @property
    def intent_name(self) -> str | None:
        return self._intent_name

    @intent_name.setter
    def intent_name(self, value: Any) -> None:
        self._intent_name = optional_str(value)

    @property
    def mapped_values(self) -> list[MappedValue]:
        """A fresh list of the stored key/value entries, in insertion order."""
        return list(self._mapped_values)

    @mapped_values.setter
    def mapped_values(self, value: Any) -> None:
        self._mapped_values: list[MappedValue] = []
        if not isinstance(value, (list, tuple)):
            return
        for entry in value:
            try:
                self._mapped_values.append(MappedValue.model_validate(entry, from_attributes=True))
            except ValidationError:
                logger.debug("dropping malformed mapped value entry=%r", entry)

    def get_mapped_value(self, key: str) -> Any:
        """Return the value of the first entry with `key`, or None if there is none."""

        for entry in self._mapped_values:
            if entry.key == key:
                return entry.value
        return None

    @property
    def locales(self) -> list[str]:
        """A fresh list of the locales applicable to this match."""
        return list(self._locales)

    @locales.setter
    def locales(self, value: Any) -> None:
        self._locales = normalize_locales(value)

    def to_dict(self) -> dict[str, Any]:
        """Export the match in its canonical dict shape (unset text fields omitted)."""

        data: dict[str, Any] = {}
        if self._raw_text is not None:
            data["raw_text"] = self._raw_text
        data["match_probability"] = self._match_probability
        if self._intent_name is not None:
            data["intent_name"] = self._intent_name
        data["mapped_values"] = [entry.model_dump() for entry in self._mapped_values]
        data["locales"] = list(self._locales)
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Match):
            return NotImplemented
        return (
                self._raw_text == other._raw_text
                and self._match_probability == other._match_probability
                and self._intent_name == other._intent_name
                and self._mapped_values == other._mapped_values
                and self._locales == other._locales
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Match(raw_text={self._raw_text!r}, match_probability={self._match_probability!r}, "
            f"intent_name={self._intent_name!r}, mapped_values={self._mapped_values!r}, "
            f"locales={self._locales!r})"
        )
