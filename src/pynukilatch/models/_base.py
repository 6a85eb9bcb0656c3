"""Base model and enum for Nuki bridge payloads.

Every bridge model inherits from :class:`NukiBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used.
* A ``raw`` dict that captures the original payload.

Vendor state enums inherit from :class:`NukiEnum` which adds an
``UNKNOWN`` member at ``-1`` and a ``_missing_`` hook that returns
``UNKNOWN`` for any value without a mapped member.
"""

from __future__ import annotations

import enum
import math
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

TEnum = TypeVar("TEnum", bound="NukiEnum")


def safe_int(value: Any) -> int | None:
    """Parse *value* to int, returning ``None`` for missing/invalid input."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return int(result)


def to_nuki_enum(enum_cls: type[TEnum], value: Any) -> TEnum | None:
    """Coerce a raw vendor code to *enum_cls*; unmapped codes become ``UNKNOWN``."""
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return None
    parsed = safe_int(value)
    if parsed is None:
        return enum_cls.UNKNOWN  # type: ignore[attr-defined]
    return enum_cls(parsed)


class NukiEnum(enum.IntEnum):
    """Base for Nuki bridge state enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    Values the bridge sends that have no mapped member automatically
    resolve to ``UNKNOWN`` instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> NukiEnum:
        if hasattr(cls, "UNKNOWN"):
            unknown: NukiEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class NukiBaseModel(BaseModel):
    """Base for Nuki bridge response models.

    Handles:
    * camelCase → snake_case via ``alias_generator=to_camel``
    * explicit ``null`` values → dropped so the field default is used
    * Stashes the original API dict in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_nuki_values(cls, values: Any) -> Any:
        """Drop ``None`` values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep the caller's raw when constructing with raw= explicitly.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
