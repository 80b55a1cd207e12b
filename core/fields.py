# core/fields.py
"""
Reusable Pydantic field types for request payloads.
"""
import uuid
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from core.validation import UUID_FIELD_MESSAGE, UUID_PATTERN, blank_to_none


def _require_text(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("must not be empty")
    return trimmed


def _trim_optional(value):
    if isinstance(value, str):
        return value.strip() or None
    return value


# Non-empty after trimming; stored trimmed
RequiredText = Annotated[str, AfterValidator(_require_text)]

# Blank strings collapse to None
OptionalText = Annotated[str | None, BeforeValidator(_trim_optional)]


def _canonical_id(value):
    # Same textual form parse_identifier accepts for path and query ids
    if value is None or isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str) or not UUID_PATTERN.match(value.strip()):
        raise ValueError(UUID_FIELD_MESSAGE)
    return value.strip()


def _optional_id(value):
    return _canonical_id(blank_to_none(value))


RequiredId = Annotated[uuid.UUID, BeforeValidator(_canonical_id)]

# Foreign key reference; "" means no link
OptionalId = Annotated[uuid.UUID | None, BeforeValidator(_optional_id)]


def _check_latitude(value: float) -> float:
    if not -90 <= value <= 90:
        raise ValueError("Latitude must be between -90 and 90")
    return value


def _check_longitude(value: float) -> float:
    if not -180 <= value <= 180:
        raise ValueError("Longitude must be between -180 and 180")
    return value


class Location(BaseModel):
    lat: Annotated[float, AfterValidator(_check_latitude)] = Field(..., description="Latitude")
    lng: Annotated[float, AfterValidator(_check_longitude)] = Field(..., description="Longitude")
