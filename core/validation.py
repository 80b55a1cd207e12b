# core/validation.py
"""
Explicit per-entity validation.

Each entity module exposes `validate_<entity>_create` / `validate_<entity>_update`
functions built on `validate_payload`. They never raise on bad input; they
return a `ValidationResult` that is either a success carrying the normalised
Pydantic model or a failure carrying every field error found.
"""
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

UUID_FIELD_MESSAGE = "Invalid identifier format"

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


@dataclass(frozen=True)
class FieldError:
    path: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    value: ModelT | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    @classmethod
    def success(cls, value: ModelT) -> "ValidationResult[ModelT]":
        return cls(value=value, errors=[])

    @classmethod
    def failure(cls, errors: list[FieldError]) -> "ValidationResult[ModelT]":
        return cls(value=None, errors=list(errors))

    def unwrap(self) -> ModelT:
        """Return the validated model or raise ValidationFailed."""
        if not self.ok:
            raise ValidationFailed(self.errors)
        return self.value


class ValidationFailed(Exception):
    """Raised when a payload does not satisfy its entity's rules."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.path}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")


class MalformedIdentifierError(Exception):
    """Raised when a path or query identifier is not a UUID."""

    def __init__(self, field_name: str, value: Any):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid {field_name} format: {value!r}")


def _format_loc(loc: tuple) -> str:
    # Drop the union/function tags Pydantic adds for tagged validators
    parts = [str(p) for p in loc if not (isinstance(p, str) and p.startswith("function-"))]
    return ".".join(parts) if parts else "__root__"


def _format_message(error: dict) -> str:
    message = error.get("msg", "Invalid value")
    # Messages raised from our own validators arrive prefixed by Pydantic
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if error.get("type") == "uuid_parsing":
        return UUID_FIELD_MESSAGE
    return message


def errors_from_exception(exc: ValidationError) -> list[FieldError]:
    return [
        FieldError(path=_format_loc(tuple(err.get("loc", ()))), message=_format_message(err))
        for err in exc.errors()
    ]


def validate_payload(
    model: type[ModelT],
    payload: Any,
    *,
    checks: tuple[Callable[[dict], list[FieldError]], ...] = (),
) -> ValidationResult[ModelT]:
    """
    Validate a raw payload against `model` and any extra cross-field checks.

    Checks receive the raw payload dict and run even when the model itself
    rejects the payload so the caller gets every error in one pass.
    """
    if not isinstance(payload, dict):
        return ValidationResult.failure(
            [FieldError(path="__root__", message="Expected a JSON object")]
        )

    errors: list[FieldError] = []
    value: ModelT | None = None
    try:
        value = model.model_validate(payload)
    except ValidationError as exc:
        errors.extend(errors_from_exception(exc))

    for check in checks:
        errors.extend(check(payload))

    if errors:
        return ValidationResult.failure(errors)
    return ValidationResult.success(value)


def blank_to_none(value: Any) -> Any:
    """Empty or whitespace-only identifier strings mean "no link"."""
    if isinstance(value, str):
        trimmed = value.strip()
        return trimmed or None
    return value


def parse_identifier(value: Any, field_name: str = "id") -> uuid.UUID:
    """
    Parse a path/query identifier.

    Raises MalformedIdentifierError before any store access if the value is
    not a canonical UUID string.
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise MalformedIdentifierError(field_name, value)
    candidate = value.strip()
    if not UUID_PATTERN.match(candidate):
        raise MalformedIdentifierError(field_name, value)
    return uuid.UUID(candidate)


def reject_nulls(*field_names: str) -> Callable[[dict], list[FieldError]]:
    """Partial updates may omit required fields but never null them."""

    def check(payload: dict) -> list[FieldError]:
        return [
            FieldError(path=name, message="may not be null")
            for name in field_names
            if name in payload and payload[name] is None
        ]

    return check
