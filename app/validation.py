"""
Input validation for new guest book entries.

``validate_comment`` is a plain function over already-decoded JSON: it
returns either the validated ``CommentCreate`` or the full list of field
errors, and never touches the web framework or the store.  The field
rules themselves live on ``CommentCreate``; this module translates
pydantic's error records into ``FieldError`` values with stable reason
tags and readable messages.
"""
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.errors import FieldError, ValidationError
from app.schemas import MESSAGE_MAX_LENGTH, NAME_MAX_LENGTH, CommentCreate

_LABELS = {"name": "Name", "message": "Message"}
_MAX_LENGTHS = {"name": NAME_MAX_LENGTH, "message": MESSAGE_MAX_LENGTH}


@dataclass
class ValidationResult:
    value: CommentCreate | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors


def _to_field_error(err: dict) -> FieldError:
    loc = err.get("loc") or ()
    kind = err.get("type", "")

    if not loc:
        return FieldError("body", "invalid_body", "Request body must be a JSON object")

    name = str(loc[0])
    label = _LABELS.get(name, name)

    if kind == "extra_forbidden":
        return FieldError(name, "unexpected_field", f"Unexpected field '{name}'")
    if kind == "missing":
        return FieldError(name, "missing", f"{label} is required")
    if kind == "string_type":
        return FieldError(name, "wrong_type", f"{label} must be a string")
    if kind == "string_too_short":
        return FieldError(name, "empty", f"{label} is required")
    if kind == "string_too_long":
        limit = _MAX_LENGTHS.get(name)
        return FieldError(name, "too_long", f"{label} must not exceed {limit} characters")
    return FieldError(name, "invalid", err.get("msg", "Invalid value"))


def validate_comment(payload: Any) -> ValidationResult:
    """Validate a decoded request body against the new-comment contract."""
    try:
        value = CommentCreate.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult(errors=[_to_field_error(e) for e in exc.errors()])
    return ValidationResult(value=value)


def require_valid_comment(payload: Any) -> CommentCreate:
    """Like ``validate_comment`` but raises ``ValidationError`` on failure."""
    result = validate_comment(payload)
    if not result.ok:
        raise ValidationError(result.errors)
    return result.value
