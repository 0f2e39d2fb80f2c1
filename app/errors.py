"""
Error taxonomy for the guest book.

Every failure the API can report is a ``GuestBookError`` subclass with a
fixed HTTP status and a JSON body of the shape ``{"message": ...}``.
Validation errors additionally enumerate the offending fields.

- ``ValidationError``    -> 400, raised before any store access.
- ``PersistenceError``   -> 500, the store rejected the call or was
  unreachable.  Never retried.
- ``ConfigurationError`` -> 500, the store connection cannot be built at
  all.  Not recoverable per request.
"""
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    reason: str  # missing | wrong_type | empty | too_long | unexpected_field | invalid_body
    detail: str


class GuestBookError(Exception):
    """Base class for all errors mapped to an HTTP response."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"message": self.message}


class ValidationError(GuestBookError):
    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(e.detail for e in self.errors) or "Invalid request")

    def to_response(self) -> dict:
        return {
            "message": self.message,
            "errors": [asdict(e) for e in self.errors],
        }


class PersistenceError(GuestBookError):
    code = "PERSISTENCE_ERROR"


class ConfigurationError(GuestBookError):
    code = "CONFIGURATION_ERROR"

    def to_response(self) -> dict:
        # Operator detail stays in the logs.
        return {"message": "The service is not configured to reach its database"}
