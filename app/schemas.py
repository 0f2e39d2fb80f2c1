from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

NAME_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 500


# --- Comment ---

class CommentCreate(BaseModel):
    # Unknown keys are rejected rather than dropped; numbers and null are
    # never coerced to text.
    model_config = ConfigDict(extra="forbid", strict=True)

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    message: str = Field(min_length=1, max_length=MESSAGE_MAX_LENGTH)


class CommentResponse(BaseModel):
    id: str
    name: str
    message: str
    created_at: datetime


# --- Errors ---

class FieldErrorResponse(BaseModel):
    field: str
    reason: str
    detail: str


class ErrorResponse(BaseModel):
    message: str
    errors: list[FieldErrorResponse] | None = None


# --- Service info ---

class HealthResponse(BaseModel):
    status: str
    version: str


class WelcomeResponse(BaseModel):
    message: str
    version: str
    endpoints: dict[str, str]
