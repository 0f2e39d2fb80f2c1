"""
Request handling for the comments endpoints, independent of the web framework.

Each handler runs the whole chain (parse body, validate, call the
service, map the outcome to a status code and JSON body) and returns a
``Reply``.  The FastAPI routes only turn a ``Reply`` into a response, so
the complete request/response contract is testable without a server.
"""
import json
import logging
from typing import Any, NamedTuple

from app.errors import ConfigurationError, FieldError, GuestBookError, ValidationError
from app.gateway import CommentGateway
from app.services import comment_service

logger = logging.getLogger(__name__)


class Reply(NamedTuple):
    status_code: int
    body: Any


def parse_body(raw: bytes) -> Any:
    if not raw or not raw.strip():
        raise ValidationError([FieldError("body", "invalid_body", "Request body is required")])
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError(
            [FieldError("body", "invalid_body", f"Request body is not valid JSON: {exc}")]
        ) from exc


def error_reply(exc: GuestBookError) -> Reply:
    return Reply(exc.http_status, exc.to_response())


def _failure_reply(exc: GuestBookError) -> Reply:
    if isinstance(exc, ValidationError):
        logger.warning("Rejected comment: %s", exc.message)
    elif isinstance(exc, ConfigurationError):
        logger.critical("Store is not configured: %s", exc.message)
    # PersistenceError is logged by the gateway with the store's detail.
    return error_reply(exc)


async def handle_create(gateway: CommentGateway, raw_body: bytes) -> Reply:
    try:
        payload = parse_body(raw_body)
        comment = await comment_service.create_comment(gateway, payload)
    except GuestBookError as exc:
        return _failure_reply(exc)
    return Reply(201, comment)


async def handle_list(gateway: CommentGateway) -> Reply:
    try:
        comments = await comment_service.list_comments(gateway)
    except GuestBookError as exc:
        return _failure_reply(exc)
    return Reply(200, comments)
