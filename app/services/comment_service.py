"""
Comment service: the two guest book operations.

Entries are append-only: there is no update or delete path.  Input is
validated before the gateway is called, so an invalid request never
reaches the store.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from app.gateway import CommentGateway
from app.models import Comment
from app.validation import require_valid_comment

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # Some drivers (SQLite) hand back naive timestamps; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def serialize_comment(comment: Comment) -> dict:
    return {
        "id": str(comment.id),
        "name": comment.name,
        "message": comment.message,
        "created_at": _as_utc(comment.created_at).isoformat() if comment.created_at else None,
    }


async def create_comment(gateway: CommentGateway, payload: Any) -> dict:
    """
    Validate *payload* and persist it as a new entry.

    Raises ``ValidationError`` before any store access when the payload
    breaks the contract, and ``PersistenceError`` when the store rejects
    the write.  Only ``name`` and ``message`` are forwarded.
    """
    data = require_valid_comment(payload)
    comment = await gateway.insert(data.name, data.message)
    logger.info("Comment %s created", comment.id)
    return serialize_comment(comment)


async def list_comments(gateway: CommentGateway) -> list[dict]:
    """Return every entry, newest first.  An empty guest book yields ``[]``."""
    return [serialize_comment(c) for c in await gateway.list_all()]
