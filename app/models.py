from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.functions import FunctionElement

from app.database import Base
from app.schemas import MESSAGE_MAX_LENGTH, NAME_MAX_LENGTH


class gen_random_uuid(FunctionElement):
    """Server-side UUID generator (built into PostgreSQL 13+)."""

    type = Uuid()
    inherit_cache = True


@compiles(gen_random_uuid)
def _compile_gen_random_uuid(element, compiler, **kw):
    return "gen_random_uuid()"


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------
class Comment(Base):
    """One guest book entry.  Rows are append-only: never updated or deleted."""

    __tablename__ = "comments"

    # id and created_at are assigned by the store at insert time; the INSERT
    # only carries name and message.
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, server_default=gen_random_uuid())
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    message: Mapped[str] = mapped_column(String(MESSAGE_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    __mapper_args__ = {"eager_defaults": True}
