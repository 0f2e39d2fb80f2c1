"""
Persistence gateway: the single owner of the connection to the managed store.

The gateway is constructed once per process (see ``app.main.create_app``)
and shared by every request.  It does not touch the network until the
first ``insert`` / ``list_all`` call; at that point it builds its async
engine from the configured endpoint and key, failing with
``ConfigurationError`` if either is missing.  After that the engine is
never replaced, so concurrent requests can share it without locking.

Store failures are not retried: any SQLAlchemy or connection error is
wrapped in ``PersistenceError`` and surfaced immediately.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.config import Settings
from app.database import build_engine
from app.errors import PersistenceError
from app.middleware import install_query_counter
from app.models import Comment

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    # DBAPI errors carry the driver's message; the wrapper adds SQL noise.
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc) or exc.__class__.__name__


class CommentGateway:
    def __init__(
        self,
        database_url: str | None = None,
        database_key: str | None = None,
        *,
        engine: AsyncEngine | None = None,
        echo: bool = False,
    ) -> None:
        self._database_url = database_url
        self._database_key = database_key
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        if engine is not None:
            self._bind(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CommentGateway":
        return cls(settings.DATABASE_URL, settings.DATABASE_KEY, echo=settings.DEBUG)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _bind(self, engine: AsyncEngine) -> None:
        install_query_counter(engine)
        self._engine = engine
        self._sessionmaker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    def _get_sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is None:
            # Raises ConfigurationError when the endpoint or key is absent.
            engine = build_engine(self._database_url, self._database_key, echo=self._echo)
            self._bind(engine)
            logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
        return self._sessionmaker

    @property
    def engine(self) -> AsyncEngine | None:
        return self._engine

    async def dispose(self) -> None:
        """Close the connection pool.  Called once at application shutdown."""
        if self._engine is not None:
            await self._engine.dispose()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def insert(self, name: str, message: str) -> Comment:
        """
        Write one row and return it as stored.

        The row is re-read after commit so ``id`` and ``created_at`` are
        the values the store actually holds.
        """
        sessionmaker = self._get_sessionmaker()
        try:
            async with sessionmaker() as session:
                comment = Comment(name=name, message=message)
                session.add(comment)
                await session.commit()
                await session.refresh(comment)
                return comment
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Comment insert failed: %s", _describe(exc))
            raise PersistenceError(f"Failed to create comment: {_describe(exc)}") from exc

    async def list_all(self) -> list[Comment]:
        """Return every row, newest ``created_at`` first."""
        sessionmaker = self._get_sessionmaker()
        try:
            async with sessionmaker() as session:
                result = await session.execute(select(Comment).order_by(Comment.created_at.desc()))
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Comment listing failed: %s", _describe(exc))
            raise PersistenceError(f"Failed to fetch comments: {_describe(exc)}") from exc
