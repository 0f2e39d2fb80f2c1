from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.errors import ConfigurationError


class Base(DeclarativeBase):
    pass


def build_database_url(database_url: str | None, database_key: str | None) -> URL:
    """
    Combine the store endpoint and its access key into one connection URL.

    The key always wins over any password embedded in *database_url*, so
    the credential can be rotated without touching the endpoint value.
    Raises ``ConfigurationError`` when either value is missing.
    """
    missing = [
        name
        for name, value in (("DATABASE_URL", database_url), ("DATABASE_KEY", database_key))
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Missing database configuration: {', '.join(missing)}. "
            "Set them in the environment or the .env file."
        )
    try:
        url = make_url(database_url)
    except ArgumentError as exc:
        raise ConfigurationError(f"Invalid DATABASE_URL: {exc}") from exc
    return url.set(password=database_key)


def build_engine(database_url: str | None, database_key: str | None, *, echo: bool = False) -> AsyncEngine:
    return create_async_engine(
        build_database_url(database_url, database_key),
        echo=echo,
        pool_pre_ping=True,
    )
