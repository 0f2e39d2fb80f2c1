from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Managed store. Both are required, but only checked when the
    # persistence gateway first builds its engine.
    DATABASE_URL: str | None = None
    DATABASE_KEY: str | None = None

    APP_ENV: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:3001"]
    FRONTEND_URL: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def use_async_driver(cls, v):
        """Hosted Postgres providers hand out postgresql:// URLs; asyncpg is required."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    @property
    def allowed_origins(self) -> list[str]:
        """Local development origins plus the production frontend, de-duplicated."""
        origins: list[str] = []
        for origin in [*self.CORS_ORIGINS, self.FRONTEND_URL]:
            if origin and origin not in origins:
                origins.append(origin)
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
