import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.error_handlers import register_error_handlers
from app.gateway import CommentGateway
from app.logging_config import setup_logging
from app.middleware import TimingMiddleware
from app.routers import comments, service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info("Guest Book API starting (env=%s)", settings.APP_ENV)
    yield
    await app.state.gateway.dispose()
    logger.info("Guest Book API stopped")


def create_app(settings: Settings | None = None, gateway: CommentGateway | None = None) -> FastAPI:
    """
    Build the application with exactly one persistence gateway.

    *gateway* lets tests substitute a fake or a gateway bound to a test
    engine; by default one is built from *settings*.  No database
    connection is opened here.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Guest Book API",
        description="Post a name and message, list all entries newest first",
        version=service.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = gateway or CommentGateway.from_settings(settings)

    # Middleware
    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers
    app.include_router(service.router)
    app.include_router(comments.router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
