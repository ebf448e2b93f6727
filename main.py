import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.use_cases.notifications import NotificationFanout
from app.config import get_settings
from app.infrastructure import database
from app.infrastructure.database import initialize_database
from app.infrastructure.notifications import NotificationDispatcher, PresenceRegistry
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def _attach_notification_services(app: FastAPI) -> None:
    registry = PresenceRegistry()
    dispatcher = NotificationDispatcher(registry)
    app.state.presence = registry
    app.state.dispatcher = dispatcher
    app.state.fanout = NotificationFanout(dispatcher, database.SessionLocal)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup and release connections on shutdown."""

    initialize_database()
    logger.info("Application started")
    yield
    await app.state.dispatcher.drain()
    app.state.presence.clear()
    database.engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Social Notifications API", lifespan=lifespan)
    _attach_notification_services(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
