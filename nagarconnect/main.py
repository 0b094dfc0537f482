import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from nagarconnect.core.config import Settings, get_settings
from nagarconnect.core.errors import register_error_handlers
from nagarconnect.core.logging import configure_logging
from nagarconnect.core.middleware import RequestIdMiddleware
from nagarconnect.db.db import Database
from nagarconnect.functions.send_notification import create_notification_function
from nagarconnect.providers import EmailProvider, get_email_provider
from nagarconnect.routers import admin, approvals, auth, community, issues, notifications, profile, realtime
from nagarconnect.services.dispatch_client import NotificationDispatcherClient
from nagarconnect.storage import PUBLIC_PREFIX, LocalStorageProvider

load_dotenv()

logger = logging.getLogger(__name__)

NOTIFICATION_FUNCTION_PATH = "/functions/v1/send-notification"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up...")
    os.makedirs(app.state.settings.storage_dir, exist_ok=True)
    app.state.db.create_db_and_tables()
    logger.info("DB ready.")
    yield
    logger.info("Shutting down...")
    app.state.db.dispose()


def create_app(
    settings: Optional[Settings] = None,
    email_provider: Optional[EmailProvider] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    database = Database(settings.database_url, echo=settings.sql_echo)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database
    app.state.storage = LocalStorageProvider(settings.storage_dir, settings.public_base_url)

    # send-notification runs as its own app; in-process unless a URL is configured
    notification_fn = create_notification_function(
        database,
        settings,
        email_provider or get_email_provider(settings),
    )
    app.state.notification_function = notification_fn
    app.state.dispatcher = NotificationDispatcherClient(
        url=settings.notification_function_url or None,
        app=notification_fn,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    register_error_handlers(app)

    # Register routers
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(profile.router, prefix="/auth", tags=["Profile"])
    app.include_router(issues.router, prefix="/issues", tags=["Issues"])
    app.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
    app.include_router(approvals.router, prefix="/approvals", tags=["Approvals"])
    app.include_router(community.router, prefix="/community", tags=["Community"])
    app.include_router(admin.router, prefix="/admin", tags=["Admin"])
    app.include_router(realtime.router, prefix="/realtime", tags=["Realtime"])

    app.mount(NOTIFICATION_FUNCTION_PATH, notification_fn, name="send-notification")
    app.mount(
        PUBLIC_PREFIX,
        StaticFiles(directory=settings.storage_dir, check_dir=False),
        name="storage",
    )

    @app.get("/")
    def root():
        return {"status": "ok"}

    return app
