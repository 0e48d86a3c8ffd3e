"""
Production FastAPI Application

Ticketing API: authentication, event management, bookings, notifications
and dashboards.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from granian import Granian
from granian.constants import Interfaces

from eventhub.platform.app_factory import create_app
from eventhub.platform.config.core_setting import settings
from eventhub.platform.config.di import container
from eventhub.platform.config.wire_modules import WIRE_MODULES
from eventhub.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
)
from eventhub.platform.logging.loguru_io import Logger
from eventhub.platform.observability.tracing import TracingConfig
from eventhub.service.ticketing.app.query.user_query_use_case import UserUseCase


async def bootstrap_admin() -> None:
    """Create the configured admin account if it does not exist yet"""
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return

    use_case = UserUseCase(
        user_command_repo=container.user_command_repo(),
        user_query_repo=container.user_query_repo(),
        password_hasher=container.password_hasher(),
    )
    await use_case.ensure_admin(
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD.get_secret_value(),
        name=settings.ADMIN_NAME,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [EventHub] Starting up...')

    tracing = TracingConfig()
    tracing.setup()
    Logger.base.info('📊 [EventHub] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [EventHub] Dependency injection wired')

    engine = get_engine()
    if tracing.is_exporting:
        tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [EventHub] Database engine ready')

    if settings.AUTO_CREATE_TABLES:
        await create_db_and_tables()
        Logger.base.info('🧱 [EventHub] Tables ensured')

    container.notification_event_handler().subscribe_to(container.domain_event_bus())
    Logger.base.info('📡 [EventHub] Notification handler subscribed to booking events')

    await bootstrap_admin()

    Logger.base.info('✅ [EventHub] Ready to serve requests')

    yield

    Logger.base.info('🛑 [EventHub] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️  [EventHub] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [EventHub] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')


def run() -> None:
    Granian(
        'eventhub.service.ticketing.main:app',
        address=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        interface=Interfaces.ASGI,
        workers=settings.HTTP_WORKERS,
    ).serve()


if __name__ == '__main__':
    run()
