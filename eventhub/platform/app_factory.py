"""
FastAPI app factory: middleware, error mapping, routers, health and metrics.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from eventhub.platform.config.core_setting import settings
from eventhub.platform.exception.exception_handlers import register_exception_handlers
from eventhub.platform.observability.tracing import TracingConfig
from eventhub.service.ticketing.driving_adapter.http_controller import (
    booking_controller,
    dashboard_controller,
    event_controller,
    notification_controller,
    user_controller,
)


ROUTERS: list[tuple[str, APIRouter]] = [
    ('/auth', user_controller.router),
    ('/events', event_controller.router),
    ('/bookings', booking_controller.router),
    ('/notifications', notification_controller.router),
    ('/dashboard', dashboard_controller.router),
]


def create_app(*, lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]]) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description='Event ticketing: catalogue, bookings, notifications and dashboards',
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Must run before routes are mounted
    TracingConfig.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    register_exception_handlers(app)

    for prefix, router in ROUTERS:
        app.include_router(router, prefix=prefix, tags=[prefix.strip('/')])

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def metrics() -> PlainTextResponse:
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app
