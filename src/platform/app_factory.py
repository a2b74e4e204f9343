"""FastAPI app assembly shared by main.py and the API tests"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.reading_room.driving_adapter.http_controller.expense_controller import (
    router as expense_router,
)
from src.service.reading_room.driving_adapter.http_controller.fee_controller import (
    router as fee_router,
)
from src.service.reading_room.driving_adapter.http_controller.grievance_controller import (
    router as grievance_router,
)
from src.service.reading_room.driving_adapter.http_controller.inventory_controller import (
    router as inventory_router,
)
from src.service.reading_room.driving_adapter.http_controller.location_controller import (
    router as location_router,
)
from src.service.reading_room.driving_adapter.http_controller.log_controller import (
    router as log_router,
)
from src.service.reading_room.driving_adapter.http_controller.member_controller import (
    router as member_router,
)
from src.service.reading_room.driving_adapter.http_controller.payment_controller import (
    router as payment_router,
)
from src.service.reading_room.driving_adapter.http_controller.seat_controller import (
    router as seat_router,
)
from src.service.reading_room.driving_adapter.http_controller.subscription_controller import (
    router as subscription_router,
)
from src.service.reading_room.driving_adapter.http_controller.user_controller import (
    router as user_router,
)
from src.service.reading_room.driving_adapter.http_controller.waiting_controller import (
    router as waiting_router,
)


ROUTERS = (
    ('user', user_router),
    ('location', location_router),
    ('member', member_router),
    ('seat', seat_router),
    ('subscription', subscription_router),
    ('waiting', waiting_router),
    ('payment', payment_router),
    ('inventory', inventory_router),
    ('expense', expense_router),
    ('grievance', grievance_router),
    ('fee', fee_router),
    ('log', log_router),
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Seats, subscriptions and waiting lists for reading room locations',
) -> FastAPI:
    """
    Args:
        lifespan: startup/shutdown hook, tests pass one that skips the database
        title_suffix: e.g. ' (Test)'
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Before the routes are mounted
    TracingConfig().instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    for prefix, router in ROUTERS:
        app.include_router(router, prefix=f'/api/{prefix}', tags=[prefix])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        return {
            'status': 'healthy',
            'service': settings.SERVICE_NAME,
            'version': settings.VERSION,
        }

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
