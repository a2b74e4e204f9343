"""
Production FastAPI Application

Creates tables, seeds the first admin and serves the reading room API.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
    get_session_maker,
)
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.reading_room.app.command.user_command_use_case import UserCommandUseCase


async def seed_initial_admin() -> None:
    async with get_session_maker()() as session:
        use_case = UserCommandUseCase(
            uow=SqlAlchemyUnitOfWork(session),
            password_hasher=container.password_hasher(),
        )
        await use_case.seed_admin(
            email=settings.INITIAL_ADMIN_EMAIL,
            password=settings.INITIAL_ADMIN_PASSWORD.get_secret_value(),
            name=settings.INITIAL_ADMIN_NAME,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Reading Room] Starting up...')

    tracing = TracingConfig()
    tracing.setup()
    Logger.base.info('📊 [Reading Room] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Reading Room] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    await create_db_and_tables()
    await seed_initial_admin()
    Logger.base.info('✅ [Reading Room] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Reading Room] Shutting down...')
    await dispose_engine()
    Logger.base.info('🗄️  [Reading Room] Database engine disposed')

    # Flush remaining spans
    tracing.shutdown()

    container.unwire()
    cleanup()
    Logger.base.info('👋 [Reading Room] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
