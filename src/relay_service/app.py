from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relay_service.api.middleware.request_context import RequestContextMiddleware
from relay_service.api.v1.routers import health, messages, participants, status
from relay_service.application.exceptions import (
    ConflictError,
    MessageValidationError,
    NotFoundError,
    UnknownSenderError,
    ValidationError,
)
from relay_service.application.ports.clock import Clock, SystemClock
from relay_service.application.uow import UoWFactory
from relay_service.config import Settings, settings
from relay_service.infrastructure.memory.uow import InMemoryChatState, InMemoryUoW
from relay_service.workers.presence_sweeper import PresenceSweeper

logger = logging.getLogger(__name__)


def _build_uow_factory(cfg: Settings) -> UoWFactory:
    if cfg.STORAGE_BACKEND == "postgres":
        from relay_service.infrastructure.db.session import sqlalchemy_uow

        return sqlalchemy_uow

    state = InMemoryChatState()
    return lambda: InMemoryUoW(state)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    sweeper = PresenceSweeper(
        app.state.uow_factory,
        app.state.clock,
        settings.BROADCAST_TARGET,
        interval=settings.PRESENCE_SWEEP_INTERVAL,
        timeout=settings.PRESENCE_TIMEOUT,
    )
    await sweeper.start()
    app.state.sweeper = sweeper

    yield

    await sweeper.stop()
    if settings.STORAGE_BACKEND == "postgres":
        from relay_service.infrastructure.db.session import engine

        await engine.dispose()
        logger.info("Database engine disposed")


def create_app(
    *,
    clock: Clock | None = None,
    uow_factory: UoWFactory | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Relay Chat Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.clock = clock or SystemClock()
    app.state.uow_factory = uow_factory or _build_uow_factory(settings)
    logger.info("Using %s storage backend", settings.STORAGE_BACKEND)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(participants.router)
    app.include_router(status.router)
    app.include_router(messages.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UnknownSenderError)
    async def _unknown_sender(_req: Request, exc: UnknownSenderError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ConflictError)
    async def _conflict(_req: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": exc.detail})

    @app.exception_handler(MessageValidationError)
    async def _message_invalid(_req: Request, exc: MessageValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.errors})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})
