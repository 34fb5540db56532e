#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DailyFocus - FastAPI Application
REST API: задачи, фокус-таймер, привычки, заметки и AI помощники

Версия: 1.0.0
Дата: 2025-10-19
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from core.exceptions import (
    NotFoundError,
    AlreadyCheckedInToday,
    ValidationError,
    StorageError,
    AIServiceError,
    AIUnavailableError,
)
from core.storage import BaseStorage, KINDS
from services.ai_service import AIService
from utils.datetime_utils import Clock
from .api import ai, focus, habits, notes, stats, tasks
from .dependencies import ServiceManager
from .schemas import HealthCheck

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[BaseStorage] = None,
               clock: Optional[Clock] = None, ai_service: Optional[AIService] = None) -> FastAPI:
    """Сборка приложения; хранилище, часы и AI можно передать извне"""
    settings = settings or get_settings()
    services = ServiceManager(settings, storage=storage, clock=clock, ai_service=ai_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        logger.info(f"🚀 Запуск {settings.APP_NAME} v{settings.VERSION} ({settings.ENVIRONMENT.value})")
        logger.info(f"🕒 Часовой пояс: {settings.TIMEZONE}")
        for kind in KINDS:
            logger.info(f"📊 {kind}: {services.storage.count(kind)}")
        yield
        logger.info("🛑 Остановка приложения...")
        await services.shutdown()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Задачи, фокус-таймер, привычки и заметки с AI помощниками",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services
    app.state.start_time = time.time()

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Логирование запросов и время обработки"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if request.url.path.startswith("/api"):
            logger.info(
                f"{request.method} {request.url.path} "
                f"- {response.status_code} "
                f"- {process_time:.3f}s"
            )
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    register_exception_handlers(app)

    # ===== ПОДКЛЮЧЕНИЕ API РОУТЕРОВ =====

    for module in (tasks, focus, habits, notes, ai, stats):
        app.include_router(module.router)

    @app.get("/health", response_model=HealthCheck, tags=["system"])
    async def health_check(request: Request):
        """Health check для мониторинга"""
        manager: ServiceManager = request.app.state.services
        return HealthCheck(
            status="healthy",
            service=settings.APP_NAME,
            version=settings.VERSION,
            timestamp=time.time(),
            data={
                "storage_backend": settings.STORAGE_BACKEND,
                "timezone": settings.TIMEZONE,
                "ai_enabled": manager.ai.enabled,
                "uptime_seconds": round(time.time() - request.app.state.start_time, 3),
            },
        )

    return app


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Перевод доменных ошибок в HTTP ответы"""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, f"{exc.kind} not found")

    @app.exception_handler(AlreadyCheckedInToday)
    async def already_checked_in_handler(request: Request, exc: AlreadyCheckedInToday):
        return _error(409, str(exc))

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error(422, str(exc))

    @app.exception_handler(AIUnavailableError)
    async def ai_unavailable_handler(request: Request, exc: AIUnavailableError):
        return _error(503, str(exc))

    @app.exception_handler(AIServiceError)
    async def ai_error_handler(request: Request, exc: AIServiceError):
        return _error(502, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"❌ Ошибка хранилища: {exc}")
        return _error(500, "Storage error")
