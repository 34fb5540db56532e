#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DailyFocus - API Dependencies
Провайдеры сервисов для FastAPI приложения

Версия: 1.0.0
Дата: 2025-10-19
"""

import logging
from typing import Optional

from fastapi import Request

from config import Settings
from core.storage import BaseStorage, create_storage
from services.ai_service import AIService
from services.habit_service import HabitService
from services.note_service import NoteService
from services.stats_service import StatsService
from services.task_service import TaskService
from services.timer_service import TimerService
from utils.datetime_utils import Clock
from utils.locks import KeyedLock

logger = logging.getLogger(__name__)


class ServiceManager:
    """
    Контейнер сервисов приложения

    Хранилище, часы и AI клиент создаются один раз и передаются сервисам,
    чтобы тесты могли подменить любой из них.
    """

    def __init__(self, settings: Settings, storage: Optional[BaseStorage] = None,
                 clock: Optional[Clock] = None, ai_service: Optional[AIService] = None):
        self.settings = settings
        self.storage = storage or create_storage(settings.STORAGE_BACKEND, settings.DATA_DIR)
        self.clock = clock or Clock(settings.TIMEZONE)
        self.locks = KeyedLock()

        self.tasks = TaskService(self.storage, self.clock, self.locks)
        self.habits = HabitService(self.storage, self.clock, self.locks)
        self.sessions = TimerService(self.storage, self.clock, self.locks)
        self.notes = NoteService(self.storage, self.clock, self.locks)
        self.stats = StatsService(self.storage)
        self.ai = ai_service or AIService(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            max_tokens=settings.OPENAI_MAX_TOKENS,
            timeout=settings.AI_TIMEOUT,
        )
        logger.info("✅ Сервисы инициализированы")

    async def shutdown(self) -> None:
        await self.ai.close()
        self.storage.close()
        logger.info("🧹 Сервисы остановлены")


def get_services(request: Request) -> ServiceManager:
    return request.app.state.services


def get_task_service(request: Request) -> TaskService:
    return get_services(request).tasks


def get_habit_service(request: Request) -> HabitService:
    return get_services(request).habits


def get_timer_service(request: Request) -> TimerService:
    return get_services(request).sessions


def get_note_service(request: Request) -> NoteService:
    return get_services(request).notes


def get_stats_service(request: Request) -> StatsService:
    return get_services(request).stats


def get_ai_service(request: Request) -> AIService:
    return get_services(request).ai
