#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DailyFocus - Exceptions
Иерархия исключений приложения

Версия: 1.0.0
Дата: 2025-10-19
"""

from typing import Optional


class DailyFocusError(Exception):
    """Базовое исключение приложения"""
    pass

# ===== ДОМЕННЫЕ ОШИБКИ =====

class NotFoundError(DailyFocusError):
    """Запрошенная сущность не существует"""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")


class AlreadyCheckedInToday(DailyFocusError):
    """Привычка уже отмечена в текущий календарный день"""

    def __init__(self, habit_id: Optional[str] = None):
        self.habit_id = habit_id
        super().__init__("Already checked in today")


class ValidationError(DailyFocusError):
    """Ошибка валидации данных"""
    pass

# ===== ХРАНИЛИЩЕ =====

class StorageError(DailyFocusError):
    """Базовое исключение для ошибок хранилища"""
    pass


class StorageCorruptionError(StorageError):
    """Ошибка повреждения данных"""
    pass

# ===== AI =====

class AIServiceError(DailyFocusError):
    """Ошибка обращения к языковой модели"""
    pass


class AIUnavailableError(AIServiceError):
    """AI функции не настроены (нет API ключа)"""
    pass
