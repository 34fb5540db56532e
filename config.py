#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DailyFocus - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
Дата: 2025-10-19
"""

import sys
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Настройки приложения DailyFocus"""

    model_config = SettingsConfigDict(
        env_prefix="DAILYFOCUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(default="DailyFocus", description="Название приложения")
    VERSION: str = Field(default="1.0.0", description="Версия API")
    ENVIRONMENT: Environment = Field(default=Environment.DEVELOPMENT, description="Среда выполнения")
    DEBUG: bool = Field(default=False, description="Режим отладки (включает /api/docs)")

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    HOST: str = Field(default="0.0.0.0", description="Хост сервера")
    PORT: int = Field(default=5000, description="Порт сервера")
    ALLOWED_ORIGINS: List[str] = Field(default=["*"], description="Разрешенные источники для CORS")

    # ===== ВРЕМЯ =====

    TIMEZONE: str = Field(
        default="UTC",
        description="Часовой пояс, в котором сравниваются календарные дни привычек"
    )

    # ===== ХРАНИЛИЩЕ =====

    STORAGE_BACKEND: str = Field(default="memory", description="Бэкенд хранилища (memory/json)")
    DATA_DIR: Path = Field(default=Path("data"), description="Директория JSON файлов")

    # ===== ЛОГИРОВАНИЕ =====

    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO, description="Уровень логирования")
    LOG_FORMAT: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="Формат логов"
    )
    LOG_DIR: Path = Field(default=Path("logs"), description="Директория логов")
    LOG_TO_FILE: bool = Field(default=False, description="Писать логи в файл")

    # ===== AI =====

    OPENAI_API_KEY: Optional[str] = Field(default=None, description="Ключ OpenAI API")
    OPENAI_MODEL: str = Field(default="gpt-4o-mini", description="Модель OpenAI")
    OPENAI_MAX_TOKENS: int = Field(default=1000, ge=1, description="Лимит токенов ответа")
    AI_TIMEOUT: int = Field(default=30, ge=1, description="Таймаут запроса к AI, секунды")

    # ===== ВАЛИДАТОРЫ =====

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"Порт {v} вне допустимого диапазона (1-65535)")
        return v

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Неизвестный часовой пояс: {v}")
        return v

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "json"):
            raise ValueError("STORAGE_BACKEND должен быть memory или json")
        return v

    @field_validator("OPENAI_API_KEY")
    @classmethod
    def empty_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    # ===== МЕТОДЫ =====

    @property
    def ai_enabled(self) -> bool:
        return bool(self.OPENAI_API_KEY)

    def get_logging_config(self) -> Dict[str, Any]:
        """Конфигурация для logging.config.dictConfig"""
        handlers = ['console']
        if self.LOG_TO_FILE:
            handlers.append('file')

        config: Dict[str, Any] = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.LOG_FORMAT,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.LOG_LEVEL.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.LOG_LEVEL.value,
                    'handlers': handlers,
                },
                'httpx': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'openai': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
            }
        }

        if self.LOG_TO_FILE:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.LOG_LEVEL.value,
                'formatter': 'default',
                'filename': str(self.LOG_DIR / f"dailyfocus_{self.ENVIRONMENT.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация без секретов"""
        return {
            'app_name': self.APP_NAME,
            'version': self.VERSION,
            'environment': self.ENVIRONMENT.value,
            'timezone': self.TIMEZONE,
            'storage_backend': self.STORAGE_BACKEND,
            'ai_enabled': self.ai_enabled,
            'log_level': self.LOG_LEVEL.value,
        }


@lru_cache()
def get_settings() -> Settings:
    """Глобальный экземпляр настроек"""
    return Settings()


__all__ = [
    'Settings',
    'get_settings',
    'Environment',
    'LogLevel',
]
