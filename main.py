#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DailyFocus - точка входа
Запуск REST API через uvicorn

Версия: 1.0.0
Дата: 2025-10-19
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from config import LogLevel, get_settings
from utils.logger import setup_logger

logger = logging.getLogger('dailyfocus')


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description='Запуск DailyFocus API')
    parser.add_argument('--host', default=settings.HOST, help='Хост сервера')
    parser.add_argument('--port', type=int, default=settings.PORT, help='Порт сервера')
    parser.add_argument('--reload', action='store_true', help='Автоперезагрузка при изменениях')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Уровень логирования (перекрывает DAILYFOCUS_LOG_LEVEL)')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Главная функция запуска веб-сервера"""
    args = parse_args(argv)
    settings = get_settings()
    if args.log_level:
        settings = settings.model_copy(update={'LOG_LEVEL': LogLevel(args.log_level)})

    setup_logger(settings)
    logger.info(f"🚀 Запуск веб-сервера на http://{args.host}:{args.port}")
    if settings.DEBUG:
        logger.info(f"📚 API документация: http://{args.host}:{args.port}/api/docs")

    try:
        uvicorn.run(
            "web.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=settings.LOG_LEVEL.value.lower(),
            log_config=None,
        )
    except KeyboardInterrupt:
        logger.info("👋 Сервер остановлен пользователем")
    except Exception as e:
        logger.error(f"💥 Критическая ошибка: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
