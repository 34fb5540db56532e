# services/__init__.py

"""
Сервисы DailyFocus: бизнес-логика поверх хранилища записей
"""

from .habit_service import HabitService, check_in
from .timer_service import TimerService, compute_duration_minutes
from .task_service import TaskService
from .note_service import NoteService
from .stats_service import StatsService
from .ai_service import AIService

__all__ = [
    'HabitService',
    'check_in',
    'TimerService',
    'compute_duration_minutes',
    'TaskService',
    'NoteService',
    'StatsService',
    'AIService',
]
