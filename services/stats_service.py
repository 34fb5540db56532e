"""
Сводная аналитика по задачам, сессиям и привычкам
"""

import logging
from collections import defaultdict
from typing import Dict, Any

from core.models import Task, FocusSession, Habit, SessionType, TaskPriority
from core.storage import BaseStorage, TASKS, FOCUS_SESSIONS, HABITS

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


class StatsService:
    """Статистика для дашборда и страницы аналитики"""

    def __init__(self, storage: BaseStorage):
        self.storage = storage

    def get_summary(self) -> Dict[str, Any]:
        tasks = [Task.from_dict(r) for r in self.storage.list(TASKS)]
        sessions = [FocusSession.from_dict(r) for r in self.storage.list(FOCUS_SESSIONS)]
        habits = [Habit.from_dict(r) for r in self.storage.list(HABITS)]

        return {
            "tasks": self._tasks_stats(tasks),
            "focus": {
                "total_minutes": sum(s.duration_minutes or 0 for s in sessions),
                "focus_sessions": len([s for s in sessions if s.session_type == SessionType.FOCUS.value]),
            },
            "habits": {
                "active": len(habits),
                "total_streak": sum(h.current_streak for h in habits),
                "longest_current_streak": max((h.current_streak for h in habits), default=0),
            },
        }

    def _tasks_stats(self, tasks) -> Dict[str, Any]:
        total = len(tasks)
        completed = [t for t in tasks if t.is_completed]

        completed_by_priority = {p.value: 0 for p in TaskPriority}
        for task in completed:
            completed_by_priority[task.priority] += 1

        categories = defaultdict(int)
        for task in tasks:
            categories[task.category or UNCATEGORIZED] += 1

        return {
            "total": total,
            "completed": len(completed),
            "completion_rate": round(len(completed) / total * 100) if total > 0 else 0,
            "completed_by_priority": completed_by_priority,
            "by_category": dict(categories),
        }
