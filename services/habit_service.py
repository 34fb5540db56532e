"""
Сервис привычек: отметки выполнения и подсчёт серий
"""

import logging
from datetime import datetime, tzinfo
from typing import Optional

from core.exceptions import AlreadyCheckedInToday
from core.models import Habit, HabitFrequency
from core.storage import HABITS
from services.base import StoreBackedService
from utils.datetime_utils import is_same_day, is_previous_day

logger = logging.getLogger(__name__)


def check_in(habit: Habit, now: datetime, tz: tzinfo) -> Habit:
    """
    Отметка привычки в момент now.

    Дни сравниваются по календарю в часовом поясе tz, а не как 24-часовое окно.
    Повторная отметка в тот же день -> AlreadyCheckedInToday, привычка не меняется.
    Отметка на следующий день продлевает серию, любой больший разрыв начинает
    серию заново с 1. Возвращает новую копию привычки.
    """
    last = habit.last_completed_at

    if last is None:
        current = 1
    elif is_same_day(last, now, tz):
        raise AlreadyCheckedInToday(habit.id)
    elif is_previous_day(last, now, tz):
        current = habit.current_streak + 1
    else:
        current = 1

    best = max(habit.best_streak, current)
    return habit.with_streak(current, best, now)


class HabitService(StoreBackedService):
    """Привычки поверх хранилища записей"""

    kind = HABITS
    model = Habit
    label = "Habit"

    def create(self, name: str, description: Optional[str] = None,
               frequency: str = HabitFrequency.DAILY.value) -> Habit:
        habit = Habit.create(name, self.clock.now(), description=description, frequency=frequency)
        saved = self._save(habit)
        logger.info(f"🌱 Создана привычка {saved.id}: {saved.name}")
        return saved

    def check_in(self, habit_id: str) -> Habit:
        with self.locks.hold(habit_id):
            habit = self.get(habit_id)
            try:
                updated = check_in(habit, self.clock.now(), self.clock.tz)
            except AlreadyCheckedInToday:
                logger.info(f"🔁 Привычка {habit_id} уже отмечена сегодня")
                raise
            saved = self._save(updated)

        logger.info(
            f"🔥 Привычка {habit_id}: серия {saved.current_streak} "
            f"(лучшая {saved.best_streak})"
        )
        return saved
