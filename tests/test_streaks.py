"""Tests for habit check-in and streak computation."""

import threading
import time
from datetime import timedelta

import pytest
import pytz

from conftest import local
from core.exceptions import AlreadyCheckedInToday, NotFoundError
from core.models import Habit
from core.storage import MemoryStorage
from services.habit_service import HabitService, check_in
from utils.locks import KeyedLock

UTC = pytz.utc


def make_habit(now, current=0, best=0, last=None):
    habit = Habit.create("Read 20 pages", now - timedelta(days=30))
    habit.current_streak = current
    habit.best_streak = best
    habit.last_completed_at = last
    return habit


# ---- pure check_in ----


def test_first_check_in_starts_streak(utc_now):
    result = check_in(make_habit(utc_now), utc_now, UTC)
    assert result.current_streak == 1
    assert result.best_streak == 1
    assert result.last_completed_at == utc_now


def test_consecutive_day_extends_streak(utc_now):
    habit = make_habit(utc_now, current=3, best=5, last=utc_now - timedelta(days=1))
    result = check_in(habit, utc_now, UTC)
    assert result.current_streak == 4
    assert result.best_streak == 5


def test_gap_resets_streak_to_one(utc_now):
    habit = make_habit(utc_now, current=4, best=4, last=utc_now - timedelta(days=3))
    result = check_in(habit, utc_now, UTC)
    assert result.current_streak == 1
    assert result.best_streak == 4


def test_two_day_gap_resets(utc_now):
    habit = make_habit(utc_now, current=7, best=7, last=utc_now - timedelta(days=2))
    assert check_in(habit, utc_now, UTC).current_streak == 1


def test_same_day_rejected_and_habit_unchanged(utc_now):
    last = utc_now - timedelta(hours=2)
    habit = make_habit(utc_now, current=2, best=3, last=last)
    with pytest.raises(AlreadyCheckedInToday):
        check_in(habit, utc_now, UTC)
    assert habit.current_streak == 2
    assert habit.best_streak == 3
    assert habit.last_completed_at == last


def test_check_in_returns_copy(utc_now):
    habit = make_habit(utc_now)
    result = check_in(habit, utc_now, UTC)
    assert result is not habit
    assert habit.current_streak == 0


def test_best_streak_grows_with_current(utc_now):
    habit = make_habit(utc_now, current=5, best=5, last=utc_now - timedelta(days=1))
    result = check_in(habit, utc_now, UTC)
    assert (result.current_streak, result.best_streak) == (6, 6)


# ---- calendar days, not 24h windows ----


def test_late_night_then_early_morning_is_consecutive():
    last = local("UTC", 2025, 3, 10, 23, 50)
    now = local("UTC", 2025, 3, 11, 0, 10)
    habit = make_habit(now, current=1, best=1, last=last)
    assert check_in(habit, now, UTC).current_streak == 2


def test_early_morning_then_late_night_same_day_rejected():
    last = local("UTC", 2025, 3, 11, 0, 10)
    now = local("UTC", 2025, 3, 11, 23, 50)
    with pytest.raises(AlreadyCheckedInToday):
        check_in(make_habit(now, current=1, best=1, last=last), now, UTC)


def test_almost_48_hours_apart_is_still_consecutive():
    last = local("UTC", 2025, 3, 10, 0, 1)
    now = local("UTC", 2025, 3, 11, 23, 59)
    assert check_in(make_habit(now, current=2, best=2, last=last), now, UTC).current_streak == 3


def test_year_boundary_is_consecutive():
    last = local("UTC", 2024, 12, 31, 20, 0)
    now = local("UTC", 2025, 1, 1, 8, 0)
    assert check_in(make_habit(now, current=9, best=9, last=last), now, UTC).current_streak == 10


def test_timezone_decides_calendar_day():
    last = local("UTC", 2025, 3, 10, 22, 30)
    now = local("UTC", 2025, 3, 11, 6, 0)
    habit = make_habit(now, current=1, best=1, last=last)

    assert check_in(habit, now, UTC).current_streak == 2

    # 01:30 and 09:00 on the same Moscow day
    with pytest.raises(AlreadyCheckedInToday):
        check_in(habit, now, pytz.timezone("Europe/Moscow"))


@pytest.mark.parametrize("current,best,days_ago", [
    (0, 0, None),
    (3, 5, 1),
    (5, 5, 1),
    (4, 4, 3),
    (1, 10, 2),
    (10, 10, 1),
])
def test_best_streak_never_below_current(utc_now, current, best, days_ago):
    last = utc_now - timedelta(days=days_ago) if days_ago is not None else None
    result = check_in(make_habit(utc_now, current, best, last), utc_now, UTC)
    assert result.best_streak >= result.current_streak
    assert result.best_streak >= best


# ---- HabitService ----


def test_service_persists_check_in(storage, clock):
    service = HabitService(storage, clock)
    habit = service.create("Meditate")
    assert (habit.current_streak, habit.best_streak, habit.last_completed_at) == (0, 0, None)

    updated = service.check_in(habit.id)
    assert updated.current_streak == 1

    stored = service.get(habit.id)
    assert stored.current_streak == 1
    assert stored.best_streak == 1
    assert stored.last_completed_at == clock.now()


def test_service_twice_same_day(storage, clock):
    service = HabitService(storage, clock)
    habit = service.create("Meditate")
    service.check_in(habit.id)
    clock.advance(hours=3)

    with pytest.raises(AlreadyCheckedInToday):
        service.check_in(habit.id)

    stored = service.get(habit.id)
    assert stored.current_streak == 1
    assert stored.last_completed_at == clock.now() - timedelta(hours=3)


def test_service_streak_over_several_days(storage, clock):
    service = HabitService(storage, clock)
    habit = service.create("Walk")
    for _ in range(3):
        service.check_in(habit.id)
        clock.advance(days=1)
    assert service.get(habit.id).current_streak == 3

    clock.advance(days=2)
    habit = service.check_in(habit.id)
    assert (habit.current_streak, habit.best_streak) == (1, 3)


def test_service_unknown_habit(storage, clock):
    with pytest.raises(NotFoundError):
        HabitService(storage, clock).check_in("missing")


def test_service_delete(storage, clock):
    service = HabitService(storage, clock)
    habit = service.create("Stretch")
    service.delete(habit.id)
    with pytest.raises(NotFoundError):
        service.get(habit.id)
    with pytest.raises(NotFoundError):
        service.delete(habit.id)


# ---- per-habit locking ----


class SlowStorage(MemoryStorage):
    """Memory store whose reads yield to other threads"""

    def get(self, kind, entity_id):
        record = super().get(kind, entity_id)
        time.sleep(0.05)
        return record


def test_concurrent_check_ins_count_once(clock):
    service = HabitService(SlowStorage(), clock)
    habit = service.create("Journal")
    results, errors = [], []

    def worker():
        try:
            results.append(service.check_in(habit.id))
        except AlreadyCheckedInToday as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert [h.current_streak for h in results] == [1]
    assert len(errors) == 1
    assert service.get(habit.id).current_streak == 1


def test_keyed_lock_discard_forgets_key():
    locks = KeyedLock()
    with locks.hold("h1"):
        pass
    assert "h1" in locks._locks

    locks.discard("h1")
    assert "h1" not in locks._locks
    locks.discard("h1")
    with locks.hold("h1"):
        pass


def test_service_delete_discards_lock(storage, clock):
    locks = KeyedLock()
    service = HabitService(storage, clock, locks)
    habit = service.create("Stretch")
    service.check_in(habit.id)
    assert habit.id in locks._locks

    service.delete(habit.id)
    assert habit.id not in locks._locks
