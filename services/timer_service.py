"""
Сервис фокус-таймера: начало и завершение сессий
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from core.models import FocusSession, SessionType, new_id
from core.storage import FOCUS_SESSIONS
from services.base import StoreBackedService

logger = logging.getLogger('dailyfocus.timer')

MINUTE = timedelta(minutes=1)


def compute_duration_minutes(start_time: datetime, end_time: datetime) -> int:
    """Целые минуты между началом и концом, неполная минута отбрасывается"""
    minutes = (end_time - start_time) // MINUTE
    if minutes < 0:
        logger.warning(f"⚠️ Конец сессии раньше начала ({start_time} > {end_time}), длительность = 0")
        return 0
    return minutes


class TimerService(StoreBackedService):
    """Сессии фокуса и перерывов"""

    kind = FOCUS_SESSIONS
    model = FocusSession
    label = "Session"

    def start(self, session_type: str = SessionType.FOCUS.value,
              task_id: Optional[str] = None) -> FocusSession:
        """Открыть новую сессию с началом в текущий момент"""
        now = self.clock.now()
        session = FocusSession(
            id=new_id(),
            start_time=now,
            created_at=now,
            session_type=session_type,
            task_id=task_id,
        )
        saved = self._save(session)
        logger.info(f"⏰ Запущена сессия {saved.id} ({saved.session_type})")
        return saved

    def end(self, session_id: str) -> FocusSession:
        """
        Закрыть сессию: end_time = сейчас, duration_minutes = целые минуты.
        Повторное закрытие перезаписывает конец и длительность.
        """
        with self.locks.hold(session_id):
            session = self.get(session_id)
            if not session.is_open:
                logger.info(f"🔁 Сессия {session_id} закрывается повторно")

            now = self.clock.now()
            session.end_time = now
            session.duration_minutes = compute_duration_minutes(session.start_time, now)
            saved = self._save(session)

        logger.info(f"⏹️ Сессия {session_id} завершена: {saved.duration_minutes} мин")
        return saved

    def get_summary(self) -> Dict[str, int]:
        sessions = self.list()
        return {
            "total_minutes": sum(s.duration_minutes or 0 for s in sessions),
            "focus_sessions": len([s for s in sessions if s.session_type == SessionType.FOCUS.value]),
            "open_sessions": len([s for s in sessions if s.is_open]),
        }
