# services/task_service.py

import logging
from datetime import datetime
from typing import Dict, Any

from core.exceptions import ValidationError
from core.models import Task, TaskStatus
from core.storage import TASKS
from services.base import StoreBackedService
from utils.datetime_utils import format_datetime

logger = logging.getLogger(__name__)

# Поля, которые можно менять частичным обновлением
UPDATABLE_FIELDS = (
    "title", "description", "priority", "status", "category",
    "estimated_minutes", "due_date", "completed_at",
)


class TaskService(StoreBackedService):
    """CRUD задач"""

    kind = TASKS
    model = Task
    label = "Task"

    def create(self, title: str, **fields) -> Task:
        now = self.clock.now()
        if fields.get("status") == TaskStatus.COMPLETED.value and not fields.get("completed_at"):
            fields["completed_at"] = now
        task = Task.create(title, now, **fields)
        saved = self._save(task)
        logger.info(f"📝 Создана задача {saved.id}: {saved.title}")
        return saved

    def update(self, task_id: str, changes: Dict[str, Any]) -> Task:
        """
        Частичное обновление задачи.

        Завершённая задача без completed_at получает текущее время,
        у незавершённой completed_at всегда пустой.
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown task fields: {sorted(unknown)}")
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValidationError("Title must not be blank")

        with self.locks.hold(task_id):
            task = self.get(task_id)
            record = task.to_dict()
            for key, value in changes.items():
                record[key] = format_datetime(value) if isinstance(value, datetime) else value

            # completed_at следует итоговому статусу
            if record["status"] == TaskStatus.COMPLETED.value:
                if not record.get("completed_at"):
                    record["completed_at"] = format_datetime(self.clock.now())
            else:
                record["completed_at"] = None

            saved = self._save(Task.from_dict(record))

        logger.info(f"✏️ Задача {task_id} обновлена: {sorted(changes)}")
        return saved
