import logging
from typing import Any, List, Optional

from core.exceptions import NotFoundError
from core.storage import BaseStorage
from utils.datetime_utils import Clock
from utils.locks import KeyedLock

logger = logging.getLogger(__name__)


class StoreBackedService:
    """Общая часть сервисов, работающих с хранилищем записей"""

    kind: str = ""
    model: Any = None
    label: str = "Entity"

    def __init__(self, storage: BaseStorage, clock: Optional[Clock] = None,
                 locks: Optional[KeyedLock] = None):
        self.storage = storage
        self.clock = clock or Clock()
        self.locks = locks or KeyedLock()

    def list(self) -> List[Any]:
        return [self.model.from_dict(r) for r in self.storage.list(self.kind)]

    def get(self, entity_id: str) -> Any:
        record = self.storage.get(self.kind, entity_id)
        if record is None:
            raise NotFoundError(self.label, entity_id)
        return self.model.from_dict(record)

    def _save(self, entity: Any) -> Any:
        return self.model.from_dict(self.storage.put(self.kind, entity.id, entity.to_dict()))

    def delete(self, entity_id: str) -> None:
        with self.locks.hold(entity_id):
            if not self.storage.delete(self.kind, entity_id):
                raise NotFoundError(self.label, entity_id)
        self.locks.discard(entity_id)
        logger.info(f"🗑️ {self.label} {entity_id} удалён(а)")
