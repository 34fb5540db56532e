import logging
from typing import Optional

from core.models import Note
from core.storage import NOTES
from services.base import StoreBackedService

logger = logging.getLogger(__name__)


class NoteService(StoreBackedService):
    """CRUD заметок"""

    kind = NOTES
    model = Note
    label = "Note"

    def create(self, title: str, content: str) -> Note:
        saved = self._save(Note.create(title, content, self.clock.now()))
        logger.info(f"🗒️ Создана заметка {saved.id}")
        return saved

    def update(self, note_id: str, title: Optional[str] = None,
               content: Optional[str] = None) -> Note:
        """Частичное обновление; updated_at обновляется всегда"""
        with self.locks.hold(note_id):
            note = self.get(note_id)
            if title is not None:
                note.title = title
            if content is not None:
                note.content = content
            note.updated_at = self.clock.now()
            return self._save(note)
