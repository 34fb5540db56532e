#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DailyFocus - Record Store
Хранилище записей с подменяемыми бэкендами: в памяти и JSON файлы

Версия: 1.0.0
Дата: 2025-10-19
"""

import copy
import json
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any
import logging

from core.exceptions import StorageCorruptionError, StorageError

logger = logging.getLogger(__name__)

# Виды записей
TASKS = "tasks"
FOCUS_SESSIONS = "focus_sessions"
HABITS = "habits"
NOTES = "notes"

KINDS = (TASKS, FOCUS_SESSIONS, HABITS, NOTES)


class BaseStorage(ABC):
    """Интерфейс хранилища: last-write-wins, без транзакций"""

    @abstractmethod
    def get(self, kind: str, entity_id: str) -> Optional[Dict[str, Any]]:
        """Запись по идентификатору или None"""

    @abstractmethod
    def put(self, kind: str, entity_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Сохранить запись целиком (перезаписывает существующую)"""

    @abstractmethod
    def delete(self, kind: str, entity_id: str) -> bool:
        """Удалить запись; False если её не было"""

    @abstractmethod
    def list(self, kind: str) -> List[Dict[str, Any]]:
        """Все записи данного вида в порядке добавления"""

    def count(self, kind: str) -> int:
        return len(self.list(kind))

    def close(self) -> None:
        pass

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in KINDS:
            raise StorageError(f"Unknown record kind: {kind}")


class MemoryStorage(BaseStorage):
    """Хранилище в памяти процесса, отдаёт копии записей"""

    def __init__(self):
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {kind: {} for kind in KINDS}

    def get(self, kind, entity_id):
        self._check_kind(kind)
        record = self._data[kind].get(entity_id)
        return copy.deepcopy(record) if record is not None else None

    def put(self, kind, entity_id, record):
        self._check_kind(kind)
        self._data[kind][entity_id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    def delete(self, kind, entity_id):
        self._check_kind(kind)
        return self._data[kind].pop(entity_id, None) is not None

    def list(self, kind):
        self._check_kind(kind)
        return [copy.deepcopy(r) for r in self._data[kind].values()]


class JsonFileStorage(BaseStorage):
    """
    Хранилище в JSON файлах: по одному файлу на вид записей.

    Запись атомарная (временный файл + replace). Повреждённый файл
    переименовывается в *.corrupt-<timestamp>.json, вид начинается с пустого набора.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.file_lock = threading.RLock()

    def _file_for(self, kind: str) -> Path:
        return self.data_dir / f"{kind}.json"

    def _read(self, path: Path) -> Dict[str, Dict[str, Any]]:
        try:
            text = path.read_text(encoding='utf-8').strip()
            data = json.loads(text) if text else {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageCorruptionError(f"{path.name}: {e}") from e

        if not isinstance(data, dict):
            raise StorageCorruptionError(f"{path.name}: expected an object, got {type(data).__name__}")
        return data

    def _load(self, kind: str) -> Dict[str, Dict[str, Any]]:
        path = self._file_for(kind)
        if not path.exists():
            return {}

        try:
            return self._read(path)
        except StorageCorruptionError as e:
            stamp = datetime.now().strftime('%Y%m%d-%H%M%S-%f')
            backup = path.with_name(f"{path.stem}.corrupt-{stamp}.json")
            attempt = 1
            while backup.exists():
                backup = path.with_name(f"{path.stem}.corrupt-{stamp}-{attempt}.json")
                attempt += 1
            path.replace(backup)
            logger.error(f"❌ Файл повреждён ({e}), сохранена копия {backup.name}")
            return {}

    def _save(self, kind: str, data: Dict[str, Dict[str, Any]]) -> None:
        path = self._file_for(kind)
        temp_file = path.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_file, path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Failed to save {kind}: {e}") from e

    def get(self, kind, entity_id):
        self._check_kind(kind)
        with self.file_lock:
            return self._load(kind).get(entity_id)

    def put(self, kind, entity_id, record):
        self._check_kind(kind)
        with self.file_lock:
            data = self._load(kind)
            data[entity_id] = record
            self._save(kind, data)
        return copy.deepcopy(record)

    def delete(self, kind, entity_id):
        self._check_kind(kind)
        with self.file_lock:
            data = self._load(kind)
            if entity_id not in data:
                return False
            del data[entity_id]
            self._save(kind, data)
            return True

    def list(self, kind):
        self._check_kind(kind)
        with self.file_lock:
            return list(self._load(kind).values())


def create_storage(backend: str = "memory", data_dir: Optional[Path] = None) -> BaseStorage:
    """Создание хранилища по имени бэкенда"""
    if backend == "memory":
        logger.info("🗄️ Хранилище: память процесса")
        return MemoryStorage()
    if backend == "json":
        if data_dir is None:
            raise StorageError("data_dir is required for the json backend")
        logger.info(f"🗄️ Хранилище: JSON файлы в {data_dir}")
        return JsonFileStorage(data_dir)
    raise StorageError(f"Unknown storage backend: {backend}")
