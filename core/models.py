#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DailyFocus - Core Data Models
Модели данных: задачи, фокус-сессии, привычки, заметки

Версия: 1.0.0
Дата: 2025-10-19
"""

import uuid
from datetime import datetime
from typing import Dict, Optional, Any
from dataclasses import dataclass, replace
from enum import Enum
import logging

from core.exceptions import ValidationError
from utils.datetime_utils import parse_datetime, format_datetime

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class TaskStatus(str, Enum):
    """Статусы задач"""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

class TaskPriority(str, Enum):
    """Приоритеты задач"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class SessionType(str, Enum):
    """Типы фокус-сессий"""
    FOCUS = "focus"
    BREAK = "break"

class HabitFrequency(str, Enum):
    """Периодичность привычки"""
    DAILY = "daily"
    WEEKLY = "weekly"

# ===== VALIDATION HELPERS =====

def validate_enum_value(value: Any, enum_class: type, field_name: str = "value") -> str:
    """Валидация значений enum, возвращает строковое значение"""
    try:
        return enum_class(value).value
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} must be one of: {valid_values}")

def validate_non_negative(value: Optional[int], field_name: str) -> None:
    if value is not None and (not isinstance(value, int) or value < 0):
        raise ValidationError(f"{field_name} must be a non-negative integer")

def new_id() -> str:
    return str(uuid.uuid4())

# ===== CORE MODELS =====

@dataclass
class Task:
    """Задача пользователя"""
    id: str
    title: str
    created_at: datetime
    description: Optional[str] = None
    priority: str = TaskPriority.MEDIUM.value
    status: str = TaskStatus.TODO.value
    category: Optional[str] = None
    estimated_minutes: Optional[int] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        self.priority = validate_enum_value(self.priority, TaskPriority, "priority")
        self.status = validate_enum_value(self.status, TaskStatus, "status")
        if self.estimated_minutes is not None:
            if not isinstance(self.estimated_minutes, int) or self.estimated_minutes <= 0:
                raise ValidationError("estimated_minutes must be a positive integer")

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "category": self.category,
            "estimated_minutes": self.estimated_minutes,
            "due_date": format_datetime(self.due_date),
            "completed_at": format_datetime(self.completed_at),
            "created_at": format_datetime(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            id=data["id"],
            title=data["title"],
            created_at=parse_datetime(data["created_at"]),
            description=data.get("description"),
            priority=data.get("priority", TaskPriority.MEDIUM.value),
            status=data.get("status", TaskStatus.TODO.value),
            category=data.get("category"),
            estimated_minutes=data.get("estimated_minutes"),
            due_date=parse_datetime(data.get("due_date")),
            completed_at=parse_datetime(data.get("completed_at")),
        )

    @classmethod
    def create(cls, title: str, now: datetime, **fields) -> "Task":
        return cls(id=new_id(), title=title, created_at=now, **fields)


@dataclass
class FocusSession:
    """Фокус-сессия или перерыв. Открыта, пока end_time не задан"""
    id: str
    start_time: datetime
    created_at: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    session_type: str = SessionType.FOCUS.value
    task_id: Optional[str] = None

    def __post_init__(self):
        self.session_type = validate_enum_value(self.session_type, SessionType, "session_type")
        validate_non_negative(self.duration_minutes, "duration_minutes")

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "start_time": format_datetime(self.start_time),
            "end_time": format_datetime(self.end_time),
            "duration_minutes": self.duration_minutes,
            "session_type": self.session_type,
            "task_id": self.task_id,
            "created_at": format_datetime(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FocusSession":
        return cls(
            id=data["id"],
            start_time=parse_datetime(data["start_time"]),
            created_at=parse_datetime(data["created_at"]),
            end_time=parse_datetime(data.get("end_time")),
            duration_minutes=data.get("duration_minutes"),
            session_type=data.get("session_type", SessionType.FOCUS.value),
            task_id=data.get("task_id"),
        )


@dataclass
class Habit:
    """Привычка с текущей и лучшей серией"""
    id: str
    name: str
    created_at: datetime
    description: Optional[str] = None
    frequency: str = HabitFrequency.DAILY.value
    current_streak: int = 0
    best_streak: int = 0
    last_completed_at: Optional[datetime] = None

    def __post_init__(self):
        self.frequency = validate_enum_value(self.frequency, HabitFrequency, "frequency")
        validate_non_negative(self.current_streak, "current_streak")
        validate_non_negative(self.best_streak, "best_streak")

    def with_streak(self, current: int, best: int, completed_at: datetime) -> "Habit":
        """Копия привычки с новой серией"""
        return replace(self, current_streak=current, best_streak=best,
                       last_completed_at=completed_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "frequency": self.frequency,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "last_completed_at": format_datetime(self.last_completed_at),
            "created_at": format_datetime(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        return cls(
            id=data["id"],
            name=data["name"],
            created_at=parse_datetime(data["created_at"]),
            description=data.get("description"),
            frequency=data.get("frequency", HabitFrequency.DAILY.value),
            current_streak=data.get("current_streak", 0),
            best_streak=data.get("best_streak", 0),
            last_completed_at=parse_datetime(data.get("last_completed_at")),
        )

    @classmethod
    def create(cls, name: str, now: datetime, description: Optional[str] = None,
               frequency: str = HabitFrequency.DAILY.value) -> "Habit":
        """Новая привычка всегда начинается с нулевой серией"""
        return cls(id=new_id(), name=name, created_at=now,
                   description=description, frequency=frequency)


@dataclass
class Note:
    """Заметка"""
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Note":
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            created_at=parse_datetime(data["created_at"]),
            updated_at=parse_datetime(data["updated_at"]),
        )

    @classmethod
    def create(cls, title: str, content: str, now: datetime) -> "Note":
        return cls(id=new_id(), title=title, content=content,
                   created_at=now, updated_at=now)
