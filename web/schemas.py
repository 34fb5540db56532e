from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from core.models import TaskPriority, TaskStatus, SessionType, HabitFrequency


class RequestModel(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="forbid")

# ===== ЗАДАЧИ =====

class TaskCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    category: Optional[str] = Field(None, max_length=50)
    estimated_minutes: Optional[int] = Field(None, gt=0)
    due_date: Optional[datetime] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title must not be blank')
        return v.strip()


class TaskUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    category: Optional[str] = Field(None, max_length=50)
    estimated_minutes: Optional[int] = Field(None, gt=0)
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class TaskOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    priority: str
    status: str
    category: Optional[str] = None
    estimated_minutes: Optional[int] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime

# ===== ФОКУС-СЕССИИ =====

class SessionStart(RequestModel):
    session_type: SessionType = SessionType.FOCUS
    task_id: Optional[str] = None


class SessionEnd(RequestModel):
    id: str = Field(..., min_length=1)


class SessionOut(BaseModel):
    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    session_type: str
    task_id: Optional[str] = None
    created_at: datetime


class FocusSummary(BaseModel):
    total_minutes: int
    focus_sessions: int
    open_sessions: int

# ===== ПРИВЫЧКИ =====

class HabitCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    frequency: HabitFrequency = HabitFrequency.DAILY


class HabitOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    frequency: str
    current_streak: int
    best_streak: int
    last_completed_at: Optional[datetime] = None
    created_at: datetime

# ===== ЗАМЕТКИ =====

class NoteCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str


class NoteUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = None


class NoteOut(BaseModel):
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

# ===== AI =====

class GoalRequest(RequestModel):
    goal: str = Field(..., min_length=1, max_length=1000)


class QuestionRequest(RequestModel):
    question: str = Field(..., min_length=1, max_length=2000)


class ContentRequest(RequestModel):
    content: str = Field(..., min_length=1)


class GeneratedTask(BaseModel):
    title: str
    description: Optional[str] = None
    estimated_minutes: Optional[int] = None
    priority: str
    category: Optional[str] = None


class GeneratedTasksResponse(BaseModel):
    tasks: List[GeneratedTask]


class AdviceResponse(BaseModel):
    advice: str


class SummaryResponse(BaseModel):
    summary: str

# ===== СЛУЖЕБНОЕ =====

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    data: Dict[str, Any] = {}
