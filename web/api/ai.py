from fastapi import APIRouter, Depends

from services.ai_service import AIService
from ..dependencies import get_ai_service
from ..schemas import (
    GoalRequest, QuestionRequest, ContentRequest,
    GeneratedTasksResponse, AdviceResponse, SummaryResponse,
)

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/generate-tasks", response_model=GeneratedTasksResponse)
async def generate_tasks(payload: GoalRequest, ai: AIService = Depends(get_ai_service)):
    """Разбить цель на задачи (задачи не сохраняются)"""
    return {"tasks": await ai.generate_tasks(payload.goal)}


@router.post("/coach-advice", response_model=AdviceResponse)
async def coach_advice(payload: QuestionRequest, ai: AIService = Depends(get_ai_service)):
    return {"advice": await ai.coach_advice(payload.question)}


@router.post("/summarize-note", response_model=SummaryResponse)
async def summarize_note(payload: ContentRequest, ai: AIService = Depends(get_ai_service)):
    return {"summary": await ai.summarize_note(payload.content)}
