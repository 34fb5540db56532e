from fastapi import APIRouter, Depends, status
from typing import List, Optional

from services.timer_service import TimerService
from ..dependencies import get_timer_service
from ..schemas import SessionStart, SessionEnd, SessionOut, FocusSummary

router = APIRouter(prefix="/api/focus-sessions", tags=["focus"])


@router.get("", response_model=List[SessionOut])
async def list_sessions(service: TimerService = Depends(get_timer_service)):
    return [s.to_dict() for s in service.list()]


@router.get("/summary", response_model=FocusSummary)
async def get_focus_summary(service: TimerService = Depends(get_timer_service)):
    return service.get_summary()


@router.post("/start", response_model=SessionOut, status_code=status.HTTP_201_CREATED)
async def start_session(payload: Optional[SessionStart] = None,
                        service: TimerService = Depends(get_timer_service)):
    payload = payload or SessionStart()
    return service.start(payload.session_type, payload.task_id).to_dict()


@router.post("/end", response_model=SessionOut)
async def end_session(payload: SessionEnd, service: TimerService = Depends(get_timer_service)):
    return service.end(payload.id).to_dict()
