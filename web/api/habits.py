from fastapi import APIRouter, Depends, Response, status
from typing import List

from services.habit_service import HabitService
from ..dependencies import get_habit_service
from ..schemas import HabitCreate, HabitOut

router = APIRouter(prefix="/api/habits", tags=["habits"])


@router.get("", response_model=List[HabitOut])
async def list_habits(service: HabitService = Depends(get_habit_service)):
    return [h.to_dict() for h in service.list()]


@router.get("/{habit_id}", response_model=HabitOut)
async def get_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    return service.get(habit_id).to_dict()


@router.post("", response_model=HabitOut, status_code=status.HTTP_201_CREATED)
async def create_habit(payload: HabitCreate, service: HabitService = Depends(get_habit_service)):
    return service.create(payload.name, payload.description, payload.frequency).to_dict()


@router.post("/{habit_id}/check-in", response_model=HabitOut)
async def check_in_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    """
    Отметить привычку за сегодня.
    Повторная отметка в тот же календарный день -> 409
    """
    return service.check_in(habit_id).to_dict()


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    service.delete(habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
