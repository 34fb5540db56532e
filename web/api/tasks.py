from fastapi import APIRouter, Depends, Response, status
from typing import List

from services.task_service import TaskService
from ..dependencies import get_task_service
from ..schemas import TaskCreate, TaskUpdate, TaskOut

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskOut])
async def list_tasks(service: TaskService = Depends(get_task_service)):
    return [t.to_dict() for t in service.list()]


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return service.get(task_id).to_dict()


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate, service: TaskService = Depends(get_task_service)):
    data = payload.model_dump()
    title = data.pop("title")
    return service.create(title, **data).to_dict()


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(task_id: str, payload: TaskUpdate,
                      service: TaskService = Depends(get_task_service)):
    """Частичное обновление: меняются только переданные поля"""
    return service.update(task_id, payload.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    service.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
