from fastapi import APIRouter, Depends, Response, status
from typing import List

from services.note_service import NoteService
from ..dependencies import get_note_service
from ..schemas import NoteCreate, NoteUpdate, NoteOut

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=List[NoteOut])
async def list_notes(service: NoteService = Depends(get_note_service)):
    return [n.to_dict() for n in service.list()]


@router.get("/{note_id}", response_model=NoteOut)
async def get_note(note_id: str, service: NoteService = Depends(get_note_service)):
    return service.get(note_id).to_dict()


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
async def create_note(payload: NoteCreate, service: NoteService = Depends(get_note_service)):
    return service.create(payload.title, payload.content).to_dict()


@router.patch("/{note_id}", response_model=NoteOut)
async def update_note(note_id: str, payload: NoteUpdate,
                      service: NoteService = Depends(get_note_service)):
    return service.update(note_id, payload.title, payload.content).to_dict()


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, service: NoteService = Depends(get_note_service)):
    service.delete(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
