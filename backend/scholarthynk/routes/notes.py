"""
ScholarThynk Backend — Notes Route Handlers
===========================================

What:  /api/note endpoints used by the editor and the dashboard.
Who:   The note editor (new, update, get/note, get/notePath) and the
       dashboard's recent-notes panel (get/notes).
"""

import logging

from fastapi import APIRouter, Depends, Response

from scholarthynk.dependencies import get_document_store, get_owner_id
from scholarthynk.schemas.item import (
    ErrorResponse,
    GetNoteRequest,
    NewNoteRequest,
    NoteDetailResponse,
    NoteListResponse,
    NotePathRequest,
    NotePathResponse,
    SuccessResponse,
    UpdateNoteRequest,
)
from scholarthynk.services.document_store import DocumentStore
from scholarthynk.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/note", tags=["Notes"])

_errors = {
    400: {"description": "Missing or reserved input", "model": ErrorResponse},
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    404: {"description": "Path segment or note not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/new",
    response_model=SuccessResponse,
    responses=_errors,
    summary='Create an "Untitled" note',
)
async def new_note(
    body: NewNoteRequest,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> SuccessResponse:
    await note_service.create_note(store, owner_id, body.path)
    return SuccessResponse()


@router.put(
    "/update",
    response_model=SuccessResponse,
    responses=_errors,
    summary="Save a note's title and content",
)
async def update_note(
    body: UpdateNoteRequest,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> SuccessResponse:
    await note_service.update_note(
        store,
        owner_id,
        body.path,
        old_title=body.old_title,
        new_title=body.title,
        content=body.content,
    )
    return SuccessResponse()


@router.post(
    "/get/note",
    response_model=NoteDetailResponse,
    responses=_errors,
    summary="Open a note by folder path and title",
)
async def get_note(
    body: GetNoteRequest,
    response: Response,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> NoteDetailResponse:
    note = await note_service.get_note(store, owner_id, body.path, body.title)
    # Notes are edited in place; never serve a cached copy
    response.headers["Cache-Control"] = "no-store"
    return NoteDetailResponse(note=note)


@router.post(
    "/get/notePath",
    response_model=NotePathResponse,
    responses=_errors,
    summary="Folder path of a note known by id",
)
async def get_note_path(
    body: NotePathRequest,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> NotePathResponse:
    path = await note_service.get_note_path(store, owner_id, body.parent, body.note_id)
    return NotePathResponse(path=path)


@router.get(
    "/get/notes",
    response_model=NoteListResponse,
    responses={401: _errors[401], 500: _errors[500]},
    summary="All notes of the caller",
)
async def list_notes(
    response: Response,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> NoteListResponse:
    result = await note_service.list_notes(store, owner_id)
    response.headers["X-Total-Count"] = str(len(result.notes))
    return result
