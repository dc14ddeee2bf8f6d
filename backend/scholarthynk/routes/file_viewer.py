"""
ScholarThynk Backend — File Viewer Route Handlers
=================================================

What:  /api/fileViewer endpoints: list, create folder, rename, delete.
How:   Parse the camelCase body, hand the fields to TreeService, return JSON.
       All failures are raised as exceptions and formatted by main.py.
"""

import logging

from fastapi import APIRouter, Depends

from scholarthynk.dependencies import get_document_store, get_owner_id
from scholarthynk.schemas.item import (
    CreateFolderRequest,
    DeleteItemRequest,
    ErrorResponse,
    ItemListResponse,
    ListItemsRequest,
    RenameItemRequest,
    SuccessResponse,
)
from scholarthynk.services.document_store import DocumentStore
from scholarthynk.services.tree_service import tree_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/fileViewer", tags=["File Viewer"])

_errors = {
    400: {"description": "Missing or reserved input", "model": ErrorResponse},
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/get",
    response_model=ItemListResponse,
    responses=_errors,
    summary="List the folders and notes inside a folder",
)
async def list_items(
    body: ListItemsRequest,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> ItemListResponse:
    """
    A path that no longer exists returns empty lists rather than 404, so a
    stale browser tab showing a deleted folder just renders it as empty.
    """
    return await tree_service.list_items(store, owner_id, body.path, body.folder)


@router.post(
    "/create",
    response_model=SuccessResponse,
    responses={
        **_errors,
        404: {"description": "Path segment not found", "model": ErrorResponse},
        409: {"description": "Folder already exists", "model": ErrorResponse},
    },
    summary="Create a folder",
)
async def create_folder(
    body: CreateFolderRequest,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> SuccessResponse:
    await tree_service.create_folder(store, owner_id, body.parent_path, body.folder_name)
    return SuccessResponse()


@router.put(
    "/rename",
    response_model=SuccessResponse,
    responses={
        **_errors,
        404: {"description": "Path segment or item not found", "model": ErrorResponse},
        409: {"description": "An item with the new name exists", "model": ErrorResponse},
    },
    summary="Rename a folder or note",
)
async def rename_item(
    body: RenameItemRequest,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> SuccessResponse:
    await tree_service.rename_item(store, owner_id, body.path, body.old_name, body.new_name)
    return SuccessResponse()


@router.delete(
    "/delete",
    response_model=SuccessResponse,
    responses={
        **_errors,
        404: {"description": "Path segment or item not found", "model": ErrorResponse},
    },
    summary="Delete a note, or a folder with everything inside it",
)
async def delete_item(
    body: DeleteItemRequest,
    owner_id: str = Depends(get_owner_id),
    store: DocumentStore = Depends(get_document_store),
) -> SuccessResponse:
    await tree_service.delete_item(store, owner_id, body.path, body.folder)
    return SuccessResponse()
