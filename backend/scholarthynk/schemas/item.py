"""
ScholarThynk Backend — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract between frontend and backend.
Why:   The frontend already speaks camelCase JSON (parentPath, oldTitle, ...);
       aliases keep that wire format while Python code uses snake_case.
How:   Request fields are optional on purpose: a missing path or name is a
       business-rule 400 raised by the services, not a schema 422.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from scholarthynk.models.item import Item

LAST_EDITED_FORMAT = "%d.%m.%Y"


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class _Request(BaseModel):
    model_config = {"populate_by_name": True}


class ListItemsRequest(_Request):
    path: Optional[List[str]] = Field(default=None, description='Folder path, e.g. ["root", "Math"]')
    folder: Optional[str] = Field(default=None, description='Folder to list ("root" for the top level)')


class CreateFolderRequest(_Request):
    parent_path: Optional[List[str]] = Field(default=None, alias="parentPath")
    folder_name: Optional[str] = Field(default=None, alias="folderName")


class RenameItemRequest(_Request):
    path: Optional[List[str]] = Field(default=None, description="Path of the containing folder")
    old_name: Optional[str] = Field(default=None, alias="oldName")
    new_name: Optional[str] = Field(default=None, alias="newName")


class DeleteItemRequest(_Request):
    path: Optional[List[str]] = Field(default=None, description="Path of the containing folder")
    folder: Optional[str] = Field(default=None, description="Name of the folder or note to delete")


class NewNoteRequest(_Request):
    path: Optional[List[str]] = Field(default=None, description="Folder to create the note in")


class UpdateNoteRequest(_Request):
    path: Optional[List[str]] = None
    old_title: Optional[str] = Field(default=None, alias="oldTitle")
    title: Optional[str] = Field(default=None, description="New title (may equal the old one)")
    content: str = Field(default="")


class GetNoteRequest(_Request):
    path: Optional[List[str]] = None
    title: Optional[str] = None


class NotePathRequest(_Request):
    parent: Optional[str] = Field(default=None, description="Id of the note's parent folder")
    note_id: Optional[str] = Field(default=None, alias="noteId")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ItemResponse(BaseModel):
    """
    What:  One folder or note as the file viewer shows it.
    Why:   Field names on the wire match what the frontend has always read
           (type, parentFolder, lastEdited, fileContent).
    """
    id: str
    name: str
    kind: str = Field(serialization_alias="type")
    parent_id: Optional[str] = Field(default=None, serialization_alias="parentFolder")
    children: List[str] = Field(default_factory=list)
    last_edited: str = Field(serialization_alias="lastEdited", description="DD.MM.YYYY")
    content: str = Field(default="", serialization_alias="fileContent")

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(
            id=str(item.id),
            name=item.name,
            kind=item.kind,
            parent_id=str(item.parent_id) if item.parent_id else None,
            children=list(item.children or []),
            last_edited=item.last_modified.strftime(LAST_EDITED_FORMAT),
            content=item.content or "",
        )


class SuccessResponse(BaseModel):
    success: bool = True


class ItemListResponse(BaseModel):
    """Immediate children of one location, partitioned by kind."""
    success: bool = True
    folders: List[ItemResponse] = Field(default_factory=list)
    files: List[ItemResponse] = Field(default_factory=list)


class NoteDetailResponse(BaseModel):
    note: ItemResponse


class NotePathResponse(BaseModel):
    path: List[str] = Field(description='Segments from "root" down to the note name')


class NoteListResponse(BaseModel):
    notes: List[ItemResponse]


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response.

    Example:
        {
            "success": false,
            "error": "conflict",
            "message": "Folder already exists!",
            "request_id": "1a2b3c4d"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float
