"""
ScholarThynk Backend — Note Service
===================================

What:  Note-specific operations: create, update content/title, open by path,
       reverse path lookup, and the dashboard listing of every note.
Why:   Notes live in the same tree as folders, so these operations reuse the
       path resolver and the parent/children discipline of TreeService.
Who:   Called by the /api/note route handlers.

Known Behavior (kept on purpose):
    - New notes are always named "Untitled" and are not checked for sibling
      name collisions, so several "Untitled" notes can share a folder.
    - update_note does not check the new title against siblings either.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from scholarthynk.exceptions import (
    DatabaseError,
    NotFoundError,
    ScholarThynkError,
    ValidationError,
)
from scholarthynk.models.item import ROOT_NAME, UNTITLED_NOTE_NAME, ItemKind
from scholarthynk.schemas.item import ItemResponse, NoteListResponse
from scholarthynk.services.document_store import DocumentStore
from scholarthynk.services.path_resolver import resolve_parent, validate_path
from scholarthynk.services.tree_service import create_item

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic for note documents.

    Error Handling Strategy:
        Same as TreeService: validation first, our exceptions propagate,
        store failures become DatabaseError after being logged.
    """

    async def create_note(
        self,
        store: DocumentStore,
        owner_id: str,
        path: Optional[Sequence[str]],
    ) -> uuid.UUID:
        """Creates an empty "Untitled" note in the folder `path` points at."""
        if not path:
            raise ValidationError(
                message="The location to create the note was not provided!",
                field="path",
            )
        validate_path(path)

        try:
            parent_id = await resolve_parent(store, owner_id, path)
            note_id = await create_item(store, owner_id, parent_id, UNTITLED_NOTE_NAME, ItemKind.NOTE)
            logger.info("Note %s created under %s for %s", note_id, parent_id, owner_id)
            return note_id

        except ScholarThynkError:
            raise
        except Exception as e:
            logger.error("Store error creating note at %s for %s: %s", path, owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_note(
        self,
        store: DocumentStore,
        owner_id: str,
        path: Optional[Sequence[str]],
        old_title: Optional[str],
        new_title: Optional[str],
        content: str,
    ) -> None:
        """
        Replaces a note's content and title in a single write.

        Raises:
            ValidationError: missing path, empty title, or title "root"
            NotFoundError:   missing path segment, or no note named `old_title`
        """
        if not path:
            raise ValidationError(message="The location of the note was not provided!", field="path")
        if not new_title or not old_title:
            raise ValidationError(message="The title of the note can not be empty!", field="title")
        if new_title == ROOT_NAME:
            raise ValidationError(message="You cannot name the note 'root'!", field="title")
        validate_path(path)

        try:
            parent_id = await resolve_parent(store, owner_id, path)

            note = await store.find_one(
                owner_id=owner_id,
                name=old_title,
                parent_id=parent_id,
                kind=ItemKind.NOTE.value,
            )
            if note is None:
                raise NotFoundError(resource="note", name=old_title)

            await store.update_one(
                {"owner_id": owner_id, "id": note.id},
                values={
                    "content": content,
                    "name": new_title,
                    "last_modified": datetime.now(timezone.utc),
                },
            )
            logger.info("Note %s updated (%d chars) for %s", note.id, len(content), owner_id)

        except ScholarThynkError:
            raise
        except Exception as e:
            logger.error("Store error updating note %r for %s: %s", old_title, owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_note(
        self,
        store: DocumentStore,
        owner_id: str,
        path: Optional[Sequence[str]],
        title: Optional[str],
    ) -> ItemResponse:
        """Opens the note named `title` inside the folder `path` points at."""
        if not path:
            raise ValidationError(message="The location of the note was not provided!", field="path")
        if not title:
            raise ValidationError(message="The title of the note is required!", field="title")
        validate_path(path)

        try:
            parent_id = await resolve_parent(store, owner_id, path)
            note = await store.find_one(
                owner_id=owner_id,
                name=title,
                parent_id=parent_id,
                kind=ItemKind.NOTE.value,
            )
            if note is None:
                raise NotFoundError(resource="note", name=title)
            return ItemResponse.from_item(note)

        except ScholarThynkError:
            raise
        except Exception as e:
            logger.error("Store error opening note %r for %s: %s", title, owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not open the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_note_path(
        self,
        store: DocumentStore,
        owner_id: str,
        parent: Optional[str],
        note_id: Optional[str],
    ) -> List[str]:
        """
        Builds ["root", <folders...>, <note name>] for a note known by id.

        Walks parent references upward. The walk stops early at an ancestor
        that no longer exists and never visits the same folder twice.
        """
        if not parent:
            raise ValidationError(message="There was no parent folder of the note provided!", field="parent")
        if not note_id:
            raise ValidationError(message="The note id is required", field="noteId")

        try:
            parent_folder = await store.find_one(owner_id=owner_id, id=parent, kind=ItemKind.FOLDER.value)
            if parent_folder is None:
                raise NotFoundError(resource="folder", name=parent)

            note = await store.find_one(owner_id=owner_id, id=note_id, parent_id=parent_folder.id)
            if note is None:
                raise NotFoundError(resource="note", name=note_id)

            segments = [note.name]
            seen = set()
            current_id = note.parent_id
            while current_id is not None and current_id not in seen:
                seen.add(current_id)
                folder = await store.find_one(owner_id=owner_id, id=current_id)
                if folder is None:
                    break
                segments.insert(0, folder.name)
                current_id = folder.parent_id

            return [ROOT_NAME, *segments]

        except ScholarThynkError:
            raise
        except Exception as e:
            logger.error("Store error building path of note %s for %s: %s", note_id, owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not locate the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_notes(self, store: DocumentStore, owner_id: str) -> NoteListResponse:
        """Every note the owner has, wherever it lives in the tree."""
        try:
            notes = await store.find(owner_id=owner_id, kind=ItemKind.NOTE.value)
            return NoteListResponse(notes=[ItemResponse.from_item(note) for note in notes])
        except Exception as e:
            logger.error("Store error listing notes for %s: %s", owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )


note_service = NoteService()
