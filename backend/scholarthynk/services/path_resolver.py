"""
ScholarThynk Backend — Path Resolver
====================================

What:  Translates a symbolic path like ["root", "Classes", "Math"] into the chain
       of folder ids it names, for one owner.
How:   One single-level lookup per segment: a folder with that name, that owner,
       and the previously resolved id as parent (NULL for the first segment).
       There is no cache; every call re-reads the store.
"""

import uuid
from typing import List, Optional, Sequence

from scholarthynk.exceptions import NotFoundError, ValidationError
from scholarthynk.models.item import ROOT_NAME, ItemKind
from scholarthynk.services.document_store import DocumentStore


def validate_path(path: Optional[Sequence[str]]) -> List[str]:
    """Rejects a missing or empty path, or one that does not start at root."""
    if not path:
        raise ValidationError(message="The location (path) is required!", field="path")
    if path[0] != ROOT_NAME:
        raise ValidationError(
            message=f"Paths must start with '{ROOT_NAME}'!",
            field="path",
            context={"first_segment": path[0]},
        )
    return list(path)


async def resolve_path(
    store: DocumentStore,
    owner_id: str,
    path: Optional[Sequence[str]],
) -> List[uuid.UUID]:
    """
    Resolves every non-root segment of `path` to a folder id.

    Returns:
        One id per segment after "root"; an empty list for ["root"].

    Raises:
        ValidationError: path missing, empty, or not rooted
        NotFoundError:   the first segment that has no matching folder
    """
    segments = validate_path(path)

    folder_ids: List[uuid.UUID] = []
    parent_id: Optional[uuid.UUID] = None
    for segment in segments[1:]:
        folder = await store.find_one(
            owner_id=owner_id,
            name=segment,
            parent_id=parent_id,
            kind=ItemKind.FOLDER.value,
        )
        if folder is None:
            raise NotFoundError(resource="folder", name=segment)
        folder_ids.append(folder.id)
        parent_id = folder.id
    return folder_ids


async def resolve_parent(
    store: DocumentStore,
    owner_id: str,
    path: Optional[Sequence[str]],
) -> Optional[uuid.UUID]:
    """Id of the folder the path points at, or None for the synthetic root."""
    folder_ids = await resolve_path(store, owner_id, path)
    return folder_ids[-1] if folder_ids else None
