"""
ScholarThynk Backend — File Viewer Tree Service
===============================================

What:  Listing, folder creation, rename and recursive deletion over the flat
       item collection.
Why:   The collection has no tree index. Every operation re-derives the tree
       from parent_id / children references and keeps the two consistent.
How:   Each operation is a sequence of independent DocumentStore calls:
       validate input → resolve the path → read → write.

Consistency Model:
    Writes to several documents are not atomic unless ATOMIC_TREE_MUTATIONS is
    enabled. Two known partial states can survive a store failure:

    - Orphan: an item was inserted but its parent's children array was not
      updated. It still has the right parent_id, so resolution by name finds
      it, but listing a folder (which follows children) does not.
    - Half-deleted subtree: recursive deletion removed some descendants and
      then failed. What was removed stays removed; the request returns 500.

    Neither is repaired automatically.

Error Handling Strategy:
    Input problems raise ValidationError before the store is touched.
    Our own exceptions propagate unchanged. Anything else raised by the store
    is logged with context and re-raised as DatabaseError.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from scholarthynk.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ScholarThynkError,
    ValidationError,
)
from scholarthynk.models.item import ROOT_NAME, Item, ItemKind
from scholarthynk.schemas.item import ItemListResponse, ItemResponse
from scholarthynk.services.document_store import DocumentStore
from scholarthynk.services.path_resolver import resolve_parent, validate_path

logger = logging.getLogger(__name__)


async def create_item(
    store: DocumentStore,
    owner_id: str,
    parent_id: Optional[uuid.UUID],
    name: str,
    kind: ItemKind,
) -> uuid.UUID:
    """
    Inserts an item, then appends it to its parent's children.

    The insert always happens first; if the second write fails the item is
    left orphaned (see module docstring).
    """
    item_id = await store.insert_one(
        owner_id=owner_id,
        name=name,
        parent_id=parent_id,
        kind=kind.value,
        children=[],
        content="",
        last_modified=datetime.now(timezone.utc),
    )
    if parent_id is not None:
        await store.update_one(
            {"owner_id": owner_id, "id": parent_id},
            push={"children": item_id},
        )
    return item_id


class TreeService:
    """
    File viewer operations for a single owner at a time.

    Stateless: the store and the owner id are passed to every call.
    """

    # ── Listing ───────────────────────────────────────────────────────────

    async def list_items(
        self,
        store: DocumentStore,
        owner_id: str,
        path: Optional[Sequence[str]],
        folder: Optional[str],
    ) -> ItemListResponse:
        """
        Immediate children of a location, split into folders and files.

        A path that no longer resolves (for example because another request
        just deleted one of its folders) yields an empty listing, not a 404.
        """
        if not path or not folder:
            raise ValidationError(message="Folder and path are required!")
        validate_path(path)

        try:
            if folder == ROOT_NAME:
                children = await self._children_of(store, owner_id, None)
            else:
                try:
                    parent_id = await resolve_parent(store, owner_id, path)
                except NotFoundError as e:
                    logger.info(
                        "Listing %s for %s: %s; returning empty listing",
                        path, owner_id, e.message,
                    )
                    return ItemListResponse()
                children = await self._children_of(store, owner_id, parent_id)

            listing = ItemListResponse()
            for child in children:
                target = listing.folders if child.is_folder else listing.files
                target.append(ItemResponse.from_item(child))
            return listing

        except ScholarThynkError:
            raise
        except Exception as e:
            logger.error("Store error listing %s for %s: %s", path, owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not load the folder contents. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def _children_of(
        self,
        store: DocumentStore,
        owner_id: str,
        parent_id: Optional[uuid.UUID],
    ) -> List[Item]:
        if parent_id is None:
            return await store.find(owner_id=owner_id, parent_id=None)

        parent = await store.find_one(owner_id=owner_id, id=parent_id)
        if parent is None:
            return []
        children = []
        for child_id in parent.children:
            child = await store.find_one(owner_id=owner_id, id=child_id)
            if child is not None:
                children.append(child)
        return children

    # ── Folder creation ───────────────────────────────────────────────────

    async def create_folder(
        self,
        store: DocumentStore,
        owner_id: str,
        parent_path: Optional[Sequence[str]],
        name: Optional[str],
    ) -> uuid.UUID:
        """
        Creates an empty folder under the folder `parent_path` points at.

        Raises:
            ValidationError: empty name, the reserved name, or a bad path
            NotFoundError:   a path segment is missing
            ConflictError:   a sibling folder already has this name
        """
        if not name:
            raise ValidationError(message="Folder name cannot be empty!", field="folderName")
        if name == ROOT_NAME:
            raise ValidationError(message="Folder cannot be named 'root'!", field="folderName")
        validate_path(parent_path)

        try:
            parent_id = await resolve_parent(store, owner_id, parent_path)

            existing = await store.find_one(
                owner_id=owner_id,
                name=name,
                parent_id=parent_id,
                kind=ItemKind.FOLDER.value,
            )
            if existing is not None:
                raise ConflictError(
                    message="Folder already exists!",
                    context={"name": name, "parent_id": str(parent_id)},
                )

            folder_id = await create_item(store, owner_id, parent_id, name, ItemKind.FOLDER)
            logger.info("Folder %s (%r) created under %s for %s", folder_id, name, parent_id, owner_id)
            return folder_id

        except ScholarThynkError:
            raise
        except Exception as e:
            logger.error("Store error creating folder %r for %s: %s", name, owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the folder. Please try again.",
                context={"error_type": type(e).__name__},
            )

    # ── Rename ────────────────────────────────────────────────────────────

    async def rename_item(
        self,
        store: DocumentStore,
        owner_id: str,
        path: Optional[Sequence[str]],
        old_name: Optional[str],
        new_name: Optional[str],
    ) -> None:
        """
        Renames a folder or note in place. Only the name (and, for notes, the
        modification time) changes; parent and children references stay put.
        """
        if new_name == ROOT_NAME:
            raise ValidationError(message="Item cannot be named root!", field="newName")
        if not new_name:
            raise ValidationError(message="The new name cannot be empty!", field="newName")
        if not old_name:
            raise ValidationError(message="The item to rename is required!", field="oldName")
        validate_path(path)

        try:
            parent_id = await resolve_parent(store, owner_id, path)

            item = await store.find_one(owner_id=owner_id, name=old_name, parent_id=parent_id)
            if item is None:
                raise NotFoundError(resource="item", name=old_name)

            clash = await store.find_one(owner_id=owner_id, name=new_name, parent_id=parent_id)
            if clash is not None:
                raise ConflictError(
                    message="Item already exists!",
                    context={"name": new_name, "parent_id": str(parent_id)},
                )

            values = {"name": new_name}
            if not item.is_folder:
                values["last_modified"] = datetime.now(timezone.utc)
            await store.update_one({"owner_id": owner_id, "id": item.id}, values=values)
            logger.info("Item %s renamed %r -> %r for %s", item.id, old_name, new_name, owner_id)

        except ScholarThynkError:
            raise
        except Exception as e:
            logger.error("Store error renaming %r for %s: %s", old_name, owner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not rename the item. Please try again.",
                context={"error_type": type(e).__name__},
            )

    # ── Deletion ──────────────────────────────────────────────────────────

    async def delete_item(
        self,
        store: DocumentStore,
        owner_id: str,
        path: Optional[Sequence[str]],
        name: Optional[str],
    ) -> int:
        """
        Deletes a note, or a folder together with everything below it.

        Folders are removed depth-first, children before their container, so
        an interrupted run never leaves a descendant whose ancestor is gone
        while the descendant is still listed under it.

        Returns:
            Number of documents removed.
        """
        if name == ROOT_NAME:
            raise ValidationError(message="You cannot delete the root folder!", field="folder")
        if not name:
            raise ValidationError(message="The item to delete is required!", field="folder")
        validate_path(path)

        try:
            parent_id = await resolve_parent(store, owner_id, path)

            target = await store.find_one(owner_id=owner_id, name=name, parent_id=parent_id)
            if target is None:
                raise NotFoundError(resource="item", name=name)

            if target.is_folder:
                removed = await self._delete_folder(store, owner_id, target.id)
            else:
                removed = await self._delete_note(store, owner_id, target)

            logger.info("Deleted %r (%d documents) for %s", name, removed, owner_id)
            return removed

        except ScholarThynkError:
            raise
        except Exception as e:
            # Best-effort mode: whatever was already removed stays removed
            logger.error(
                "Store error deleting %r for %s; subtree may be partially deleted: %s",
                name, owner_id, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Could not delete the item. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def _delete_note(self, store: DocumentStore, owner_id: str, note: Item) -> int:
        await store.delete_one(owner_id=owner_id, id=note.id)
        if note.parent_id is not None:
            await store.update_one(
                {"owner_id": owner_id, "id": note.parent_id},
                pull={"children": note.id},
            )
        return 1

    async def _delete_folder(self, store: DocumentStore, owner_id: str, folder_id: uuid.UUID) -> int:
        folder = await store.find_one(owner_id=owner_id, id=folder_id)
        if folder is None:
            return 0

        removed = 0
        for child_id in list(folder.children):
            # Re-read: the child may have been deleted by a concurrent request
            child = await store.find_one(owner_id=owner_id, id=child_id)
            if child is None:
                logger.warning("Skipping dangling child %s of folder %s", child_id, folder.id)
                continue
            if child.is_folder:
                removed += await self._delete_folder(store, owner_id, child.id)
            else:
                await store.delete_one(owner_id=owner_id, id=child.id)
                removed += 1

        if folder.parent_id is not None:
            await store.update_one(
                {"owner_id": owner_id, "id": folder.parent_id},
                pull={"children": folder.id},
            )
        await store.delete_one(owner_id=owner_id, id=folder.id)
        return removed + 1


tree_service = TreeService()
