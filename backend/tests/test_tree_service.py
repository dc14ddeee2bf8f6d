"""
ScholarThynk Backend — Tree Service Tests
=========================================

What:  Listing, folder creation, rename and recursive deletion against a real
       (in-memory SQLite) store, plus failure injection with mocks.

What we test:
    ✅ Sibling folder names are unique per parent; "root" is reserved
    ✅ New folders are appended to their parent's children
    ✅ Listings split folders from files and format dates as DD.MM.YYYY
    ✅ A path that vanished lists as empty instead of failing
    ✅ Rename touches only the name; collisions and "root" are rejected
    ✅ Recursive deletion removes the whole subtree and detaches it
    ✅ Dangling child references are skipped during deletion
    ✅ Store failures become DatabaseError and are not rolled back
"""

import re
import uuid
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from scholarthynk.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from scholarthynk.models.item import ItemKind
from scholarthynk.services.note_service import note_service
from scholarthynk.services.tree_service import tree_service

OWNER = "user-1"
OTHER_OWNER = "user-2"


async def _folder(store, name, parent_path=("root",)):
    return await tree_service.create_folder(store, OWNER, list(parent_path), name)


class TestCreateFolder:

    @pytest.mark.asyncio
    async def test_root_level_folder(self, store):
        folder_id = await _folder(store, "Classes")

        folder = await store.find_one(owner_id=OWNER, id=folder_id)
        assert folder.name == "Classes"
        assert folder.kind == ItemKind.FOLDER.value
        assert folder.parent_id is None
        assert folder.children == []
        assert folder.content == ""

    @pytest.mark.asyncio
    async def test_nested_folder_is_appended_to_parent(self, store):
        classes = await _folder(store, "Classes")
        math = await _folder(store, "Math", ["root", "Classes"])
        physics = await _folder(store, "Physics", ["root", "Classes"])

        parent = await store.find_one(owner_id=OWNER, id=classes)
        assert parent.children == [str(math), str(physics)]
        child = await store.find_one(owner_id=OWNER, id=math)
        assert child.parent_id == classes

    @pytest.mark.asyncio
    async def test_duplicate_sibling_conflicts(self, store):
        await _folder(store, "Classes")

        with pytest.raises(ConflictError):
            await _folder(store, "Classes")

    @pytest.mark.asyncio
    async def test_same_name_under_different_parents(self, store):
        await _folder(store, "Classes")
        await _folder(store, "Archive")
        await _folder(store, "Math", ["root", "Classes"])
        await _folder(store, "Math", ["root", "Archive"])

        assert len(await store.find(owner_id=OWNER, name="Math")) == 2

    @pytest.mark.asyncio
    async def test_note_with_same_name_does_not_block_folder(self, store):
        await note_service.create_note(store, OWNER, ["root"])

        await _folder(store, "Untitled")

    @pytest.mark.asyncio
    async def test_other_owner_may_reuse_name(self, store):
        await _folder(store, "Classes")

        await tree_service.create_folder(store, OTHER_OWNER, ["root"], "Classes")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", None, "root"])
    async def test_invalid_names_rejected(self, store, name):
        with pytest.raises(ValidationError):
            await _folder(store, name)
        assert await store.find(owner_id=OWNER) == []

    @pytest.mark.asyncio
    async def test_missing_parent_segment(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await _folder(store, "Math", ["root", "Classes"])
        assert exc_info.value.name == "Classes"


class TestListItems:

    @pytest.mark.asyncio
    async def test_root_listing_partitions_by_kind(self, store):
        await _folder(store, "Classes")
        await note_service.create_note(store, OWNER, ["root"])

        listing = await tree_service.list_items(store, OWNER, ["root"], "root")

        assert [f.name for f in listing.folders] == ["Classes"]
        assert [f.name for f in listing.files] == ["Untitled"]
        assert listing.folders[0].kind == "folder"
        assert listing.files[0].kind == "note"
        assert re.fullmatch(r"\d{2}\.\d{2}\.\d{4}", listing.files[0].last_edited)

    @pytest.mark.asyncio
    async def test_folder_listing_follows_children_order(self, store):
        await _folder(store, "Classes")
        await _folder(store, "Math", ["root", "Classes"])
        await note_service.create_note(store, OWNER, ["root", "Classes"])
        await _folder(store, "Art", ["root", "Classes"])

        listing = await tree_service.list_items(store, OWNER, ["root", "Classes"], "Classes")

        assert [f.name for f in listing.folders] == ["Math", "Art"]
        assert [f.name for f in listing.files] == ["Untitled"]

    @pytest.mark.asyncio
    async def test_vanished_path_lists_empty(self, store):
        await _folder(store, "Classes")
        await _folder(store, "Math", ["root", "Classes"])
        await tree_service.delete_item(store, OWNER, ["root"], "Classes")

        listing = await tree_service.list_items(store, OWNER, ["root", "Classes", "Math"], "Math")

        assert listing.folders == []
        assert listing.files == []

    @pytest.mark.asyncio
    async def test_dangling_child_is_skipped(self, store):
        classes = await _folder(store, "Classes")
        await store.update_one({"owner_id": OWNER, "id": classes}, push={"children": uuid.uuid4()})
        await note_service.create_note(store, OWNER, ["root", "Classes"])

        listing = await tree_service.list_items(store, OWNER, ["root", "Classes"], "Classes")

        assert [f.name for f in listing.files] == ["Untitled"]

    @pytest.mark.asyncio
    async def test_other_owner_sees_nothing(self, store):
        await _folder(store, "Classes")

        listing = await tree_service.list_items(store, OTHER_OWNER, ["root"], "root")

        assert listing.folders == [] and listing.files == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,folder", [(None, "root"), (["root"], None), ([], "root")])
    async def test_missing_arguments(self, store, path, folder):
        with pytest.raises(ValidationError):
            await tree_service.list_items(store, OWNER, path, folder)


class TestRenameItem:

    @pytest.mark.asyncio
    async def test_rename_folder_keeps_structure(self, store):
        classes = await _folder(store, "Classes")
        math = await _folder(store, "Math", ["root", "Classes"])

        await tree_service.rename_item(store, OWNER, ["root"], "Classes", "Courses")

        folder = await store.find_one(owner_id=OWNER, id=classes)
        assert folder.name == "Courses"
        assert folder.children == [str(math)]
        assert folder.parent_id is None
        assert await store.find_one(owner_id=OWNER, name="Math", parent_id=classes) is not None

    @pytest.mark.asyncio
    async def test_rename_note(self, store):
        note_id = await note_service.create_note(store, OWNER, ["root"])

        await tree_service.rename_item(store, OWNER, ["root"], "Untitled", "Homework")

        note = await store.find_one(owner_id=OWNER, id=note_id)
        assert note.name == "Homework"

    @pytest.mark.asyncio
    async def test_rename_to_root_rejected(self, store):
        await _folder(store, "Classes")

        with pytest.raises(ValidationError):
            await tree_service.rename_item(store, OWNER, ["root"], "Classes", "root")

    @pytest.mark.asyncio
    async def test_rename_missing_item(self, store):
        with pytest.raises(NotFoundError):
            await tree_service.rename_item(store, OWNER, ["root"], "Classes", "Courses")

    @pytest.mark.asyncio
    async def test_rename_missing_path(self, store):
        with pytest.raises(NotFoundError):
            await tree_service.rename_item(store, OWNER, ["root", "Nope"], "Classes", "Courses")

    @pytest.mark.asyncio
    async def test_rename_collides_with_any_sibling(self, store):
        await _folder(store, "Classes")
        await note_service.create_note(store, OWNER, ["root"])

        with pytest.raises(ConflictError):
            await tree_service.rename_item(store, OWNER, ["root"], "Classes", "Untitled")


class TestDeleteItem:

    @pytest.mark.asyncio
    async def test_delete_note_detaches_from_parent(self, store):
        classes = await _folder(store, "Classes")
        note_id = await note_service.create_note(store, OWNER, ["root", "Classes"])

        removed = await tree_service.delete_item(store, OWNER, ["root", "Classes"], "Untitled")

        assert removed == 1
        assert await store.find_one(owner_id=OWNER, id=note_id) is None
        parent = await store.find_one(owner_id=OWNER, id=classes)
        assert parent.children == []

    @pytest.mark.asyncio
    async def test_recursive_delete_is_complete(self, store):
        top = await _folder(store, "Top")
        a = await _folder(store, "A", ["root", "Top"])
        b = await _folder(store, "B", ["root", "Top", "A"])
        c = await note_service.create_note(store, OWNER, ["root", "Top", "A", "B"])
        sibling = await note_service.create_note(store, OWNER, ["root", "Top"])

        removed = await tree_service.delete_item(store, OWNER, ["root", "Top"], "A")

        assert removed == 3
        for item_id in (a, b, c):
            assert await store.find_one(owner_id=OWNER, id=item_id) is None
        parent = await store.find_one(owner_id=OWNER, id=top)
        assert parent.children == [str(sibling)]

    @pytest.mark.asyncio
    async def test_delete_skips_dangling_child(self, store):
        classes = await _folder(store, "Classes")
        await store.update_one({"owner_id": OWNER, "id": classes}, push={"children": uuid.uuid4()})
        note_id = await note_service.create_note(store, OWNER, ["root", "Classes"])

        removed = await tree_service.delete_item(store, OWNER, ["root"], "Classes")

        assert removed == 2
        assert await store.find(owner_id=OWNER) == []
        assert await store.find_one(owner_id=OWNER, id=note_id) is None

    @pytest.mark.asyncio
    async def test_delete_leaves_other_owner_alone(self, store):
        await _folder(store, "Classes")
        await tree_service.create_folder(store, OTHER_OWNER, ["root"], "Classes")

        await tree_service.delete_item(store, OWNER, ["root"], "Classes")

        assert len(await store.find(owner_id=OTHER_OWNER)) == 1

    @pytest.mark.asyncio
    async def test_root_cannot_be_deleted(self, store):
        with pytest.raises(ValidationError):
            await tree_service.delete_item(store, OWNER, ["root"], "root")

    @pytest.mark.asyncio
    async def test_delete_missing_item(self, store):
        await _folder(store, "Classes")

        with pytest.raises(NotFoundError):
            await tree_service.delete_item(store, OWNER, ["root", "Classes"], "Math")

    @pytest.mark.asyncio
    async def test_delete_missing_path_segment(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await tree_service.delete_item(store, OWNER, ["root", "Classes"], "Math")
        assert exc_info.value.name == "Classes"


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_read_failure_becomes_database_error(self):
        store = AsyncMock()
        store.find_one.side_effect = OperationalError("SELECT", {}, Exception("connection reset"))

        with pytest.raises(DatabaseError) as exc_info:
            await tree_service.create_folder(store, OWNER, ["root", "Classes"], "Math")
        assert "connection reset" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_failed_parent_update_leaves_orphan(self, store):
        classes = await _folder(store, "Classes")

        with patch.object(store, "update_one", AsyncMock(side_effect=RuntimeError("boom"))):
            with pytest.raises(DatabaseError):
                await _folder(store, "Math", ["root", "Classes"])

        orphan = await store.find_one(owner_id=OWNER, name="Math")
        assert orphan is not None and orphan.parent_id == classes
        parent = await store.find_one(owner_id=OWNER, id=classes)
        assert parent.children == []

    @pytest.mark.asyncio
    async def test_interrupted_delete_is_not_rolled_back(self, store):
        await _folder(store, "Classes")
        first = await note_service.create_note(store, OWNER, ["root", "Classes"])
        second = await note_service.create_note(store, OWNER, ["root", "Classes"])

        real_delete_one = store.delete_one
        calls = []

        async def flaky_delete_one(**predicate):
            calls.append(predicate)
            if len(calls) == 2:
                raise RuntimeError("store went away")
            return await real_delete_one(**predicate)

        with patch.object(store, "delete_one", side_effect=flaky_delete_one):
            with pytest.raises(DatabaseError):
                await tree_service.delete_item(store, OWNER, ["root"], "Classes")

        assert await store.find_one(owner_id=OWNER, id=first) is None
        assert await store.find_one(owner_id=OWNER, id=second) is not None
        assert await store.find_one(owner_id=OWNER, name="Classes") is not None
