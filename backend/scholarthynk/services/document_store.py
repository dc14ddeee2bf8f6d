"""
ScholarThynk Backend — Document Store
=====================================

What:  A document-collection style facade over the `items` table.
Why:   The tree services are written against a minimal store contract
       (find / insert / update / delete by exact-match predicate) so that
       path resolution, creation and recursive deletion read as a sequence of
       independent store calls, the same way they would against a document
       database. Nothing above this module imports SQLAlchemy query helpers.
How:   Wraps one AsyncSession. Predicates are keyword arguments naming Item
       columns; a value of None matches NULL. Id fields accept UUIDs or their
       string form; a string that is not a UUID simply matches nothing.

Write Modes:
    autocommit=True   Each write is committed on its own. A failure in the
                      middle of a multi-step operation leaves the steps that
                      already ran in place (best effort).
    autocommit=False  Writes are only flushed. The owner of the session
                      (get_db_session) commits once or rolls everything back.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from scholarthynk.models.item import Item

logger = logging.getLogger(__name__)

_ID_FIELDS = frozenset({"id", "parent_id"})


def _normalize(predicate: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Returns the predicate with id strings parsed, or None if it can never match."""
    normalized = {}
    for field, value in predicate.items():
        if field in _ID_FIELDS and isinstance(value, str):
            try:
                value = uuid.UUID(value)
            except ValueError:
                return None
        normalized[field] = value
    return normalized


class DocumentStore:
    """
    Equality-predicate access to the flat item collection.

    Array fields (only `children` today) are updated with push/pull semantics:
    push appends the string form of a value, pull removes every occurrence.
    The list is always replaced, never mutated in place, so SQLAlchemy sees
    the change and callers iterating over an old list are unaffected.
    """

    def __init__(self, session: AsyncSession, autocommit: bool = True):
        self.session = session
        self.autocommit = autocommit

    async def _written(self) -> None:
        if self.autocommit:
            await self.session.commit()
        else:
            await self.session.flush()

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_one(self, **predicate: Any) -> Optional[Item]:
        criteria = _normalize(predicate)
        if criteria is None:
            return None
        result = await self.session.execute(
            select(Item)
            .filter_by(**criteria)
            .order_by(Item.created_at, Item.id)
            .limit(1)
        )
        return result.scalars().first()

    async def find(self, **predicate: Any) -> List[Item]:
        criteria = _normalize(predicate)
        if criteria is None:
            return []
        result = await self.session.execute(
            select(Item).filter_by(**criteria).order_by(Item.created_at, Item.id)
        )
        return list(result.scalars().all())

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert_one(self, **fields: Any) -> uuid.UUID:
        """Inserts a new item and returns the id the store assigned to it."""
        item = Item(**fields)
        self.session.add(item)
        # Flush first so the id default is applied before we hand it out
        await self.session.flush()
        await self._written()
        logger.debug("Inserted %r", item)
        return item.id

    async def update_one(
        self,
        predicate: Dict[str, Any],
        values: Optional[Dict[str, Any]] = None,
        push: Optional[Dict[str, Any]] = None,
        pull: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Applies a patch to the first item matching `predicate`.

        Returns False (and writes nothing) when no item matches.
        """
        item = await self.find_one(**predicate)
        if item is None:
            return False

        for field, value in (values or {}).items():
            setattr(item, field, value)
        for field, value in (push or {}).items():
            setattr(item, field, [*getattr(item, field), str(value)])
        for field, value in (pull or {}).items():
            setattr(item, field, [e for e in getattr(item, field) if e != str(value)])

        await self._written()
        return True

    async def delete_one(self, **predicate: Any) -> bool:
        item = await self.find_one(**predicate)
        if item is None:
            return False
        await self.session.delete(item)
        await self._written()
        return True

    async def delete_many(self, **predicate: Any) -> int:
        criteria = _normalize(predicate)
        if criteria is None:
            return 0
        result = await self.session.execute(delete(Item).filter_by(**criteria))
        await self._written()
        return result.rowcount or 0
