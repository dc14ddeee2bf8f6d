"""
ScholarThynk Backend — Item SQLAlchemy Model
============================================

What:  ORM model representing the flat `items` table that holds both folders and notes.
Why:   The file viewer is a tree, but it is stored the way a document collection
       stores it: one row per item, with explicit parent and children id fields.
Who:   Used by DocumentStore for all reads and writes, and by Alembic.

Table Design Rationale:
    - parent_id has NO foreign key: a folder's row may be deleted while a stale
      reference to it still exists elsewhere, and readers must tolerate that
      instead of the database rejecting the delete.
    - children is a JSON array of id strings. Order is insertion order, which is
      the order the file viewer displays.
    - The synthetic root is never stored; parent_id IS NULL means "under root".

    Index on (owner_id, parent_id, name):
        Every path segment lookup is exactly this equality triple.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from sqlalchemy import JSON, TIMESTAMP, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from scholarthynk.database import Base

ROOT_NAME = "root"
UNTITLED_NOTE_NAME = "Untitled"


class ItemKind(str, Enum):
    FOLDER = "folder"
    NOTE = "note"


class Item(Base):
    """
    A folder or a note in one owner's file viewer.

    Invariants kept by the services (the table does not enforce them):
        - a child's parent_id equals the id of the folder listing it in children
        - name is never "root"
        - folder names are unique per (owner_id, parent_id)
    """

    __tablename__ = "items"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque identifier assigned on insert",
    )

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="User the item belongs to; every query is scoped by it",
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
        default=None,
        comment="Containing folder; NULL means the synthetic root",
    )

    kind: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="folder or note",
    )

    children: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered child ids (folders only)",
    )

    last_modified: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Insertion order for listings that are not driven by a children array
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_items_owner_parent_name", "owner_id", "parent_id", "name"),
    )

    @property
    def is_folder(self) -> bool:
        return self.kind == ItemKind.FOLDER.value

    def __repr__(self) -> str:
        return (
            f"<Item(id={self.id}, kind='{self.kind}', name='{self.name}', "
            f"parent_id={self.parent_id})>"
        )
