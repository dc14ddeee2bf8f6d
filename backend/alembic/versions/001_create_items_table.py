"""Create items table

Revision ID: 001
Revises: None
Create Date: 2024-09-01 00:00:00.000000+00:00

What:  Creates the flat `items` table holding every folder and note.
How:   One row per item; parent_id and the JSON children array encode the tree.
       parent_id deliberately has no foreign key (see scholarthynk/models/item.py).

Rollback: downgrade() drops the table entirely (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "items",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Opaque identifier assigned on insert"),
        sa.Column(
            "owner_id",
            sa.String(255),
            nullable=False,
            comment="User the item belongs to; every query is scoped by it",
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "parent_id",
            sa.Uuid(),
            nullable=True,
            comment="Containing folder; NULL means the synthetic root",
        ),
        sa.Column("kind", sa.String(16), nullable=False, comment="folder or note"),
        sa.Column("children", sa.JSON(), nullable=False, comment="Ordered child ids (folders only)"),
        sa.Column("last_modified", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Every path segment lookup filters on exactly these three columns
    op.create_index(
        "idx_items_owner_parent_name",
        "items",
        ["owner_id", "parent_id", "name"],
    )


def downgrade() -> None:
    op.drop_index("idx_items_owner_parent_name", table_name="items")
    op.drop_table("items")
