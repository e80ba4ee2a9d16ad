"""categories, ranking_items, full_course_selections

Revision ID: a1f3c9d2e7b4
Revises:
Create Date: 2026-10-18

Creates the three tables behind the ranking API. ranking_items.rank and
categories.image_url are derived columns rewritten by the rank recalculation
after every item save.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "a1f3c9d2e7b4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "ranking_items",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("category_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("eaten_at", sa.Date(), nullable=False),
        sa.Column("comment", sa.Text(), server_default="", nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("rank", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_ranking_items_category_id", "ranking_items", ["category_id"], unique=False)
    op.create_index("ix_ranking_items_score", "ranking_items", ["score"], unique=False)
    op.create_index("ix_ranking_items_eaten_at", "ranking_items", ["eaten_at"], unique=False)
    op.create_table(
        "full_course_selections",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("owner_key", sa.String(64), nullable=False),
        sa.Column("slot_key", sa.String(32), nullable=False),
        sa.Column("ranking_item_id", sa.String(64), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["ranking_item_id"], ["ranking_items.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("owner_key", "slot_key", name="uq_full_course_selections_owner_slot"),
    )
    op.create_index("ix_full_course_selections_owner_key", "full_course_selections", ["owner_key"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_full_course_selections_owner_key", table_name="full_course_selections")
    op.drop_table("full_course_selections")
    op.drop_index("ix_ranking_items_eaten_at", table_name="ranking_items")
    op.drop_index("ix_ranking_items_score", table_name="ranking_items")
    op.drop_index("ix_ranking_items_category_id", table_name="ranking_items")
    op.drop_table("ranking_items")
    op.drop_table("categories")
