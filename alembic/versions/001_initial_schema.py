"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-11-02

Creates the quiz content tables (categories, levels, questions) and seeds
the three difficulty levels the quiz UI offers.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None

SEED_LEVELS = (
    ("junior", "Junior", 1),
    ("middle", "Middle", 2),
    ("senior", "Senior", 3),
)


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )

    levels = op.create_table(
        "levels",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "category_id",
            sa.Text(),
            sa.ForeignKey("categories.id"),
            nullable=False,
        ),
        sa.Column("level_id", sa.Text(), sa.ForeignKey("levels.id"), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("options", sa.Text(), nullable=False),
        sa.Column("correct_answer", sa.Integer(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.Text(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index(
        "idx_questions_category_level", "questions", ["category_id", "level_id"]
    )
    op.create_index("idx_questions_created_at", "questions", ["created_at"])

    op.bulk_insert(
        levels,
        [
            {"id": level_id, "title": title, "order_index": order_index}
            for level_id, title, order_index in SEED_LEVELS
        ],
    )


def downgrade() -> None:
    op.drop_index("idx_questions_created_at", table_name="questions")
    op.drop_index("idx_questions_category_level", table_name="questions")
    op.drop_table("questions")
    op.drop_table("levels")
    op.drop_table("categories")
