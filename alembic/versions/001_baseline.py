"""Baseline: catalog (topics, questions, achievements) and learner state tables.

Revision ID: 001_baseline
Revises:
Create Date: 2026-10-16
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Catalog ---
    op.create_table(
        "topics",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("country", sa.String(128), nullable=False),
        sa.Column("flag", sa.String(16), nullable=False, server_default=""),
        sa.Column("image_url", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("total_questions", sa.Integer, nullable=False, server_default="8"),
        sa.Column("estimated_time", sa.Integer, nullable=False, server_default="15"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("topic_id", sa.Integer, sa.ForeignKey("topics.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("prompt", sa.Text, nullable=False),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("options", sa.JSON, nullable=False),
        sa.Column("correct_answer", sa.Text, nullable=False),
        sa.Column("cultural_fact", sa.Text, nullable=False),
        sa.Column("difficulty", sa.Integer, nullable=False, server_default="1"),
    )
    op.create_index("ix_questions_topic_id", "questions", ["topic_id"])

    op.create_table(
        "achievements",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(128), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("points", sa.Integer, nullable=False),
        sa.Column("icon", sa.String(16), nullable=False),
        sa.Column("requirement", sa.String(64), nullable=False),
    )

    # --- Learner state ---
    op.create_table(
        "topic_progress",
        sa.Column("topic_id", sa.Integer, sa.ForeignKey("topics.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("questions_completed", sa.Integer, nullable=False, server_default="0"),
        sa.Column("best_score", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("level", sa.String(16), nullable=False, server_default="Beginner"),
        sa.Column("last_played", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "unlocked_achievements",
        sa.Column(
            "achievement_id",
            sa.Integer,
            sa.ForeignKey("achievements.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("unlocked_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "game_stats",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("total_score", sa.Integer, nullable=False, server_default="0"),
        sa.Column("level", sa.Integer, nullable=False, server_default="1"),
        sa.Column("cultures_explored", sa.Integer, nullable=False, server_default="0"),
        sa.Column("challenges_completed", sa.Integer, nullable=False, server_default="0"),
        sa.Column("accuracy", sa.Integer, nullable=False, server_default="0"),
        sa.Column("streak", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_played_on", sa.Date, nullable=True),
    )


def downgrade() -> None:
    op.drop_table("game_stats")
    op.drop_table("unlocked_achievements")
    op.drop_table("topic_progress")
    op.drop_table("achievements")
    op.drop_index("ix_questions_topic_id", table_name="questions")
    op.drop_table("questions")
    op.drop_table("topics")
