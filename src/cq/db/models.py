"""ORM models backing the SQL record store.

Column names match the pydantic records in ``cq.store.records`` one to one so
records round-trip with ``model_validate(row)`` / ``Model(**record.model_dump())``.
Tables are created by the Alembic baseline migration.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from cq.db.base import Base

# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class TopicRow(Base):
    """A culture: groups a fixed question bank."""

    __tablename__ = "topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    country: Mapped[str] = mapped_column(String(128), nullable=False)
    flag: Mapped[str] = mapped_column(String(16), nullable=False, server_default="")
    image_url: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False, server_default="8")
    estimated_time: Mapped[int] = mapped_column(Integer, nullable=False, server_default="15")


class QuestionRow(Base):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    topic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    options: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)
    cultural_fact: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[int] = mapped_column(Integer, nullable=False, server_default="1")


class AchievementRow(Base):
    __tablename__ = "achievements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    icon: Mapped[str] = mapped_column(String(16), nullable=False)
    requirement: Mapped[str] = mapped_column(String(64), nullable=False)


# ---------------------------------------------------------------------------
# Learner state
# ---------------------------------------------------------------------------


class ProgressRow(Base):
    """Per-topic progress: primary key on topic_id, one row per topic."""

    __tablename__ = "topic_progress"

    topic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("topics.id", ondelete="CASCADE"), primary_key=True
    )
    questions_completed: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    best_score: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    level: Mapped[str] = mapped_column(String(16), nullable=False, server_default="Beginner")
    last_played: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class UnlockedAchievementRow(Base):
    """Unlocked achievements: primary key on achievement_id prevents duplicates."""

    __tablename__ = "unlocked_achievements"

    achievement_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("achievements.id", ondelete="CASCADE"), primary_key=True
    )
    unlocked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class StatsRow(Base):
    """Global aggregate stats: single row with id 1."""

    __tablename__ = "game_stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    total_score: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    level: Mapped[int] = mapped_column(Integer, nullable=False, server_default="1")
    cultures_explored: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    challenges_completed: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    accuracy: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    streak: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    last_played_on: Mapped[date | None] = mapped_column(Date, nullable=True)
