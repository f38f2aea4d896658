"""Record types held by the record store, plus explicit partial-update merges."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

QuestionType = Literal["trivia", "visual", "matching"]
TopicLevel = Literal["Beginner", "Intermediate", "Advanced", "Expert"]

STATS_ID = 1


class Kind(str, Enum):
    """Record kinds understood by every RecordStore backing."""

    TOPIC = "topic"
    QUESTION = "question"
    PROGRESS = "progress"
    ACHIEVEMENT = "achievement"
    UNLOCKED_ACHIEVEMENT = "unlocked_achievement"
    STATS = "stats"


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class Topic(_Record):
    id: int | None = None
    name: str
    country: str
    flag: str = ""
    image_url: str = ""
    description: str = ""
    total_questions: int = Field(default=8, ge=1)
    estimated_time: int = 15  # minutes


class Question(_Record):
    id: int | None = None
    topic_id: int
    type: QuestionType
    prompt: str
    image_url: str | None = None
    options: list[str]
    correct_answer: str
    cultural_fact: str
    difficulty: int = Field(default=1, ge=1, le=3)


class Progress(_Record):
    """Per-topic learner state, keyed by topic_id."""

    topic_id: int
    questions_completed: int = 0
    best_score: int = 0
    total_points: int = 0
    level: TopicLevel = "Beginner"
    last_played: datetime | None = None


class Achievement(_Record):
    id: int | None = None
    title: str
    description: str
    points: int
    icon: str
    requirement: str


class UnlockedAchievement(_Record):
    """Keyed by achievement_id; at most one per achievement."""

    achievement_id: int
    unlocked_at: datetime


class Stats(_Record):
    """Global aggregate learner state (singleton)."""

    id: int = STATS_ID
    total_score: int = 0
    level: int = 1
    cultures_explored: int = 0
    challenges_completed: int = 0
    accuracy: int = Field(default=0, ge=0, le=100)
    streak: int = 0
    last_played_on: date | None = None


Record = Topic | Question | Progress | Achievement | UnlockedAchievement | Stats

RECORD_TYPES: dict[Kind, type[_Record]] = {
    Kind.TOPIC: Topic,
    Kind.QUESTION: Question,
    Kind.PROGRESS: Progress,
    Kind.ACHIEVEMENT: Achievement,
    Kind.UNLOCKED_ACHIEVEMENT: UnlockedAchievement,
    Kind.STATS: Stats,
}

# Field used as the record's identity within its kind.
KEY_FIELDS: dict[Kind, str] = {
    Kind.TOPIC: "id",
    Kind.QUESTION: "id",
    Kind.PROGRESS: "topic_id",
    Kind.ACHIEVEMENT: "id",
    Kind.UNLOCKED_ACHIEVEMENT: "achievement_id",
    Kind.STATS: "id",
}

# Kinds whose key is assigned by the store when missing.
AUTO_ID_KINDS = frozenset({Kind.TOPIC, Kind.QUESTION, Kind.ACHIEVEMENT})


def record_key(kind: Kind, record: BaseModel) -> int | None:
    return getattr(record, KEY_FIELDS[kind])


# ---------------------------------------------------------------------------
# Partial updates
# ---------------------------------------------------------------------------


class ProgressUpdate(BaseModel):
    """Fields of Progress that a submission may change. Unset fields are kept."""

    questions_completed: int | None = None
    best_score: int | None = None
    total_points: int | None = None
    level: TopicLevel | None = None
    last_played: datetime | None = None


class StatsUpdate(BaseModel):
    total_score: int | None = None
    cultures_explored: int | None = None
    challenges_completed: int | None = None
    accuracy: int | None = Field(default=None, ge=0, le=100)
    streak: int | None = None
    last_played_on: date | None = None


def merge_progress(existing: Progress | None, topic_id: int, update: ProgressUpdate) -> Progress:
    """Apply ``update`` over ``existing``, or over a zeroed Progress when there is none."""
    base = existing if existing is not None else Progress(topic_id=topic_id)
    return base.model_copy(update=update.model_dump(exclude_none=True))


def merge_stats(existing: Stats | None, update: StatsUpdate) -> Stats:
    """Apply ``update`` over ``existing``, or over zeroed Stats when there is none."""
    base = existing if existing is not None else Stats()
    return base.model_copy(update=update.model_dump(exclude_none=True))
