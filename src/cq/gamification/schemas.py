"""Pydantic response models for gamification endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

# --- Achievements ---


class AchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    points: int
    icon: str
    requirement: str


class AchievementStatusResponse(AchievementResponse):
    unlocked: bool = False
    unlocked_at: datetime | None = None


class AllAchievementsResponse(BaseModel):
    achievements: list[AchievementStatusResponse]
    total_available: int
    total_unlocked: int


# --- Stats ---


class StatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_score: int
    level: int
    cultures_explored: int
    challenges_completed: int
    accuracy: int
    streak: int
    last_played_on: date | None = None


# --- Levels ---


class LevelEntry(BaseModel):
    level: str
    min_completed: int
    max_completed: int | None = None


class AllLevelsResponse(BaseModel):
    levels: list[LevelEntry]
