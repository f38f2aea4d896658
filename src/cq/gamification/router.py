"""Gamification API endpoints: stats, achievements and levels."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cq.dependencies import get_quiz_service
from cq.gamification.level_thresholds import TOPIC_LEVEL_THRESHOLDS
from cq.gamification.schemas import (
    AllAchievementsResponse,
    AllLevelsResponse,
    LevelEntry,
    StatsResponse,
)
from cq.quiz.service import QuizService

router = APIRouter(prefix="/api/v1", tags=["Gamification"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(service: QuizService = Depends(get_quiz_service)):
    """Global learner stats."""
    return await service.get_stats()


@router.get("/achievements", response_model=AllAchievementsResponse)
async def list_achievements(service: QuizService = Depends(get_quiz_service)):
    """All achievements with unlock status."""
    return await service.list_achievements()


@router.get("/levels", response_model=AllLevelsResponse)
async def list_levels():
    """Topic level thresholds."""
    return AllLevelsResponse(levels=[LevelEntry(**t) for t in TOPIC_LEVEL_THRESHOLDS])
