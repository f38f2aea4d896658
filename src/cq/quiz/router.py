"""Quiz API endpoints: topics, quiz start and submission."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from cq.config import get_settings
from cq.dependencies import get_quiz_service
from cq.quiz.schemas import (
    QuizStartResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
    TopicListResponse,
    TopicResponse,
)
from cq.quiz.service import QuizService

router = APIRouter(prefix="/api/v1", tags=["Quiz"])


@router.get("/topics", response_model=TopicListResponse)
async def list_topics(service: QuizService = Depends(get_quiz_service)):
    """All cultures with the learner's progress on each."""
    return await service.list_topics_with_progress()


@router.get("/topics/{topic_id}", response_model=TopicResponse)
async def get_topic(topic_id: int, service: QuizService = Depends(get_quiz_service)):
    topic = await service.get_topic(topic_id)
    return TopicResponse.model_validate(topic.model_dump())


@router.get("/quiz/{topic_id}", response_model=QuizStartResponse)
async def start_quiz(
    topic_id: int,
    count: int | None = Query(None, ge=1, le=50),
    service: QuizService = Depends(get_quiz_service),
):
    """Start a quiz: random questions without answers or cultural facts."""
    if count is None:
        count = get_settings().default_question_count
    return await service.start_quiz(topic_id, count)


@router.post("/quiz/submit", response_model=QuizSubmitResponse)
async def submit_quiz(body: QuizSubmitRequest, service: QuizService = Depends(get_quiz_service)):
    """Grade a quiz session and record progress, stats and achievements."""
    return await service.submit_quiz(body.topic_id, body.answers, body.total_time)
