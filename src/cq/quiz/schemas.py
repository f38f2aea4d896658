"""Pydantic request/response models for quiz endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cq.gamification.schemas import AchievementResponse, StatsResponse

# --- Topics ---


class TopicProgressSummary(BaseModel):
    questions_completed: int
    total_questions: int
    best_score: int
    level: str
    progress_percent: int


class TopicResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    country: str
    flag: str
    image_url: str
    description: str
    total_questions: int
    estimated_time: int


class TopicWithProgressResponse(TopicResponse):
    progress: TopicProgressSummary


class TopicListResponse(BaseModel):
    topics: list[TopicWithProgressResponse]


# --- Quiz start ---


class QuestionView(BaseModel):
    """A question as shown before grading: no answer key, no fact."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    prompt: str
    image_url: str | None = None
    options: list[str]
    difficulty: int


class QuizStartResponse(BaseModel):
    topic: TopicResponse
    questions: list[QuestionView]


# --- Quiz submission ---


class SubmittedAnswer(BaseModel):
    question_id: int
    answer: str
    time_spent: float = Field(default=0, ge=0)  # milliseconds


class QuizSubmitRequest(BaseModel):
    topic_id: int
    answers: list[SubmittedAnswer]
    total_time: float = Field(ge=0)  # seconds


class DetailedAnswer(BaseModel):
    question_id: int
    question: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    time_spent: float
    cultural_fact: str
    image_url: str | None = None
    difficulty: int = 1


class QuizSubmitResponse(BaseModel):
    total_score: int
    correct_answers: int
    total_questions: int
    accuracy: int
    time_spent: float
    points_earned: int
    base_points: int
    time_bonus: int
    accuracy_bonus: int
    detailed_answers: list[DetailedAnswer]
    new_achievements: list[AchievementResponse]
    level_up: bool
    new_level: str
    updated_stats: StatsResponse
