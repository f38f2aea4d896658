"""Shared FastAPI dependencies."""

import random

from cq.config import get_settings
from cq.quiz.scoring import ScoringVariant
from cq.quiz.service import QuizService
from cq.redis_client import get_redis_optional
from cq.storage import get_store

_rng: random.Random = random.Random()  # noqa: S311


def init_random(seed: int | None) -> None:
    """Reseed the process-wide question shuffler. ``None`` draws from OS entropy."""
    _rng.seed(seed)


def get_quiz_service() -> QuizService:
    """Build a QuizService over the process-wide store, Redis and random source."""
    settings = get_settings()
    return QuizService(
        get_store(),
        redis=get_redis_optional(),
        rng=_rng,
        scoring_variant=ScoringVariant(settings.scoring_variant),
        perfect_score_basis=settings.perfect_score_basis,
    )
