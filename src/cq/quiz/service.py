"""Quiz service: topic browsing, quiz start and the submission pipeline."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from cq.clock import Clock, SystemClock
from cq.errors import EmptySubmission, NotFound
from cq.gamification.achievement_evaluator import AchievementEvaluator, SessionContext
from cq.gamification.level_thresholds import DEFAULT_LEVEL, progress_percent
from cq.gamification.notifications import publish_achievement_unlocked, publish_level_up
from cq.gamification.progression import apply_submission
from cq.gamification.schemas import (
    AchievementResponse,
    AchievementStatusResponse,
    AllAchievementsResponse,
    StatsResponse,
)
from cq.quiz.grader import grade
from cq.quiz.schemas import (
    QuizStartResponse,
    QuizSubmitResponse,
    SubmittedAnswer,
    TopicListResponse,
    TopicProgressSummary,
    TopicResponse,
    TopicWithProgressResponse,
)
from cq.quiz.scoring import ScoringVariant, calculate_score
from cq.quiz.selector import QuestionSelector
from cq.store.base import RecordStore
from cq.store.records import STATS_ID, Kind, Stats, Topic

logger = logging.getLogger(__name__)


class QuizService:
    """Quiz engine: content delivery, grading, scoring, progression, achievements."""

    def __init__(
        self,
        store: RecordStore,
        redis: object | None = None,
        rng: random.Random | None = None,
        clock: Clock | None = None,
        scoring_variant: ScoringVariant = ScoringVariant.FLAT,
        perfect_score_basis: str = "session",
    ) -> None:
        self.store = store
        self.redis = redis
        self.clock = clock or SystemClock()
        self.scoring_variant = scoring_variant
        self.selector = QuestionSelector(store, rng)
        self.evaluator = AchievementEvaluator(store, self.clock, perfect_score_basis)

    # --- Topics ---

    async def get_topic(self, topic_id: int) -> Topic:
        topic = await self.store.get(Kind.TOPIC, topic_id)
        if topic is None:
            raise NotFound(f"Topic {topic_id} not found")
        return topic

    async def list_topics_with_progress(self) -> TopicListResponse:
        """All topics with an embedded progress summary; unplayed topics report zeros."""
        topics = await self.store.list(Kind.TOPIC)
        progress_map = {p.topic_id: p for p in await self.store.list(Kind.PROGRESS)}

        items = []
        for topic in topics:
            p = progress_map.get(topic.id)
            completed = p.questions_completed if p else 0
            items.append(TopicWithProgressResponse(
                **topic.model_dump(),
                progress=TopicProgressSummary(
                    questions_completed=completed,
                    total_questions=topic.total_questions,
                    best_score=p.best_score if p else 0,
                    level=p.level if p else DEFAULT_LEVEL,
                    progress_percent=progress_percent(completed, topic.total_questions),
                ),
            ))
        return TopicListResponse(topics=items)

    # --- Quiz ---

    async def start_quiz(self, topic_id: int, count: int) -> QuizStartResponse:
        """Pick ``count`` random questions; answers and facts are withheld."""
        topic = await self.get_topic(topic_id)
        questions = await self.selector.select_questions(topic_id, count)
        return QuizStartResponse(
            topic=TopicResponse.model_validate(topic.model_dump()),
            questions=questions,
        )

    async def submit_quiz(
        self,
        topic_id: int,
        answers: Sequence[SubmittedAnswer],
        total_time: float,
    ) -> QuizSubmitResponse:
        """Grade, score and record one quiz session.

        Validation and grading happen before the transaction opens, so a
        rejected submission never touches learner state. Progress, Stats and
        achievement unlocks are written inside one store transaction; events
        are published only after it commits.
        """
        if not answers:
            raise EmptySubmission
        topic = await self.get_topic(topic_id)
        detailed = await grade(self.store, topic_id, answers)

        correct = sum(1 for a in detailed if a.is_correct)
        breakdown = calculate_score(
            self.scoring_variant,
            correct,
            len(detailed),
            total_time,
            difficulties=[a.difficulty for a in detailed],
        )

        async with self.store.transaction():
            result = await apply_submission(
                self.store,
                topic,
                detailed,
                accuracy=breakdown.accuracy,
                points_earned=breakdown.points,
                now=self.clock.now(),
            )
            all_progress = await self.store.list(Kind.PROGRESS)
            new_achievements = await self.evaluator.evaluate(
                result.stats,
                all_progress,
                session=SessionContext(total_time=total_time, accuracy=breakdown.accuracy),
            )

        logger.info(
            "Quiz submitted: topic=%s correct=%d/%d points=%d unlocked=%d",
            topic_id,
            correct,
            len(detailed),
            breakdown.points,
            len(new_achievements),
        )

        for achievement in new_achievements:
            await publish_achievement_unlocked(self.redis, achievement)
        if result.level_up:
            await publish_level_up(self.redis, result.progress, result.previous_level)

        return QuizSubmitResponse(
            total_score=breakdown.points,
            correct_answers=correct,
            total_questions=len(detailed),
            accuracy=breakdown.accuracy,
            time_spent=total_time,
            points_earned=breakdown.points,
            base_points=breakdown.base_points,
            time_bonus=breakdown.time_bonus,
            accuracy_bonus=breakdown.accuracy_bonus,
            detailed_answers=detailed,
            new_achievements=[AchievementResponse.model_validate(a.model_dump()) for a in new_achievements],
            level_up=result.level_up,
            new_level=result.progress.level,
            updated_stats=StatsResponse.model_validate(result.stats.model_dump()),
        )

    # --- Stats & Achievements ---

    async def get_stats(self) -> StatsResponse:
        stats = await self.store.get(Kind.STATS, STATS_ID) or Stats()
        return StatsResponse.model_validate(stats.model_dump())

    async def list_achievements(self) -> AllAchievementsResponse:
        """Every achievement with its unlocked flag and timestamp."""
        achievements = await self.store.list(Kind.ACHIEVEMENT)
        unlocked = {u.achievement_id: u for u in await self.store.list(Kind.UNLOCKED_ACHIEVEMENT)}

        items = []
        for a in achievements:
            u = unlocked.get(a.id)
            items.append(AchievementStatusResponse(
                **a.model_dump(),
                unlocked=u is not None,
                unlocked_at=u.unlocked_at if u else None,
            ))
        return AllAchievementsResponse(
            achievements=items,
            total_available=len(items),
            total_unlocked=sum(1 for i in items if i.unlocked),
        )
