"""Per-topic level thresholds and computation.

A topic's level is derived from its questions-completed high-water mark.
These values must match the client's calculateLevel() exactly.
"""

from __future__ import annotations

from cq.quiz.scoring import round_half_up

TOPIC_LEVEL_THRESHOLDS: list[dict] = [
    {"level": "Beginner", "min_completed": 0, "max_completed": 2},
    {"level": "Intermediate", "min_completed": 3, "max_completed": 5},
    {"level": "Advanced", "min_completed": 6, "max_completed": 7},
    {"level": "Expert", "min_completed": 8, "max_completed": None},
]

DEFAULT_LEVEL = TOPIC_LEVEL_THRESHOLDS[0]["level"]


def compute_topic_level(questions_completed: int) -> str:
    """Return the level label for a questions-completed count."""
    current = TOPIC_LEVEL_THRESHOLDS[0]
    for threshold in TOPIC_LEVEL_THRESHOLDS:
        if questions_completed >= threshold["min_completed"]:
            current = threshold
    return current["level"]


def progress_percent(questions_completed: int, total_questions: int) -> int:
    """Completion percentage of a topic, rounded half-up."""
    if total_questions <= 0:
        return 0
    return round_half_up(questions_completed / total_questions * 100)
