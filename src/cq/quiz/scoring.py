"""Points formula for a finished quiz.

Two variants exist:
  - flat: ``correct * 100`` base points (the server-side formula, canonical)
  - difficulty_weighted: base points scaled by the average difficulty of the
    answered questions

Both add the same time bonus and accuracy bonus.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from cq.errors import EmptySubmission

POINTS_PER_CORRECT = 100

# (seconds strictly below, bonus)
TIME_BONUS_TIERS: list[tuple[int, int]] = [(300, 100), (600, 50)]

# (accuracy at least, bonus), checked in order
ACCURACY_BONUS_TIERS: list[tuple[int, int]] = [(100, 200), (80, 100)]


class ScoringVariant(str, Enum):
    FLAT = "flat"
    DIFFICULTY_WEIGHTED = "difficulty_weighted"


@dataclass(frozen=True)
class ScoreBreakdown:
    base_points: int
    time_bonus: int
    accuracy: int
    accuracy_bonus: int

    @property
    def points(self) -> int:
        return self.base_points + self.time_bonus + self.accuracy_bonus


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (12.5 -> 13, not 12)."""
    return math.floor(value + 0.5)


def calculate_accuracy(correct_count: int, total_count: int) -> int:
    """Percentage of correct answers, rounded half-up."""
    if total_count < 1:
        raise EmptySubmission
    if not 0 <= correct_count <= total_count:
        msg = f"correct_count must be within 0..{total_count}, got {correct_count}"
        raise ValueError(msg)
    return round_half_up(correct_count / total_count * 100)


def time_bonus(total_time_seconds: float) -> int:
    for limit, bonus in TIME_BONUS_TIERS:
        if total_time_seconds < limit:
            return bonus
    return 0


def accuracy_bonus(accuracy: int) -> int:
    for floor_, bonus in ACCURACY_BONUS_TIERS:
        if accuracy >= floor_:
            return bonus
    return 0


def score(correct_count: int, total_count: int, total_time_seconds: float) -> ScoreBreakdown:
    """Flat formula: base + time bonus + accuracy bonus.

    >>> score(5, 5, 120).points
    800
    """
    accuracy = calculate_accuracy(correct_count, total_count)
    return ScoreBreakdown(
        base_points=correct_count * POINTS_PER_CORRECT,
        time_bonus=time_bonus(total_time_seconds),
        accuracy=accuracy,
        accuracy_bonus=accuracy_bonus(accuracy),
    )


def score_weighted(
    correct_count: int,
    total_count: int,
    total_time_seconds: float,
    average_difficulty: float,
) -> ScoreBreakdown:
    """Difficulty-weighted formula: base points multiplied by average difficulty."""
    if average_difficulty <= 0:
        msg = f"average_difficulty must be positive, got {average_difficulty}"
        raise ValueError(msg)
    flat = score(correct_count, total_count, total_time_seconds)
    return ScoreBreakdown(
        base_points=round_half_up(flat.base_points * average_difficulty),
        time_bonus=flat.time_bonus,
        accuracy=flat.accuracy,
        accuracy_bonus=flat.accuracy_bonus,
    )


def average_difficulty(difficulties: list[int]) -> float:
    if not difficulties:
        raise EmptySubmission
    return sum(difficulties) / len(difficulties)


def calculate_score(
    variant: ScoringVariant,
    correct_count: int,
    total_count: int,
    total_time_seconds: float,
    difficulties: list[int] | None = None,
) -> ScoreBreakdown:
    """Dispatch to the configured variant."""
    if variant is ScoringVariant.DIFFICULTY_WEIGHTED:
        return score_weighted(
            correct_count,
            total_count,
            total_time_seconds,
            average_difficulty(difficulties or []),
        )
    return score(correct_count, total_count, total_time_seconds)
