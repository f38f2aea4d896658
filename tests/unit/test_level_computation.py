"""Topic level computation: must match the client's calculateLevel()."""

import pytest

from cq.gamification.level_thresholds import (
    DEFAULT_LEVEL,
    TOPIC_LEVEL_THRESHOLDS,
    compute_topic_level,
    progress_percent,
)


class TestTopicLevel:
    @pytest.mark.parametrize(
        ("completed", "level"),
        [
            (0, "Beginner"),
            (2, "Beginner"),
            (3, "Intermediate"),
            (5, "Intermediate"),
            (6, "Advanced"),
            (7, "Advanced"),
            (8, "Expert"),
            (40, "Expert"),
        ],
    )
    def test_thresholds(self, completed, level):
        assert compute_topic_level(completed) == level

    def test_default_is_beginner(self):
        assert DEFAULT_LEVEL == "Beginner"

    def test_thresholds_are_contiguous(self):
        for lower, upper in zip(TOPIC_LEVEL_THRESHOLDS, TOPIC_LEVEL_THRESHOLDS[1:]):
            assert upper["min_completed"] == lower["max_completed"] + 1
        assert TOPIC_LEVEL_THRESHOLDS[-1]["max_completed"] is None


class TestProgressPercent:
    def test_rounds_half_up(self):
        assert progress_percent(1, 8) == 13
        assert progress_percent(5, 8) == 63

    def test_complete(self):
        assert progress_percent(8, 8) == 100

    def test_zero_total(self):
        assert progress_percent(0, 0) == 0
