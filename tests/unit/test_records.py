"""Record model and partial-update merge tests."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from cq.store.records import (
    Kind,
    Progress,
    ProgressUpdate,
    Stats,
    StatsUpdate,
    Topic,
    merge_progress,
    merge_stats,
    record_key,
)


class TestMergeProgress:
    def test_creates_zeroed_record_when_missing(self):
        merged = merge_progress(None, 7, ProgressUpdate(best_score=300))
        assert merged.topic_id == 7
        assert merged.best_score == 300
        assert merged.questions_completed == 0
        assert merged.level == "Beginner"

    def test_unset_fields_are_kept(self):
        existing = Progress(topic_id=1, questions_completed=5, best_score=800, total_points=1200, level="Intermediate")
        merged = merge_progress(existing, 1, ProgressUpdate(total_points=1500))
        assert merged.total_points == 1500
        assert merged.best_score == 800
        assert merged.questions_completed == 5
        assert merged.level == "Intermediate"

    def test_existing_is_not_mutated(self):
        existing = Progress(topic_id=1, best_score=100)
        merge_progress(existing, 1, ProgressUpdate(best_score=200, last_played=datetime.now(timezone.utc)))
        assert existing.best_score == 100
        assert existing.last_played is None

    def test_invalid_level_rejected(self):
        with pytest.raises(ValidationError):
            ProgressUpdate(level="Grandmaster")


class TestMergeStats:
    def test_zeroed_base(self):
        merged = merge_stats(None, StatsUpdate(challenges_completed=1))
        assert merged.challenges_completed == 1
        assert merged.total_score == 0
        assert merged.level == 1

    def test_only_set_fields_change(self):
        existing = Stats(total_score=500, accuracy=90, streak=3, last_played_on=date(2026, 3, 1))
        merged = merge_stats(existing, StatsUpdate(total_score=900))
        assert merged.total_score == 900
        assert merged.accuracy == 90
        assert merged.streak == 3
        assert merged.last_played_on == date(2026, 3, 1)

    def test_accuracy_bounds(self):
        with pytest.raises(ValidationError):
            StatsUpdate(accuracy=101)


class TestRecordKey:
    def test_progress_keyed_by_topic(self):
        assert record_key(Kind.PROGRESS, Progress(topic_id=4)) == 4

    def test_new_topic_has_no_key(self):
        assert record_key(Kind.TOPIC, Topic(name="X", country="Y")) is None
