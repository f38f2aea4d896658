"""Daily play streak: consecutive UTC days with at least one submission."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def get_play_day(dt: datetime) -> date:
    """Calendar day of ``dt`` in UTC. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        return dt.date()
    return dt.astimezone(timezone.utc).date()


def advance_streak(current_streak: int, last_played_on: date | None, played_on: date) -> int:
    """Streak after playing on ``played_on``.

    Same day keeps the streak, the next day extends it, anything else
    (first play, a missed day, a clock that went backwards) restarts at 1.
    """
    if last_played_on is None:
        return 1
    if played_on == last_played_on:
        return max(current_streak, 1)
    if played_on == last_played_on + timedelta(days=1):
        return current_streak + 1
    return 1
