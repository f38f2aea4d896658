"""Post-commit gamification events pushed over Redis pub/sub."""

from __future__ import annotations

import json
import logging

from cq.store.records import Achievement, Progress

logger = logging.getLogger(__name__)

ACHIEVEMENT_UNLOCKED_CHANNEL = "pubsub:achievement_unlocked"
LEVEL_UP_CHANNEL = "pubsub:level_up"


async def publish_achievement_unlocked(redis: object | None, achievement: Achievement) -> None:
    """Broadcast an unlocked achievement for live clients."""
    if redis is None:
        return
    try:
        await redis.publish(  # type: ignore[union-attr]
            ACHIEVEMENT_UNLOCKED_CHANNEL,
            json.dumps({
                "achievement_id": achievement.id,
                "title": achievement.title,
                "requirement": achievement.requirement,
                "points": achievement.points,
                "icon": achievement.icon,
            }),
        )
    except Exception:
        logger.warning("Failed to publish achievement_unlocked event", exc_info=True)


async def publish_level_up(redis: object | None, progress: Progress, old_level: str) -> None:
    """Broadcast a topic level change."""
    if redis is None:
        return
    try:
        await redis.publish(  # type: ignore[union-attr]
            LEVEL_UP_CHANNEL,
            json.dumps({
                "topic_id": progress.topic_id,
                "old_level": old_level,
                "new_level": progress.level,
            }),
        )
    except Exception:
        logger.warning("Failed to publish level_up event", exc_info=True)
