"""Record store lifecycle: picks the backing from settings."""

from __future__ import annotations

import logging

from cq.config import Settings
from cq.database import close_db, get_session_factory, init_db
from cq.store.base import RecordStore
from cq.store.memory import MemoryStore
from cq.store.sql import SqlStore

logger = logging.getLogger(__name__)

_store: RecordStore | None = None


async def init_store(settings: Settings) -> RecordStore:
    """Initialize the process-wide record store."""
    global _store  # noqa: PLW0603
    if settings.store_backend == "sql":
        await init_db(settings.database_url)
        _store = SqlStore(get_session_factory())
    elif settings.store_backend == "memory":
        _store = MemoryStore()
    else:
        msg = f"Unknown store backend: {settings.store_backend!r}"
        raise ValueError(msg)
    logger.info("Record store initialized (backend=%s)", settings.store_backend)
    return _store


def set_store(store: RecordStore) -> None:
    """Install an already-built store (used by tests and embedding callers)."""
    global _store  # noqa: PLW0603
    _store = store


async def close_store() -> None:
    """Release the record store and its database engine, if any."""
    global _store  # noqa: PLW0603
    if _store is not None:
        await _store.close()
        _store = None
    await close_db()


def get_store() -> RecordStore:
    """Get the record store."""
    if _store is None:
        msg = "Record store not initialized. Call init_store() first."
        raise RuntimeError(msg)
    return _store
