"""SQL record store on async SQLAlchemy sessions."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cq.db.models import (
    AchievementRow,
    ProgressRow,
    QuestionRow,
    StatsRow,
    TopicRow,
    UnlockedAchievementRow,
)
from cq.errors import StoreUnavailable
from cq.store.base import RecordStore
from cq.store.records import KEY_FIELDS, RECORD_TYPES, Kind, Record, record_key

logger = logging.getLogger(__name__)

ROW_TYPES: dict[Kind, type] = {
    Kind.TOPIC: TopicRow,
    Kind.QUESTION: QuestionRow,
    Kind.PROGRESS: ProgressRow,
    Kind.ACHIEVEMENT: AchievementRow,
    Kind.UNLOCKED_ACHIEVEMENT: UnlockedAchievementRow,
    Kind.STATS: StatsRow,
}


class SqlStore(RecordStore):
    """Record store persisted through SQLAlchemy.

    Inside ``transaction()`` every call made from the same task shares one
    session and one database transaction; outside it each call opens a
    short-lived session and commits its own write. Driver and SQL errors
    surface as StoreUnavailable.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._current: ContextVar[AsyncSession | None] = ContextVar("sql_store_session", default=None)
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def _session(self, write: bool = False) -> AsyncIterator[AsyncSession]:
        current = self._current.get()
        if current is not None:
            yield current
            return
        try:
            async with self._session_factory() as session:
                yield session
                if write:
                    await session.commit()
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Record store failure: {exc}") from exc

    async def get(self, kind: Kind, key: int) -> Any | None:  # noqa: ANN401
        async with self._session() as session:
            row = await session.get(ROW_TYPES[kind], key)
            return RECORD_TYPES[kind].model_validate(row) if row is not None else None

    async def list(self, kind: Kind, **filters: Any) -> list[Any]:  # noqa: ANN401
        row_type = ROW_TYPES[kind]
        stmt = select(row_type).filter_by(**filters).order_by(getattr(row_type, KEY_FIELDS[kind]))
        async with self._session() as session:
            result = await session.execute(stmt)
            return [RECORD_TYPES[kind].model_validate(row) for row in result.scalars()]

    async def put(self, kind: Kind, record: Record) -> Any:  # noqa: ANN401
        data = record.model_dump()
        if record_key(kind, record) is None:
            data.pop(KEY_FIELDS[kind])
        async with self._session(write=True) as session:
            row = await session.merge(ROW_TYPES[kind](**data))
            await session.flush()
            return RECORD_TYPES[kind].model_validate(row)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._lock:
            try:
                async with self._session_factory() as session, session.begin():
                    token = self._current.set(session)
                    try:
                        yield
                    finally:
                        self._current.reset(token)
            except SQLAlchemyError as exc:
                logger.warning("SQL store transaction rolled back", exc_info=True)
                raise StoreUnavailable(f"Record store failure: {exc}") from exc

    async def ping(self) -> bool:
        async with self._session() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar() == 1
