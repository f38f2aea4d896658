"""In-memory record store: one dict per kind, auto-incrementing ids."""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from cq.store.base import RecordStore
from cq.store.records import AUTO_ID_KINDS, KEY_FIELDS, Kind, Record, record_key

logger = logging.getLogger(__name__)


class MemoryStore(RecordStore):
    """Map-backed store for a single process.

    Transactions hold an asyncio.Lock for their whole duration and snapshot
    every table on entry; any exception restores the snapshot before it
    propagates, so a failed submission leaves no trace.
    """

    def __init__(self) -> None:
        self._tables: dict[Kind, dict[int, Record]] = {kind: {} for kind in Kind}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def get(self, kind: Kind, key: int) -> Any | None:  # noqa: ANN401
        record = self._tables[kind].get(key)
        return record.model_copy(deep=True) if record is not None else None

    async def list(self, kind: Kind, **filters: Any) -> list[Any]:  # noqa: ANN401
        rows = []
        for key in sorted(self._tables[kind]):
            record = self._tables[kind][key]
            if all(getattr(record, field) == value for field, value in filters.items()):
                rows.append(record.model_copy(deep=True))
        return rows

    async def put(self, kind: Kind, record: Record) -> Any:  # noqa: ANN401
        key = record_key(kind, record)
        if key is None:
            if kind not in AUTO_ID_KINDS:
                msg = f"{kind.value} records require {KEY_FIELDS[kind]}"
                raise ValueError(msg)
            key = self._next_id
            self._next_id += 1
            record = record.model_copy(update={KEY_FIELDS[kind]: key})
        elif kind in AUTO_ID_KINDS:
            self._next_id = max(self._next_id, key + 1)

        stored = record.model_copy(deep=True)
        self._tables[kind][key] = stored
        return stored.model_copy(deep=True)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._lock:
            snapshot = copy.deepcopy(self._tables)
            next_id = self._next_id
            try:
                yield
            except BaseException:
                self._tables = snapshot
                self._next_id = next_id
                logger.debug("Memory store transaction rolled back")
                raise
