"""Record store interface shared by the in-memory and SQL backings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from cq.store.records import Kind, Record


class RecordStore(ABC):
    """Narrow get/list/put store with a serialized, all-or-nothing transaction.

    ``get`` and ``list`` return copies; mutating a returned record has no
    effect until it is passed back to ``put``. ``put`` upserts by the kind's
    key field and assigns an id to new topics, questions and achievements.
    """

    @abstractmethod
    async def get(self, kind: Kind, key: int) -> Any | None:  # noqa: ANN401
        """Fetch one record by key, or None."""

    @abstractmethod
    async def list(self, kind: Kind, **filters: Any) -> list[Any]:  # noqa: ANN401
        """List records of a kind in key order, optionally filtered by field equality."""

    @abstractmethod
    async def put(self, kind: Kind, record: Record) -> Any:  # noqa: ANN401
        """Insert or replace a record. Returns the stored copy."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Serialize against other transactions and roll back on any exception."""

    async def ping(self) -> bool:
        """Readiness check."""
        return True

    async def close(self) -> None:
        """Release backing resources."""
