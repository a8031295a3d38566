from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Iterable

from src.service.table_reservation.domain.value_object.identifiers import TableId


class ITableLock(ABC):
    """
    Per-table critical section around every reservation write: "check availability +
    persist" for bookings and moves, "reload + transition" for status changes.

    Usage:
        async with table_lock.hold([table_id]):
            ...  # availability check, save, commit

    Raises TableLockTimeoutError if a lock cannot be taken in time.
    """

    @abstractmethod
    def hold(self, table_ids: Iterable[TableId]) -> AbstractAsyncContextManager[None]:
        pass
