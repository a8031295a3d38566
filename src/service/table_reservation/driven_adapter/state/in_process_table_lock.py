"""
In-process table lock

One asyncio.Lock per table id. Good for a single worker process; use
RedisTableLock when several workers share the database.

A table's lock lives only while someone holds or waits for it, so the map
stays as small as the number of tables being booked right now.
"""

import asyncio
from collections import Counter
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Optional

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import TableLockTimeoutError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.domain.value_object.identifiers import TableId


class InProcessTableLock(ITableLock):
    def __init__(self, *, timeout_seconds: Optional[float] = None) -> None:
        self.timeout_seconds = (
            settings.TABLE_LOCK_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self._locks: dict[str, asyncio.Lock] = {}
        # Holders plus waiters per table
        self._users: Counter[str] = Counter()

    def _check_out(self, key: str) -> asyncio.Lock:
        self._users[key] += 1
        return self._locks.setdefault(key, asyncio.Lock())

    def _check_in(self, key: str) -> None:
        self._users[key] -= 1
        if self._users[key] <= 0:
            del self._users[key]
            self._locks.pop(key, None)

    @asynccontextmanager
    async def hold(self, table_ids: Iterable[TableId]) -> AsyncIterator[None]:
        # Sorted acquisition order keeps two multi-table holders from deadlocking
        keys = sorted({str(table_id) for table_id in table_ids})
        # Checked out before the first await so a releasing holder cannot drop them
        locks = [self._check_out(key) for key in keys]
        acquired: list[asyncio.Lock] = []
        try:
            for key, lock in zip(keys, locks):
                try:
                    await asyncio.wait_for(lock.acquire(), timeout=self.timeout_seconds)
                except asyncio.TimeoutError:
                    Logger.base.warning(f'⏳ [LOCK] Timed out waiting for table {key}')
                    raise TableLockTimeoutError(
                        f'Table {key} is busy, please retry'
                    ) from None
                acquired.append(lock)
            Logger.base.debug(f'🔒 [LOCK] Holding tables {keys}')
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key in keys:
                self._check_in(key)
