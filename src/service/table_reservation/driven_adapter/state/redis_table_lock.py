"""
Distributed table lock using Redis

SET key token NX PX ttl to acquire, retried until the timeout; a Lua
compare-and-delete releases only a lock we still own.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Optional
from uuid import uuid4

from redis.asyncio import Redis

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import TableLockTimeoutError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.domain.value_object.identifiers import TableId


RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


def lock_key(table_id: str) -> str:
    return f'lock:table:{table_id}'


class RedisTableLock(ITableLock):
    def __init__(
        self,
        *,
        redis: Redis,
        timeout_seconds: Optional[float] = None,
        ttl_seconds: Optional[int] = None,
        retry_interval_seconds: Optional[float] = None,
    ) -> None:
        self.redis = redis
        self.timeout_seconds = (
            settings.TABLE_LOCK_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self.ttl_ms = int(
            1000 * (settings.TABLE_LOCK_TTL_SECONDS if ttl_seconds is None else ttl_seconds)
        )
        self.retry_interval_seconds = (
            settings.TABLE_LOCK_RETRY_INTERVAL_SECONDS
            if retry_interval_seconds is None
            else retry_interval_seconds
        )

    async def _acquire(self, *, key: str, token: str) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout_seconds
        while True:
            if await self.redis.set(key, token, nx=True, px=self.ttl_ms):
                Logger.base.debug(f'🔒 [LOCK] Acquired {key} (ttl={self.ttl_ms}ms)')
                return
            if loop.time() >= deadline:
                Logger.base.warning(f'⏳ [LOCK] Timed out waiting for {key}')
                raise TableLockTimeoutError(f'Table {key.rsplit(":", 1)[-1]} is busy, please retry')
            await asyncio.sleep(self.retry_interval_seconds)

    async def _release(self, *, key: str, token: str) -> None:
        try:
            released = await self.redis.eval(RELEASE_SCRIPT, 1, key, token)  # type: ignore[misc]
        except Exception as e:
            # The TTL frees the key anyway; the caller's result must not change
            Logger.base.error(f'❌ [LOCK] Error releasing {key}: {e}')
            return
        if released:
            Logger.base.debug(f'🔓 [LOCK] Released {key}')
        else:
            Logger.base.warning(f'⚠️ [LOCK] {key} expired before release (ownership lost)')

    @asynccontextmanager
    async def hold(self, table_ids: Iterable[TableId]) -> AsyncIterator[None]:
        keys = [lock_key(table_id) for table_id in sorted({str(t) for t in table_ids})]
        token = str(uuid4())
        acquired: list[str] = []
        try:
            for key in keys:
                await self._acquire(key=key, token=token)
                acquired.append(key)
            yield
        finally:
            for key in reversed(acquired):
                await self._release(key=key, token=token)
