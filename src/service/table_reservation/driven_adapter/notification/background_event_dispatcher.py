import asyncio
from typing import Set

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_event_dispatcher import (
    IReservationEventDispatcher,
)
from src.service.table_reservation.domain.domain_event.reservation_domain_event import (
    ReservationDomainEvent,
)
from src.service.table_reservation.driven_adapter.notification.reservation_notifier import (
    ReservationNotifier,
)


class BackgroundEventDispatcher(IReservationEventDispatcher):
    """
    Deliver each event on its own asyncio task.

    The caller never waits on delivery and never sees its failures; they
    are logged here. Running tasks are referenced until they finish so the
    event loop cannot garbage-collect them mid-flight.
    """

    def __init__(self, *, notifier: ReservationNotifier) -> None:
        self.notifier = notifier
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, event: ReservationDomainEvent) -> None:
        task = asyncio.create_task(
            self._deliver(event), name=f'notify-{event.event_type}-{event.event_id}'
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(self, event: ReservationDomainEvent) -> None:
        try:
            await self.notifier.notify(event)
        except Exception as e:
            Logger.base.error(
                f'❌ [NOTIFICATION] Failed to deliver {event.event_type} '
                f'for reservation {event.reservation_id}: {e}'
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def wait_until_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
