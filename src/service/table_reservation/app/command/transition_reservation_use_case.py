from typing import Callable

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, TableLockTimeoutError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_event_dispatcher import (
    IReservationEventDispatcher,
)
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId


# Rounds of "read table -> lock it -> reload" before giving up on a reservation
# that keeps being moved by concurrent updates
LOCK_ATTEMPTS = 3


async def load_reservation(uow: AbstractUnitOfWork, reservation_id: ReservationId) -> Reservation:
    reservation = await uow.reservation_command_repo.get_by_id(reservation_id=reservation_id)
    if not reservation:
        raise NotFoundError(f'Reservation not found: {reservation_id}')
    return reservation


async def read_table_id(uow: AbstractUnitOfWork, reservation_id: ReservationId) -> TableId:
    """Unlocked read; the caller must re-check the table after taking the lock."""
    async with uow:
        return (await load_reservation(uow, reservation_id)).table_id


def reservation_kept_moving(reservation_id: ReservationId) -> TableLockTimeoutError:
    return TableLockTimeoutError(
        f'Reservation {reservation_id} is being moved between tables, please retry'
    )


class TransitionReservationUseCase:
    """
    Lock table -> load -> transition -> save -> commit -> dispatch.

    Every write to a reservation runs under the lock of the table it sits on,
    so two transitions (or a transition and a move) on the same reservation
    are applied one after the other; the second sees the first's status.

    Events are drained only after a successful commit; if anything before
    that raises, the Unit of Work rolls back and the mutated aggregate is
    dropped with its queued events.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        table_lock: ITableLock,
        event_dispatcher: IReservationEventDispatcher,
    ) -> None:
        self.uow = uow
        self.table_lock = table_lock
        self.event_dispatcher = event_dispatcher

    async def _transition(
        self, *, reservation_id: ReservationId, apply: Callable[[Reservation], None]
    ) -> Reservation:
        for _ in range(LOCK_ATTEMPTS):
            table_id = await read_table_id(self.uow, reservation_id)
            async with self.table_lock.hold([table_id]):
                async with self.uow:
                    reservation = await load_reservation(self.uow, reservation_id)
                    if reservation.table_id != table_id:
                        Logger.base.info(
                            f'🔁 [RESERVATION] {reservation_id} moved off {table_id}, relocking'
                        )
                        continue

                    apply(reservation)
                    saved = await self.uow.reservation_command_repo.save(reservation=reservation)
                    await self.uow.commit()

            publish_events(dispatcher=self.event_dispatcher, reservation=reservation)
            return saved

        raise reservation_kept_moving(reservation_id)


def publish_events(*, dispatcher: IReservationEventDispatcher, reservation: Reservation) -> None:
    events = reservation.pull_domain_events()
    for event in events:
        dispatcher.dispatch(event)
    if events:
        Logger.base.info(
            f'📤 [RESERVATION] Dispatched {len(events)} event(s) for reservation {reservation.id}'
        )
