from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.clock import Clock, local_now
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import InvalidStateTransition, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.command.transition_reservation_use_case import (
    LOCK_ATTEMPTS,
    load_reservation,
    publish_events,
    read_table_id,
    reservation_kept_moving,
)
from src.service.table_reservation.app.interface.i_reservation_event_dispatcher import (
    IReservationEventDispatcher,
)
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.app.service.availability_service import AvailabilityService
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.validators import NumericValidators
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime


class UpdateReservationUseCase:
    """
    Move a reservation to another table/time and/or change the party size.

    Omitted fields keep their current value. Only a changed table/time pair
    is re-checked for availability; the pair being left is never re-validated.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        table_lock: ITableLock,
        event_dispatcher: IReservationEventDispatcher,
        clock: Clock = local_now,
    ) -> None:
        self.uow = uow
        self.table_lock = table_lock
        self.event_dispatcher = event_dispatcher
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        table_lock: ITableLock = Depends(Provide[Container.table_lock]),
        event_dispatcher: IReservationEventDispatcher = Depends(
            Provide[Container.event_dispatcher]
        ),
    ) -> Self:
        return cls(uow=uow, table_lock=table_lock, event_dispatcher=event_dispatcher)

    @Logger.io
    async def update_reservation(
        self,
        *,
        reservation_id: ReservationId,
        table_id: Optional[TableId] = None,
        number_of_people: Optional[int] = None,
        reservation_time: Optional[ReservationTime] = None,
    ) -> Reservation:
        if number_of_people is not None:
            NumericValidators.validate_number_of_people(number_of_people)

        for _ in range(LOCK_ATTEMPTS):
            # Both the table being left and the one being moved to are locked
            current_table_id = await read_table_id(self.uow, reservation_id)
            lock_ids = {current_table_id} if table_id is None else {current_table_id, table_id}
            async with self.table_lock.hold(lock_ids):
                async with self.uow:
                    reservation = await load_reservation(self.uow, reservation_id)
                    if reservation.table_id not in lock_ids:
                        Logger.base.info(
                            f'🔁 [RESERVATION] {reservation_id} moved to {reservation.table_id} '
                            f'while waiting for {sorted(str(t) for t in lock_ids)}, relocking'
                        )
                        continue
                    saved = await self._apply_update(
                        reservation,
                        table_id=table_id,
                        number_of_people=number_of_people,
                        reservation_time=reservation_time,
                    )
                    await self.uow.commit()

            publish_events(dispatcher=self.event_dispatcher, reservation=reservation)
            return saved

        raise reservation_kept_moving(reservation_id)

    async def _apply_update(
        self,
        reservation: Reservation,
        *,
        table_id: Optional[TableId],
        number_of_people: Optional[int],
        reservation_time: Optional[ReservationTime],
    ) -> Reservation:
        if not reservation.can_be_modified():
            raise InvalidStateTransition(
                f'Cannot modify reservation in status: {reservation.status.display_name}'
            )

        new_table_id = table_id or reservation.table_id
        new_time = reservation_time or reservation.reservation_time
        new_party = reservation.number_of_people if number_of_people is None else number_of_people
        moved = new_table_id != reservation.table_id or new_time != reservation.reservation_time

        if moved or new_party > reservation.number_of_people:
            table = await self.uow.table_repo.get_by_id(table_id=new_table_id)
            if not table:
                raise NotFoundError(f'Table not found: {new_table_id}')
            table.ensure_can_accommodate(new_party)

        if moved:
            availability = AvailabilityService(
                reservation_repo=self.uow.reservation_command_repo,
                table_repo=self.uow.table_repo,
                clock=self.clock,
            )
            await availability.check_availability(
                table_id=new_table_id,
                reservation_time=new_time,
                exclude_reservation_id=reservation.id,
            )

        reservation.modify(new_table_id, new_time, number_of_people=number_of_people)
        return await self.uow.reservation_command_repo.save(reservation=reservation)
