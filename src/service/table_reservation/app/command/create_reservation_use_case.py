from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.clock import Clock, local_now
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.command.transition_reservation_use_case import (
    publish_events,
)
from src.service.table_reservation.app.interface.i_reservation_event_dispatcher import (
    IReservationEventDispatcher,
)
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.app.service.availability_service import AvailabilityService
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.validators import NumericValidators
from src.service.table_reservation.domain.value_object.customer_info import CustomerInfo
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime


class CreateReservationUseCase:
    """
    Book a table for a party.

    Flow (under the table lock):
    1. Table must exist (NotFoundError)
    2. Table must be active and seat the party (CapacityError)
    3. Availability engine must accept the slot (AvailabilityError subclasses)
    4. Reservation is created PENDING, saved and committed
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
    async def create_reservation(
        self,
        *,
        table_id: TableId,
        number_of_people: int,
        customer_info: CustomerInfo,
        reservation_time: ReservationTime,
    ) -> Reservation:
        NumericValidators.validate_number_of_people(number_of_people)

        async with self.table_lock.hold([table_id]):
            async with self.uow:
                table = await self.uow.table_repo.get_by_id(table_id=table_id)
                if not table:
                    raise NotFoundError(f'Table not found: {table_id}')
                table.ensure_can_accommodate(number_of_people)

                availability = AvailabilityService(
                    reservation_repo=self.uow.reservation_command_repo,
                    table_repo=self.uow.table_repo,
                    clock=self.clock,
                )
                await availability.check_availability(
                    table_id=table_id, reservation_time=reservation_time
                )

                reservation = Reservation.create(
                    id=ReservationId.generate(),
                    table_id=table_id,
                    customer_info=customer_info,
                    reservation_time=reservation_time,
                    number_of_people=number_of_people,
                    now=self.clock(),
                )
                saved = await self.uow.reservation_command_repo.save(reservation=reservation)
                await self.uow.commit()

        Logger.base.info(
            f'✅ [RESERVATION] Created {saved.id} on table {table_id} at {reservation_time.formatted}'
        )
        publish_events(dispatcher=self.event_dispatcher, reservation=reservation)
        return saved
