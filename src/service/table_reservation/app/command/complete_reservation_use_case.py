from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.command.transition_reservation_use_case import (
    TransitionReservationUseCase,
)
from src.service.table_reservation.app.interface.i_reservation_event_dispatcher import (
    IReservationEventDispatcher,
)
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.value_object.identifiers import ReservationId


class CompleteReservationUseCase(TransitionReservationUseCase):
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
    async def complete_reservation(self, *, reservation_id: ReservationId) -> Reservation:
        return await self._transition(reservation_id=reservation_id, apply=Reservation.complete)
