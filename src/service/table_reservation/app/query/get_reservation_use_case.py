from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.value_object.identifiers import ReservationId


class GetReservationUseCase:
    def __init__(self, reservation_query_repo: IReservationQueryRepo):
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def get_reservation(self, reservation_id: ReservationId) -> Reservation:
        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)

        if not reservation:
            raise NotFoundError(f'Reservation not found: {reservation_id}')

        return reservation
