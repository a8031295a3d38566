from datetime import date
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.identifiers import TableId


class ListReservationsUseCase:
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
    async def by_customer_email(self, *, email: str) -> List[Reservation]:
        return await self.reservation_query_repo.list_by_customer_email(
            email=email.strip().lower()
        )

    @Logger.io
    async def by_date(self, *, on_date: date) -> List[Reservation]:
        return await self.reservation_query_repo.list_by_date(on_date=on_date)

    @Logger.io
    async def by_status(self, *, status: ReservationStatus) -> List[Reservation]:
        return await self.reservation_query_repo.list_by_status(status=status)

    @Logger.io
    async def by_table_and_date(self, *, table_id: TableId, on_date: date) -> List[Reservation]:
        return await self.reservation_query_repo.list_by_table_and_date(
            table_id=table_id, on_date=on_date
        )
