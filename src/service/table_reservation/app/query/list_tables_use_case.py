from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_repo import ITableRepo
from src.service.table_reservation.app.service.availability_service import AvailabilityService
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.validators import NumericValidators
from src.service.table_reservation.domain.value_object.identifiers import TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime


class ListTablesUseCase:
    def __init__(self, *, table_repo: ITableRepo, availability_service: AvailabilityService):
        self.table_repo = table_repo
        self.availability_service = availability_service

    @classmethod
    @inject
    def depends(
        cls,
        table_repo: ITableRepo = Depends(Provide[Container.table_repo]),
        availability_service: AvailabilityService = Depends(
            Provide[Container.availability_service]
        ),
    ) -> Self:
        return cls(table_repo=table_repo, availability_service=availability_service)

    @Logger.io
    async def list_active(self) -> List[Table]:
        return await self.table_repo.list_active()

    @Logger.io
    async def get_table(self, *, table_id: TableId) -> Table:
        table = await self.table_repo.get_by_id(table_id=table_id)
        if not table:
            raise NotFoundError(f'Table not found: {table_id}')
        return table

    @Logger.io
    async def list_by_capacity(self, *, number_of_people: int) -> List[Table]:
        NumericValidators.validate_number_of_people(number_of_people)
        return await self.table_repo.list_by_min_capacity(number_of_people=number_of_people)

    @Logger.io
    async def list_available(
        self, *, number_of_people: int, reservation_time: ReservationTime
    ) -> List[Table]:
        NumericValidators.validate_number_of_people(number_of_people)
        return await self.availability_service.find_available_tables(
            number_of_people=number_of_people, reservation_time=reservation_time
        )
