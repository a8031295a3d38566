from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.dto.availability_report import AvailabilityReport
from src.service.table_reservation.app.interface.i_table_repo import ITableRepo
from src.service.table_reservation.app.service.availability_service import AvailabilityService
from src.service.table_reservation.domain.value_object.identifiers import TableId


class GetAvailabilityReportUseCase:
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
    async def get_report(self, *, table_id: TableId, on_date: date) -> AvailabilityReport:
        if not await self.table_repo.get_by_id(table_id=table_id):
            raise NotFoundError(f'Table not found: {table_id}')
        return await self.availability_service.get_availability_report(
            table_id=table_id, on_date=on_date
        )
