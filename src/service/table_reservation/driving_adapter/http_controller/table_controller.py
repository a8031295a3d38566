from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.query.get_availability_report_use_case import (
    GetAvailabilityReportUseCase,
)
from src.service.table_reservation.app.query.list_tables_use_case import ListTablesUseCase
from src.service.table_reservation.domain.value_object.identifiers import TableId
from src.service.table_reservation.driving_adapter.http_controller.reservation_controller import (
    build_reservation_time,
)
from src.service.table_reservation.driving_adapter.http_controller.schema.reservation_schema import (
    AvailabilityReportResponse,
    ReservationResponse,
)
from src.service.table_reservation.driving_adapter.http_controller.schema.table_schema import (
    TableResponse,
)


router = APIRouter()


@router.get('')
@Logger.io
async def list_active_tables(
    use_case: ListTablesUseCase = Depends(ListTablesUseCase.depends),
) -> List[TableResponse]:
    return [TableResponse.from_table(table) for table in await use_case.list_active()]


@router.get('/available')
@Logger.io
async def list_available_tables(
    people: int = Query(..., description='Party size'),
    start: datetime = Query(..., description='Requested start (ISO 8601)'),
    duration: Optional[int] = Query(None, description='Duration in minutes, default 120'),
    use_case: ListTablesUseCase = Depends(ListTablesUseCase.depends),
) -> List[TableResponse]:
    tables = await use_case.list_available(
        number_of_people=people, reservation_time=build_reservation_time(start, duration)
    )
    return [TableResponse.from_table(table) for table in tables]


@router.get('/capacity/{number_of_people}')
@Logger.io
async def list_tables_by_capacity(
    number_of_people: int,
    use_case: ListTablesUseCase = Depends(ListTablesUseCase.depends),
) -> List[TableResponse]:
    tables = await use_case.list_by_capacity(number_of_people=number_of_people)
    return [TableResponse.from_table(table) for table in tables]


@router.get('/{table_id}')
@Logger.io
async def get_table(
    table_id: str,
    use_case: ListTablesUseCase = Depends(ListTablesUseCase.depends),
) -> TableResponse:
    return TableResponse.from_table(await use_case.get_table(table_id=TableId(table_id)))


@router.get('/{table_id}/availability/{on_date}')
@Logger.io
async def get_availability_report(
    table_id: str,
    on_date: date,
    use_case: GetAvailabilityReportUseCase = Depends(GetAvailabilityReportUseCase.depends),
) -> AvailabilityReportResponse:
    report = await use_case.get_report(table_id=TableId(table_id), on_date=on_date)
    return AvailabilityReportResponse(
        table_id=str(report.table_id),
        date=report.date,
        total_reservations=report.total_reservations,
        available_slots=report.available_slots,
        occupancy_rate=report.occupancy_rate,
        is_fully_occupied=report.is_fully_occupied,
        reservations=[ReservationResponse.from_reservation(r) for r in report.reservations],
    )
