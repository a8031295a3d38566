from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from src.platform.clock import to_local_naive
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.table_reservation.app.command.complete_reservation_use_case import (
    CompleteReservationUseCase,
)
from src.service.table_reservation.app.command.confirm_reservation_use_case import (
    ConfirmReservationUseCase,
)
from src.service.table_reservation.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.table_reservation.app.command.mark_no_show_reservation_use_case import (
    MarkNoShowReservationUseCase,
)
from src.service.table_reservation.app.command.update_reservation_use_case import (
    UpdateReservationUseCase,
)
from src.service.table_reservation.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.table_reservation.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.table_reservation.domain.business_config import ReservationWindow
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.customer_info import CustomerInfo
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime
from src.service.table_reservation.driving_adapter.http_controller.schema.reservation_schema import (
    CreateReservationRequest,
    ReservationResponse,
    UpdateReservationRequest,
)


router = APIRouter()


def build_reservation_time(start: datetime, duration_minutes: Optional[int]) -> ReservationTime:
    """
    Shape checks only. Hours, lead time and horizon are left to the availability
    engine so the caller gets the specific rule that failed.
    """
    return ReservationTime(
        start=to_local_naive(start),
        duration_minutes=(
            ReservationWindow.DEFAULT_DURATION_MINUTES
            if duration_minutes is None
            else duration_minutes
        ),
    )


def parse_status(raw: str) -> ReservationStatus:
    try:
        return ReservationStatus(raw.strip().lower().replace('-', '_'))
    except ValueError:
        allowed = ', '.join(s.value for s in ReservationStatus)
        raise ValidationError(f'Invalid reservation status: {raw} (expected one of {allowed})')


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_reservation(
    request: CreateReservationRequest,
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReservationResponse:
    customer_info = CustomerInfo(
        name=request.customer_name,
        email=request.customer_email,
        phone=request.customer_phone,
        special_requests=request.special_requests,
    )
    reservation = await use_case.create_reservation(
        table_id=TableId(request.table_id),
        number_of_people=request.number_of_people,
        customer_info=customer_info,
        reservation_time=build_reservation_time(
            request.reservation_date_time, request.duration_minutes
        ),
    )
    return ReservationResponse.from_reservation(reservation)


@router.get('/customer/{email}')
@Logger.io
async def list_by_customer(
    email: str,
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.by_customer_email(email=email)
    return [ReservationResponse.from_reservation(r) for r in reservations]


@router.get('/date/{on_date}')
@Logger.io
async def list_by_date(
    on_date: date,
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.by_date(on_date=on_date)
    return [ReservationResponse.from_reservation(r) for r in reservations]


@router.get('/status/{reservation_status}')
@Logger.io
async def list_by_status(
    reservation_status: str,
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.by_status(status=parse_status(reservation_status))
    return [ReservationResponse.from_reservation(r) for r in reservations]


@router.get('/table/{table_id}/date/{on_date}')
@Logger.io
async def list_by_table_and_date(
    table_id: str,
    on_date: date,
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.by_table_and_date(table_id=TableId(table_id), on_date=on_date)
    return [ReservationResponse.from_reservation(r) for r in reservations]


@router.get('/{reservation_id}')
@Logger.io
async def get_reservation(
    reservation_id: str,
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.get_reservation(ReservationId(reservation_id))
    return ReservationResponse.from_reservation(reservation)


@router.put('/{reservation_id}')
@Logger.io
async def update_reservation(
    reservation_id: str,
    request: UpdateReservationRequest,
    use_case: UpdateReservationUseCase = Depends(UpdateReservationUseCase.depends),
) -> ReservationResponse:
    if request.reservation_date_time is None and request.duration_minutes is not None:
        raise ValidationError('reservation_date_time is required when changing the duration')

    reservation_time = (
        build_reservation_time(request.reservation_date_time, request.duration_minutes)
        if request.reservation_date_time is not None
        else None
    )
    reservation = await use_case.update_reservation(
        reservation_id=ReservationId(reservation_id),
        table_id=TableId(request.table_id) if request.table_id is not None else None,
        number_of_people=request.number_of_people,
        reservation_time=reservation_time,
    )
    return ReservationResponse.from_reservation(reservation)


@router.put('/{reservation_id}/confirm')
@Logger.io
async def confirm_reservation(
    reservation_id: str,
    use_case: ConfirmReservationUseCase = Depends(ConfirmReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.confirm_reservation(reservation_id=ReservationId(reservation_id))
    return ReservationResponse.from_reservation(reservation)


@router.put('/{reservation_id}/cancel')
@Logger.io
async def cancel_reservation(
    reservation_id: str,
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.cancel_reservation(reservation_id=ReservationId(reservation_id))
    return ReservationResponse.from_reservation(reservation)


@router.put('/{reservation_id}/complete')
@Logger.io
async def complete_reservation(
    reservation_id: str,
    use_case: CompleteReservationUseCase = Depends(CompleteReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.complete_reservation(reservation_id=ReservationId(reservation_id))
    return ReservationResponse.from_reservation(reservation)


@router.put('/{reservation_id}/no-show')
@Logger.io
async def mark_no_show(
    reservation_id: str,
    use_case: MarkNoShowReservationUseCase = Depends(MarkNoShowReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.mark_no_show(reservation_id=ReservationId(reservation_id))
    return ReservationResponse.from_reservation(reservation)
