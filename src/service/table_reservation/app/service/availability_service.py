"""
Availability engine

Decides whether a table can take a candidate slot. Read-only: it queries
existing reservations and raises an AvailabilityError subclass naming the
first rule the candidate breaks, in this order:

1. OutOfHoursError - slot not inside 11:00-23:00 on one day
2. LeadTimeError   - starts less than the lead time from now
3. HorizonError    - starts more than 3 months from now
4. ConflictError   - overlaps an active reservation of the same table
"""

from datetime import date, datetime, timedelta
from typing import List, Optional

from src.platform.clock import Clock, add_months, local_now
from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import (
    AvailabilityError,
    ConflictError,
    HorizonError,
    LeadTimeError,
    OutOfHoursError,
)
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.dto.availability_report import AvailabilityReport
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.app.interface.i_table_repo import ITableRepo
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.business_config import (
    OperatingHours,
    PeakHours,
    ReservationWindow,
)
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime


def is_peak_time(moment: datetime) -> bool:
    return any(first <= moment.hour <= last for first, last in (PeakHours.LUNCH, PeakHours.DINNER))


class AvailabilityService:
    def __init__(
        self,
        *,
        reservation_repo: IReservationCommandRepo,
        table_repo: ITableRepo,
        lead_time_minutes: Optional[int] = None,
        clock: Clock = local_now,
    ) -> None:
        self.reservation_repo = reservation_repo
        self.table_repo = table_repo
        self.lead_time = timedelta(
            minutes=settings.RESERVATION_LEAD_TIME_MINUTES
            if lead_time_minutes is None
            else lead_time_minutes
        )
        self.clock = clock

    def check_business_rules(self, reservation_time: ReservationTime) -> None:
        """Rules 1-3, which do not depend on the table"""
        if not reservation_time.is_within_operating_hours():
            raise OutOfHoursError(
                f'Reservation must fit between {OperatingHours.OPEN:%H:%M} and '
                f'{OperatingHours.CLOSE:%H:%M} on the same day'
            )

        now = self.clock()
        if reservation_time.start < now + self.lead_time:
            raise LeadTimeError(
                f'Reservations must be made at least {int(self.lead_time.total_seconds() // 60)} '
                'minutes in advance'
            )
        if reservation_time.start > add_months(now, ReservationWindow.HORIZON_MONTHS):
            raise HorizonError(
                f'Reservations cannot be made more than {ReservationWindow.HORIZON_MONTHS} '
                'months in advance'
            )

    async def find_conflicts(
        self,
        *,
        table_id: TableId,
        reservation_time: ReservationTime,
        exclude_reservation_id: Optional[ReservationId] = None,
    ) -> List[Reservation]:
        same_day = await self.reservation_repo.find_for_table_on_date(
            table_id=table_id, on_date=reservation_time.date
        )
        return [
            reservation
            for reservation in same_day
            if reservation.status.is_active
            and reservation.id != exclude_reservation_id
            and reservation.reservation_time.overlaps(reservation_time)
        ]

    @Logger.io
    async def check_availability(
        self,
        *,
        table_id: TableId,
        reservation_time: ReservationTime,
        exclude_reservation_id: Optional[ReservationId] = None,
    ) -> None:
        self.check_business_rules(reservation_time)

        if is_peak_time(reservation_time.start):
            Logger.base.info(f'🍽️ [AVAILABILITY] Peak time reservation for table {table_id}')

        conflicts = await self.find_conflicts(
            table_id=table_id,
            reservation_time=reservation_time,
            exclude_reservation_id=exclude_reservation_id,
        )
        if conflicts:
            Logger.base.warning(
                f'⚠️ [AVAILABILITY] Table {table_id} taken at {reservation_time.formatted} '
                f'({len(conflicts)} conflicting reservations)'
            )
            raise ConflictError('Table is not available at the requested time')

    async def is_table_available(
        self,
        *,
        table_id: TableId,
        reservation_time: ReservationTime,
        exclude_reservation_id: Optional[ReservationId] = None,
    ) -> bool:
        try:
            await self.check_availability(
                table_id=table_id,
                reservation_time=reservation_time,
                exclude_reservation_id=exclude_reservation_id,
            )
        except AvailabilityError as e:
            Logger.base.debug(f'[AVAILABILITY] Table {table_id} not available: {e.message}')
            return False
        return True

    @Logger.io
    async def find_available_tables(
        self, *, number_of_people: int, reservation_time: ReservationTime
    ) -> List[Table]:
        """Active tables big enough for the party with no conflicting reservation at that time.

        Business-rule violations are raised rather than reported as an empty list.
        """
        self.check_business_rules(reservation_time)

        candidates = await self.table_repo.list_by_min_capacity(number_of_people=number_of_people)
        available: List[Table] = []
        for table in candidates:
            if not table.can_accommodate(number_of_people):
                continue
            if not await self.find_conflicts(table_id=table.id, reservation_time=reservation_time):
                available.append(table)
        return available

    @Logger.io
    async def get_availability_report(self, *, table_id: TableId, on_date: date) -> AvailabilityReport:
        reservations = await self.reservation_repo.find_for_table_on_date(
            table_id=table_id, on_date=on_date
        )
        active = tuple(reservation for reservation in reservations if reservation.status.is_active)
        return AvailabilityReport(table_id=table_id, date=on_date, reservations=active)
