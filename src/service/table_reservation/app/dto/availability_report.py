"""Availability report DTO."""

from datetime import date

import attrs

from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.business_config import DailyOccupancy
from src.service.table_reservation.domain.value_object.identifiers import TableId


@attrs.define(frozen=True)
class AvailabilityReport:
    """
    Occupancy of one table on one day, for capacity-planning screens.

    Counts active reservations only. It is a statistic, never a substitute
    for the availability check.
    """

    table_id: TableId
    date: date
    reservations: tuple[Reservation, ...] = ()

    @property
    def total_reservations(self) -> int:
        return len(self.reservations)

    @property
    def occupancy_rate(self) -> float:
        return self.total_reservations / DailyOccupancy.SLOTS_PER_DAY

    @property
    def is_fully_occupied(self) -> bool:
        return self.total_reservations >= DailyOccupancy.SLOTS_PER_DAY

    @property
    def available_slots(self) -> int:
        return max(0, DailyOccupancy.SLOTS_PER_DAY - self.total_reservations)
