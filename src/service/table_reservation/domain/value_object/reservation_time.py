from datetime import date, datetime, timedelta
from typing import Any, Optional

import attrs

from src.platform.clock import add_months, local_now
from src.platform.exception.exceptions import ValidationError
from src.service.table_reservation.domain.business_config import (
    OperatingHours,
    ReservationWindow,
)
from src.service.table_reservation.domain.validators import NumericValidators, TimeValidators


@attrs.frozen
class ReservationTime:
    """
    A reservation slot: start plus duration, end exclusive.

    Plain construction only checks the shape (datetime start, 30 to 480
    minutes). `create()` additionally enforces the booking rules (future
    start, operating hours, 3-month horizon) and is what new requests go
    through.
    """

    start: datetime = attrs.field(validator=TimeValidators.validate_start)
    duration_minutes: int = attrs.field(
        default=ReservationWindow.DEFAULT_DURATION_MINUTES,
        validator=NumericValidators.validate_duration,
    )

    @classmethod
    def create(
        cls,
        start: Any,
        duration_minutes: Optional[int] = None,
        *,
        now: Optional[datetime] = None,
    ) -> 'ReservationTime':
        slot = cls(
            start=start,
            duration_minutes=(
                ReservationWindow.DEFAULT_DURATION_MINUTES
                if duration_minutes is None
                else duration_minutes
            ),
        )
        now = now or local_now()

        if not slot.is_within_operating_hours():
            raise ValidationError(
                f'Reservation must start and end between {OperatingHours.OPEN:%H:%M} '
                f'and {OperatingHours.CLOSE:%H:%M} on the same day'
            )
        if slot.start <= now:
            raise ValidationError('Reservation time cannot be in the past')
        if slot.start > add_months(now, ReservationWindow.HORIZON_MONTHS):
            raise ValidationError(
                f'Reservation time cannot be more than {ReservationWindow.HORIZON_MONTHS} '
                'months in the future'
            )
        return slot

    @property
    def end_time(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    @property
    def date(self) -> date:
        return self.start.date()

    def overlaps(self, other: Optional['ReservationTime']) -> bool:
        """Half-open interval overlap: a slot ending at 14:00 does not clash with one starting at 14:00."""
        if other is None:
            return False
        return self.start < other.end_time and self.end_time > other.start

    def is_within_operating_hours(self) -> bool:
        end = self.end_time
        return (
            self.start.time() >= OperatingHours.OPEN
            and end.date() == self.start.date()
            and end.time() <= OperatingHours.CLOSE
        )

    def is_today(self, now: Optional[datetime] = None) -> bool:
        return self.date == (now or local_now()).date()

    def is_tomorrow(self, now: Optional[datetime] = None) -> bool:
        return self.date == (now or local_now()).date() + timedelta(days=1)

    @property
    def formatted(self) -> str:
        return self.start.strftime('%d/%m/%Y %H:%M')
