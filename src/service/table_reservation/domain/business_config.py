"""Restaurant business rules and limits."""

from datetime import time
from typing import Final


class TableLimits:
    MIN_CAPACITY: Final[int] = 1
    MAX_CAPACITY: Final[int] = 20


class OperatingHours:
    OPEN: Final[time] = time(11, 0)
    CLOSE: Final[time] = time(23, 0)


class ReservationWindow:
    MIN_DURATION_MINUTES: Final[int] = 30
    MAX_DURATION_MINUTES: Final[int] = 480
    DEFAULT_DURATION_MINUTES: Final[int] = 120
    LEAD_TIME_MINUTES: Final[int] = 60
    HORIZON_MONTHS: Final[int] = 3


class CustomerLimits:
    MIN_NAME_LENGTH: Final[int] = 2
    MAX_SPECIAL_REQUESTS_LENGTH: Final[int] = 500


class ContactFormat:
    EMAIL_PATTERN: Final[str] = r'^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$'
    # (11) 98765-4321, 11 3456 7890, 11987654321
    PHONE_PATTERN: Final[str] = r'^\(?([0-9]{2})\)?[-. ]?([0-9]{4,5})[-. ]?([0-9]{4})$'


class DailyOccupancy:
    """Slots used for the occupancy statistic of the availability report."""

    SLOTS_PER_DAY: Final[int] = 12


class PeakHours:
    """Hours (inclusive) in which a reservation start counts as peak time."""

    LUNCH: Final[tuple[int, int]] = (12, 14)
    DINNER: Final[tuple[int, int]] = (19, 21)
