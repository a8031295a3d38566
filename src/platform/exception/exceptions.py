from enum import StrEnum


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class CapacityError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class InvalidStateTransition(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AvailabilityReason(StrEnum):
    OUT_OF_HOURS = 'out_of_hours'
    LEAD_TIME = 'lead_time'
    HORIZON = 'horizon'
    CONFLICT = 'conflict'


class AvailabilityError(CustomBaseError):
    """Candidate slot rejected by an availability rule; `reason` tells which one"""

    reason: AvailabilityReason

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class OutOfHoursError(AvailabilityError):
    reason = AvailabilityReason.OUT_OF_HOURS


class LeadTimeError(AvailabilityError):
    reason = AvailabilityReason.LEAD_TIME


class HorizonError(AvailabilityError):
    reason = AvailabilityReason.HORIZON


class ConflictError(AvailabilityError):
    reason = AvailabilityReason.CONFLICT

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class TableLockTimeoutError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
