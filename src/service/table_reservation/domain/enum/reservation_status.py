from enum import StrEnum


class ReservationStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    NO_SHOW = 'no_show'

    @property
    def allowed_transitions(self) -> frozenset['ReservationStatus']:
        return _TRANSITIONS[self]

    def can_transition_to(self, target: 'ReservationStatus') -> bool:
        return target in _TRANSITIONS[self]

    @property
    def is_active(self) -> bool:
        """Active reservations hold their table and count toward conflicts"""
        return self in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset(
        {ReservationStatus.COMPLETED, ReservationStatus.CANCELLED, ReservationStatus.NO_SHOW}
    ),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.NO_SHOW: frozenset(),
}

_DISPLAY_NAMES: dict[ReservationStatus, str] = {
    ReservationStatus.PENDING: 'Pending',
    ReservationStatus.CONFIRMED: 'Confirmed',
    ReservationStatus.COMPLETED: 'Completed',
    ReservationStatus.CANCELLED: 'Cancelled',
    ReservationStatus.NO_SHOW: 'No show',
}
