"""
Reservation Domain Events

Queued on the Reservation aggregate by each successful transition and
drained by the command use cases after commit. Consumers match on the
`ReservationDomainEvent` union instead of a string type tag.
"""

from datetime import datetime
from typing import ClassVar, Union

import attrs
import uuid_utils

from src.platform.clock import local_now
from src.service.table_reservation.domain.value_object.customer_info import CustomerInfo
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime


def _new_event_id() -> str:
    return str(uuid_utils.uuid7())


@attrs.frozen(kw_only=True)
class _ReservationEventBase:
    event_type: ClassVar[str]

    reservation_id: ReservationId
    table_id: TableId
    customer_info: CustomerInfo
    reservation_time: ReservationTime
    event_id: str = attrs.field(factory=_new_event_id)
    occurred_on: datetime = attrs.field(factory=local_now)


@attrs.frozen(kw_only=True)
class ReservationConfirmed(_ReservationEventBase):
    event_type: ClassVar[str] = 'reservation.confirmed'


@attrs.frozen(kw_only=True)
class ReservationCancelled(_ReservationEventBase):
    event_type: ClassVar[str] = 'reservation.cancelled'


@attrs.frozen(kw_only=True)
class ReservationCompleted(_ReservationEventBase):
    event_type: ClassVar[str] = 'reservation.completed'


@attrs.frozen(kw_only=True)
class ReservationMarkedNoShow(_ReservationEventBase):
    event_type: ClassVar[str] = 'reservation.no_show'


@attrs.frozen(kw_only=True)
class ReservationModified(_ReservationEventBase):
    """`table_id` / `reservation_time` carry the new values, `previous_*` the replaced ones."""

    event_type: ClassVar[str] = 'reservation.modified'

    previous_table_id: TableId
    previous_reservation_time: ReservationTime


ReservationDomainEvent = Union[
    ReservationConfirmed,
    ReservationCancelled,
    ReservationCompleted,
    ReservationMarkedNoShow,
    ReservationModified,
]
