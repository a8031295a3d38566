"""
Reservation Aggregate - Aggregate Root for a table booking

[Business Invariants]
- Status only moves along the lifecycle table:
    PENDING   -> CONFIRMED, CANCELLED
    CONFIRMED -> COMPLETED, CANCELLED, NO_SHOW
    COMPLETED / CANCELLED / NO_SHOW are terminal
- id and customer_info never change; modify() only replaces table, time and party size
- Every successful transition queues exactly one domain event
"""

from datetime import datetime
from typing import Any, Optional

import attrs

from src.platform.clock import local_now
from src.platform.exception.exceptions import InvalidStateTransition, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.domain.domain_event.reservation_domain_event import (
    ReservationCancelled,
    ReservationCompleted,
    ReservationConfirmed,
    ReservationDomainEvent,
    ReservationMarkedNoShow,
    ReservationModified,
)
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.validators import NumericValidators
from src.service.table_reservation.domain.value_object.customer_info import CustomerInfo
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime


_TransitionEvent = (
    type[ReservationConfirmed]
    | type[ReservationCancelled]
    | type[ReservationCompleted]
    | type[ReservationMarkedNoShow]
)


@attrs.define(eq=False)
class Reservation:
    id: ReservationId
    table_id: TableId
    customer_info: CustomerInfo
    reservation_time: ReservationTime
    number_of_people: int = 1
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    _domain_events: list[ReservationDomainEvent] = attrs.field(init=False, factory=list)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: Any,
        table_id: Any,
        customer_info: Any,
        reservation_time: Any,
        number_of_people: int,
        now: Optional[datetime] = None,
    ) -> 'Reservation':
        if not isinstance(id, ReservationId):
            raise ValidationError('Reservation ID cannot be null')
        if not isinstance(table_id, TableId):
            raise ValidationError('Table ID cannot be null')
        if not isinstance(customer_info, CustomerInfo):
            raise ValidationError('Customer info cannot be null')
        if not isinstance(reservation_time, ReservationTime):
            raise ValidationError('Reservation time cannot be null')
        NumericValidators.validate_number_of_people(number_of_people)

        now = now or local_now()
        if reservation_time.start < now:
            raise ValidationError('Reservation time cannot be in the past')

        return cls(
            id=id,
            table_id=table_id,
            customer_info=customer_info,
            reservation_time=reservation_time,
            number_of_people=number_of_people,
            status=ReservationStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @Logger.io
    def confirm(self) -> None:
        self._transition_to(ReservationStatus.CONFIRMED, ReservationConfirmed)

    @Logger.io
    def cancel(self) -> None:
        self._transition_to(ReservationStatus.CANCELLED, ReservationCancelled)

    @Logger.io
    def complete(self) -> None:
        self._transition_to(ReservationStatus.COMPLETED, ReservationCompleted)

    @Logger.io
    def mark_no_show(self) -> None:
        self._transition_to(ReservationStatus.NO_SHOW, ReservationMarkedNoShow)

    def can_be_modified(self) -> bool:
        return self.status.is_active

    @Logger.io
    def modify(
        self,
        new_table_id: TableId,
        new_time: ReservationTime,
        *,
        number_of_people: Optional[int] = None,
    ) -> None:
        if not self.can_be_modified():
            raise InvalidStateTransition(
                f'Cannot modify reservation in status: {self.status.display_name}'
            )
        if number_of_people is not None:
            NumericValidators.validate_number_of_people(number_of_people)

        previous_table_id, previous_time = self.table_id, self.reservation_time
        self.table_id = new_table_id
        self.reservation_time = new_time
        if number_of_people is not None:
            self.number_of_people = number_of_people
        self.updated_at = local_now()

        self._domain_events.append(
            ReservationModified(
                reservation_id=self.id,
                table_id=new_table_id,
                customer_info=self.customer_info,
                reservation_time=new_time,
                previous_table_id=previous_table_id,
                previous_reservation_time=previous_time,
            )
        )

    def _transition_to(self, target: ReservationStatus, event_cls: _TransitionEvent) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStateTransition(
                f'Cannot change reservation from {self.status.display_name} '
                f'to {target.display_name}'
            )
        self.status = target
        self.updated_at = local_now()
        self._domain_events.append(
            event_cls(
                reservation_id=self.id,
                table_id=self.table_id,
                customer_info=self.customer_info,
                reservation_time=self.reservation_time,
            )
        )

    # ------------------------------------------------------------------
    # Domain events
    # ------------------------------------------------------------------

    @property
    def domain_events(self) -> list[ReservationDomainEvent]:
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def pull_domain_events(self) -> list[ReservationDomainEvent]:
        events, self._domain_events = self._domain_events, []
        return events

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Reservation) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
