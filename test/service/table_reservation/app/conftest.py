"""
In-memory fakes for the application layer.

Repositories hand out copies so an aggregate mutated inside a rolled-back
Unit of Work never leaks into the stored state, like a real session would.
"""

import asyncio
import copy
from datetime import date, datetime
from typing import Callable, List, Optional

import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.app.interface.i_reservation_event_dispatcher import (
    IReservationEventDispatcher,
)
from src.service.table_reservation.app.interface.i_table_repo import ITableRepo
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.domain_event.reservation_domain_event import (
    ReservationDomainEvent,
)
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.capacity import Capacity
from src.service.table_reservation.domain.value_object.customer_info import CustomerInfo
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime


class InMemoryTableRepo(ITableRepo):
    def __init__(self, tables: List[Table]) -> None:
        self.tables = {str(table.id): table for table in tables}

    async def get_by_id(self, *, table_id: TableId) -> Optional[Table]:
        table = self.tables.get(str(table_id))
        return copy.deepcopy(table) if table else None

    async def list_active(self) -> List[Table]:
        return [copy.deepcopy(t) for t in self.tables.values() if t.is_active]

    async def list_by_min_capacity(self, *, number_of_people: int) -> List[Table]:
        matching = [
            t for t in self.tables.values() if t.is_active and t.capacity.value >= number_of_people
        ]
        return [copy.deepcopy(t) for t in sorted(matching, key=lambda t: (t.capacity.value, t.id.value))]

    async def list_all(self) -> List[Table]:
        return [copy.deepcopy(t) for t in self.tables.values()]

    async def save(self, *, table: Table) -> Table:
        self.tables[str(table.id)] = copy.deepcopy(table)
        return table


class InMemoryReservationRepo(IReservationCommandRepo):
    def __init__(self, *, save_delay_seconds: float = 0) -> None:
        self.reservations: dict[str, Reservation] = {}
        self.save_delay_seconds = save_delay_seconds

    def add(self, reservation: Reservation) -> None:
        stored = copy.deepcopy(reservation)
        stored.clear_domain_events()
        self.reservations[str(reservation.id)] = stored

    async def get_by_id(self, *, reservation_id: ReservationId) -> Optional[Reservation]:
        reservation = self.reservations.get(str(reservation_id))
        return copy.deepcopy(reservation) if reservation else None

    async def find_for_table_on_date(self, *, table_id: TableId, on_date: date) -> List[Reservation]:
        return [
            copy.deepcopy(r)
            for r in self.reservations.values()
            if r.table_id == table_id and r.reservation_time.date == on_date
        ]

    async def save(self, *, reservation: Reservation) -> Reservation:
        if self.save_delay_seconds:
            await asyncio.sleep(self.save_delay_seconds)
        if reservation.created_at is None:
            reservation.created_at = reservation.updated_at
        stored = copy.deepcopy(reservation)
        # Rows carry state only; queued events stay on the caller's aggregate
        stored.clear_domain_events()
        self.reservations[str(reservation.id)] = stored
        return reservation


class FakeUnitOfWork(AbstractUnitOfWork):
    """Commits are immediate in the fake repos; the counters record what the use case asked for."""

    def __init__(
        self,
        *,
        table_repo: InMemoryTableRepo,
        reservation_repo: InMemoryReservationRepo,
        fail_on_commit: bool = False,
    ) -> None:
        self.table_repo = table_repo
        self.reservation_command_repo = reservation_repo
        self.reservation_query_repo = None  # type: ignore[assignment]
        self.fail_on_commit = fail_on_commit
        self.commits = 0
        self.rollbacks = 0

    async def _commit(self) -> None:
        if self.fail_on_commit:
            raise RuntimeError('database is locked')
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


class RecordingDispatcher(IReservationEventDispatcher):
    def __init__(self) -> None:
        self.events: List[ReservationDomainEvent] = []

    def dispatch(self, event: ReservationDomainEvent) -> None:
        self.events.append(event)

    async def wait_until_idle(self) -> None:
        return None


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def clock_now() -> datetime:
    """Restaurant clock for app-layer tests: Monday 14 July 2025, 12:00."""
    return datetime(2025, 7, 14, 12, 0)


@pytest.fixture
def clock(clock_now: datetime) -> Callable[[], datetime]:
    return lambda: clock_now


@pytest.fixture
def tables() -> List[Table]:
    return [
        Table(id=TableId('T001'), capacity=Capacity(2), location='Indoor'),
        Table(id=TableId('T003'), capacity=Capacity(4), location='Indoor'),
        Table(id=TableId('T006'), capacity=Capacity(6), location='Indoor'),
        Table(id=TableId('T012'), capacity=Capacity(2), is_active=False),
    ]


@pytest.fixture
def table_repo(tables: List[Table]) -> InMemoryTableRepo:
    return InMemoryTableRepo(tables)


@pytest.fixture
def reservation_repo() -> InMemoryReservationRepo:
    return InMemoryReservationRepo()


@pytest.fixture
def make_uow(
    table_repo: InMemoryTableRepo, reservation_repo: InMemoryReservationRepo
) -> Callable[..., FakeUnitOfWork]:
    """A fresh Unit of Work over the shared fake store, one per simulated request."""

    def _make(*, fail_on_commit: bool = False) -> FakeUnitOfWork:
        return FakeUnitOfWork(
            table_repo=table_repo,
            reservation_repo=reservation_repo,
            fail_on_commit=fail_on_commit,
        )

    return _make


@pytest.fixture
def uow(make_uow: Callable[..., FakeUnitOfWork]) -> FakeUnitOfWork:
    return make_uow()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def make_reservation(
    customer_info: CustomerInfo,
) -> Callable[..., Reservation]:
    """Build a stored-state reservation without the booking rules (any status, any time)."""

    def _make(
        *,
        reservation_id: str = 'res-1',
        table_id: str = 'T003',
        start: datetime = datetime(2025, 7, 15, 19, 0),
        duration_minutes: int = 120,
        number_of_people: int = 2,
        status: ReservationStatus = ReservationStatus.PENDING,
    ) -> Reservation:
        return Reservation(
            id=ReservationId(reservation_id),
            table_id=TableId(table_id),
            customer_info=customer_info,
            reservation_time=ReservationTime(start, duration_minutes),
            number_of_people=number_of_people,
            status=status,
            created_at=datetime(2025, 7, 10, 10, 0),
            updated_at=datetime(2025, 7, 10, 10, 0),
        )

    return _make
