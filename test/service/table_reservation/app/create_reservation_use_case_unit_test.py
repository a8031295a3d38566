"""
Unit tests for CreateReservationUseCase

Tests:
- Happy path: PENDING reservation stored and committed, no notification
- Table lookup and capacity errors
- Availability errors surface unchanged
- Lock held around the check and the save
- Two concurrent requests for the same slot: exactly one wins
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Iterable, List

import pytest

from src.platform.exception.exceptions import (
    CapacityError,
    ConflictError,
    LeadTimeError,
    NotFoundError,
    ValidationError,
)
from src.service.table_reservation.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.identifiers import TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime
from src.service.table_reservation.driven_adapter.state.in_process_table_lock import (
    InProcessTableLock,
)


class RecordingTableLock(ITableLock):
    def __init__(self) -> None:
        self.held: List[List[str]] = []
        self.is_held = False

    @asynccontextmanager
    async def hold(self, table_ids: Iterable[TableId]) -> AsyncIterator[None]:
        self.held.append(sorted(str(t) for t in table_ids))
        self.is_held = True
        try:
            yield
        finally:
            self.is_held = False


@pytest.fixture
def table_lock() -> RecordingTableLock:
    return RecordingTableLock()


@pytest.fixture
def use_case(uow, table_lock, dispatcher, clock) -> CreateReservationUseCase:
    return CreateReservationUseCase(
        uow=uow, table_lock=table_lock, event_dispatcher=dispatcher, clock=clock
    )


@pytest.fixture
def dinner_tomorrow() -> ReservationTime:
    return ReservationTime(datetime(2025, 7, 15, 19, 0), 120)


@pytest.mark.unit
class TestCreateReservation:
    @pytest.mark.asyncio
    async def test_creates_pending_reservation(
        self,
        use_case: CreateReservationUseCase,
        uow,
        reservation_repo,
        dispatcher,
        customer_info,
        dinner_tomorrow: ReservationTime,
        clock_now: datetime,
    ) -> None:
        """
        Given: table T003 seats 4 and is free tomorrow at 19:00
        When: a party of 3 books it
        Then: a PENDING reservation is stored and committed, nothing is dispatched
        """
        # Act
        reservation = await use_case.create_reservation(
            table_id=TableId('T003'),
            number_of_people=3,
            customer_info=customer_info,
            reservation_time=dinner_tomorrow,
        )

        # Assert
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.table_id == TableId('T003')
        assert reservation.number_of_people == 3
        assert reservation.created_at == clock_now
        assert str(reservation.id) in reservation_repo.reservations
        assert uow.commits == 1
        assert dispatcher.events == []

    @pytest.mark.asyncio
    async def test_lock_is_held_for_the_booked_table(
        self,
        use_case: CreateReservationUseCase,
        table_lock: RecordingTableLock,
        customer_info,
        dinner_tomorrow: ReservationTime,
    ) -> None:
        await use_case.create_reservation(
            table_id=TableId('T003'),
            number_of_people=2,
            customer_info=customer_info,
            reservation_time=dinner_tomorrow,
        )

        assert table_lock.held == [['T003']]
        assert not table_lock.is_held

    @pytest.mark.asyncio
    async def test_unknown_table(
        self, use_case: CreateReservationUseCase, uow, customer_info, dinner_tomorrow
    ) -> None:
        with pytest.raises(NotFoundError):
            await use_case.create_reservation(
                table_id=TableId('T999'),
                number_of_people=2,
                customer_info=customer_info,
                reservation_time=dinner_tomorrow,
            )
        assert uow.commits == 0

    @pytest.mark.asyncio
    async def test_party_larger_than_table(
        self, use_case: CreateReservationUseCase, customer_info, dinner_tomorrow
    ) -> None:
        with pytest.raises(CapacityError) as exc_info:
            await use_case.create_reservation(
                table_id=TableId('T001'),
                number_of_people=3,
                customer_info=customer_info,
                reservation_time=dinner_tomorrow,
            )
        assert exc_info.value.status_code == 422

    @pytest.mark.asyncio
    async def test_inactive_table_is_rejected(
        self, use_case: CreateReservationUseCase, customer_info, dinner_tomorrow
    ) -> None:
        with pytest.raises(CapacityError):
            await use_case.create_reservation(
                table_id=TableId('T012'),
                number_of_people=1,
                customer_info=customer_info,
                reservation_time=dinner_tomorrow,
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize('number_of_people', [0, -2])
    async def test_party_size_out_of_range(
        self,
        use_case: CreateReservationUseCase,
        table_lock: RecordingTableLock,
        customer_info,
        dinner_tomorrow,
        number_of_people: int,
    ) -> None:
        with pytest.raises(ValidationError):
            await use_case.create_reservation(
                table_id=TableId('T003'),
                number_of_people=number_of_people,
                customer_info=customer_info,
                reservation_time=dinner_tomorrow,
            )
        assert table_lock.held == []

    @pytest.mark.asyncio
    async def test_overlapping_slot_conflicts(
        self,
        use_case: CreateReservationUseCase,
        reservation_repo,
        make_reservation,
        uow,
        customer_info,
    ) -> None:
        reservation_repo.add(make_reservation(status=ReservationStatus.CONFIRMED))

        with pytest.raises(ConflictError):
            await use_case.create_reservation(
                table_id=TableId('T003'),
                number_of_people=2,
                customer_info=customer_info,
                reservation_time=ReservationTime(datetime(2025, 7, 15, 20, 0), 60),
            )
        assert uow.commits == 0
        assert len(reservation_repo.reservations) == 1

    @pytest.mark.asyncio
    async def test_slot_inside_lead_time(
        self, use_case: CreateReservationUseCase, customer_info
    ) -> None:
        with pytest.raises(LeadTimeError):
            await use_case.create_reservation(
                table_id=TableId('T003'),
                number_of_people=2,
                customer_info=customer_info,
                reservation_time=ReservationTime(datetime(2025, 7, 14, 12, 30), 60),
            )

    @pytest.mark.asyncio
    async def test_cancelled_slot_can_be_rebooked(
        self,
        use_case: CreateReservationUseCase,
        reservation_repo,
        make_reservation,
        customer_info,
        dinner_tomorrow,
    ) -> None:
        reservation_repo.add(make_reservation(status=ReservationStatus.CANCELLED))

        reservation = await use_case.create_reservation(
            table_id=TableId('T003'),
            number_of_people=2,
            customer_info=customer_info,
            reservation_time=dinner_tomorrow,
        )

        assert reservation.status == ReservationStatus.PENDING
        assert len(reservation_repo.reservations) == 2

    @pytest.mark.asyncio
    async def test_commit_failure_surfaces_and_dispatches_nothing(
        self, make_uow, table_lock, dispatcher, clock, customer_info, dinner_tomorrow
    ) -> None:
        use_case = CreateReservationUseCase(
            uow=make_uow(fail_on_commit=True),
            table_lock=table_lock,
            event_dispatcher=dispatcher,
            clock=clock,
        )

        with pytest.raises(RuntimeError, match='database is locked'):
            await use_case.create_reservation(
                table_id=TableId('T003'),
                number_of_people=2,
                customer_info=customer_info,
                reservation_time=dinner_tomorrow,
            )

        assert dispatcher.events == []
        assert not table_lock.is_held

    @pytest.mark.asyncio
    async def test_lunch_sequence_on_four_seat_table(
        self, use_case: CreateReservationUseCase, customer_info
    ) -> None:
        """
        Given: T003 seats 4 and is empty tomorrow
        When: booking 12:00+120, then 13:00+60, then 14:00+60
        Then: first and third succeed, the second overlaps the first
        """

        async def book(hour: int, minutes: int):
            return await use_case.create_reservation(
                table_id=TableId('T003'),
                number_of_people=4,
                customer_info=customer_info,
                reservation_time=ReservationTime(datetime(2025, 7, 15, hour, 0), minutes),
            )

        first = await book(12, 120)
        with pytest.raises(ConflictError):
            await book(13, 60)
        third = await book(14, 60)

        assert first.status == ReservationStatus.PENDING
        assert third.status == ReservationStatus.PENDING


@pytest.mark.unit
class TestConcurrentCreate:
    @pytest.mark.asyncio
    async def test_only_one_of_two_concurrent_bookings_succeeds(
        self, make_uow, reservation_repo, dispatcher, clock, customer_info, dinner_tomorrow
    ) -> None:
        """
        Given: two requests for T003 tomorrow at 19:00 arrive together
        When: both run concurrently against the same store (slow save)
        Then: one reservation is stored, the other request gets ConflictError
        """
        # Arrange
        reservation_repo.save_delay_seconds = 0.05
        table_lock = InProcessTableLock(timeout_seconds=2)

        def new_use_case() -> CreateReservationUseCase:
            return CreateReservationUseCase(
                uow=make_uow(),
                table_lock=table_lock,
                event_dispatcher=dispatcher,
                clock=clock,
            )

        async def book():
            return await new_use_case().create_reservation(
                table_id=TableId('T003'),
                number_of_people=2,
                customer_info=customer_info,
                reservation_time=dinner_tomorrow,
            )

        # Act
        results = await asyncio.gather(book(), book(), return_exceptions=True)

        # Assert
        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], ConflictError)
        assert len(reservation_repo.reservations) == 1
