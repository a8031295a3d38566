"""
Unit tests for UpdateReservationUseCase

Tests:
- Move to another time / table, re-checked for availability
- The reservation never conflicts with itself
- Party size changes against the table capacity
- Terminal reservations cannot be modified
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Iterable, List

import pytest

from src.platform.exception.exceptions import (
    CapacityError,
    ConflictError,
    InvalidStateTransition,
    NotFoundError,
    OutOfHoursError,
    TableLockTimeoutError,
)
from src.service.table_reservation.app.command.transition_reservation_use_case import (
    LOCK_ATTEMPTS,
)
from src.service.table_reservation.app.command.update_reservation_use_case import (
    UpdateReservationUseCase,
)
from src.service.table_reservation.app.interface.i_table_lock import ITableLock
from src.service.table_reservation.domain.domain_event.reservation_domain_event import (
    ReservationModified,
)
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.domain.value_object.reservation_time import ReservationTime
from src.service.table_reservation.driven_adapter.state.in_process_table_lock import (
    InProcessTableLock,
)


RESERVATION_ID = ReservationId('res-1')


class TableSwitchingLock(ITableLock):
    """Moves res-1 between T003 and T006 while a caller waits for the lock.

    Stands in for a concurrent update that commits between the unlocked
    read of the current table and the locked reload.
    """

    def __init__(self, reservation_repo, *, switches: int) -> None:
        self.reservation_repo = reservation_repo
        self.switches = switches
        self.held: List[List[str]] = []

    @asynccontextmanager
    async def hold(self, table_ids: Iterable[TableId]) -> AsyncIterator[None]:
        self.held.append(sorted(str(t) for t in table_ids))
        if self.switches:
            self.switches -= 1
            stored = self.reservation_repo.reservations['res-1']
            stored.table_id = TableId('T006' if stored.table_id == TableId('T003') else 'T003')
        yield


@pytest.fixture
def use_case(uow, dispatcher, clock) -> UpdateReservationUseCase:
    return UpdateReservationUseCase(
        uow=uow,
        table_lock=InProcessTableLock(timeout_seconds=1),
        event_dispatcher=dispatcher,
        clock=clock,
    )


@pytest.mark.unit
class TestMoveReservation:
    @pytest.mark.asyncio
    async def test_move_to_later_time_on_same_table(
        self, use_case: UpdateReservationUseCase, reservation_repo, dispatcher, make_reservation
    ) -> None:
        """
        Given: a reservation on T003 tomorrow 19:00-21:00
        When: it is moved to 19:30 for 2 hours
        Then: it does not clash with itself and a ReservationModified event is dispatched
        """
        # Arrange
        reservation_repo.add(make_reservation())
        new_time = ReservationTime(datetime(2025, 7, 15, 19, 30), 120)

        # Act
        updated = await use_case.update_reservation(
            reservation_id=RESERVATION_ID, reservation_time=new_time
        )

        # Assert
        assert updated.reservation_time == new_time
        assert reservation_repo.reservations['res-1'].reservation_time == new_time
        assert len(dispatcher.events) == 1
        event = dispatcher.events[0]
        assert isinstance(event, ReservationModified)
        assert event.previous_reservation_time == ReservationTime(datetime(2025, 7, 15, 19, 0), 120)

    @pytest.mark.asyncio
    async def test_move_to_another_table(
        self, use_case: UpdateReservationUseCase, reservation_repo, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation())

        updated = await use_case.update_reservation(
            reservation_id=RESERVATION_ID, table_id=TableId('T006')
        )

        assert updated.table_id == TableId('T006')
        assert updated.reservation_time == ReservationTime(datetime(2025, 7, 15, 19, 0), 120)

    @pytest.mark.asyncio
    async def test_move_onto_taken_slot_conflicts(
        self, use_case: UpdateReservationUseCase, reservation_repo, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation())
        reservation_repo.add(make_reservation(reservation_id='other', table_id='T006'))

        with pytest.raises(ConflictError):
            await use_case.update_reservation(
                reservation_id=RESERVATION_ID, table_id=TableId('T006')
            )

        assert reservation_repo.reservations['res-1'].table_id == TableId('T003')

    @pytest.mark.asyncio
    async def test_move_outside_operating_hours(
        self, use_case: UpdateReservationUseCase, reservation_repo, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation())

        with pytest.raises(OutOfHoursError):
            await use_case.update_reservation(
                reservation_id=RESERVATION_ID,
                reservation_time=ReservationTime(datetime(2025, 7, 15, 22, 0), 120),
            )

    @pytest.mark.asyncio
    async def test_move_to_unknown_table(
        self, use_case: UpdateReservationUseCase, reservation_repo, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation())

        with pytest.raises(NotFoundError):
            await use_case.update_reservation(
                reservation_id=RESERVATION_ID, table_id=TableId('T999')
            )


@pytest.mark.unit
class TestChangePartySize:
    @pytest.mark.asyncio
    async def test_grow_party_within_capacity(
        self, use_case: UpdateReservationUseCase, reservation_repo, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation(number_of_people=2))

        updated = await use_case.update_reservation(
            reservation_id=RESERVATION_ID, number_of_people=4
        )

        assert updated.number_of_people == 4

    @pytest.mark.asyncio
    async def test_grow_party_beyond_capacity(
        self, use_case: UpdateReservationUseCase, reservation_repo, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation(number_of_people=2))

        with pytest.raises(CapacityError):
            await use_case.update_reservation(reservation_id=RESERVATION_ID, number_of_people=5)

        assert reservation_repo.reservations['res-1'].number_of_people == 2

    @pytest.mark.asyncio
    async def test_shrink_party(
        self, use_case: UpdateReservationUseCase, reservation_repo, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation(number_of_people=4))

        updated = await use_case.update_reservation(
            reservation_id=RESERVATION_ID, number_of_people=1
        )

        assert updated.number_of_people == 1


@pytest.mark.unit
class TestUpdateRejected:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'status', [ReservationStatus.CANCELLED, ReservationStatus.COMPLETED, ReservationStatus.NO_SHOW]
    )
    async def test_terminal_reservation_cannot_be_modified(
        self,
        use_case: UpdateReservationUseCase,
        reservation_repo,
        dispatcher,
        make_reservation,
        status: ReservationStatus,
    ) -> None:
        reservation_repo.add(make_reservation(status=status))

        with pytest.raises(InvalidStateTransition):
            await use_case.update_reservation(reservation_id=RESERVATION_ID, number_of_people=3)

        assert dispatcher.events == []

    @pytest.mark.asyncio
    async def test_unknown_reservation(self, use_case: UpdateReservationUseCase) -> None:
        with pytest.raises(NotFoundError):
            await use_case.update_reservation(
                reservation_id=ReservationId('missing'), number_of_people=2
            )

    @pytest.mark.asyncio
    async def test_nothing_is_dispatched_when_commit_fails(
        self, make_uow, reservation_repo, dispatcher, clock, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation())
        use_case = UpdateReservationUseCase(
            uow=make_uow(fail_on_commit=True),
            table_lock=InProcessTableLock(timeout_seconds=1),
            event_dispatcher=dispatcher,
            clock=clock,
        )

        with pytest.raises(RuntimeError):
            await use_case.update_reservation(reservation_id=RESERVATION_ID, number_of_people=3)

        assert dispatcher.events == []


@pytest.mark.unit
class TestReservationMovedWhileWaiting:
    @pytest.mark.asyncio
    async def test_relocks_the_table_the_reservation_moved_to(
        self, uow, reservation_repo, dispatcher, clock, make_reservation
    ) -> None:
        """
        Given: res-1 sits on T003 when the update reads it
        When: a concurrent move puts it on T006 before the T003 lock is granted
        Then: the update notices, locks T006 instead and checks availability there
        """
        # Arrange
        reservation_repo.add(make_reservation())
        table_lock = TableSwitchingLock(reservation_repo, switches=1)
        use_case = UpdateReservationUseCase(
            uow=uow, table_lock=table_lock, event_dispatcher=dispatcher, clock=clock
        )

        # Act
        updated = await use_case.update_reservation(
            reservation_id=RESERVATION_ID,
            reservation_time=ReservationTime(datetime(2025, 7, 15, 19, 30), 120),
        )

        # Assert
        assert table_lock.held == [['T003'], ['T006']]
        assert updated.table_id == TableId('T006')
        assert updated.reservation_time.start == datetime(2025, 7, 15, 19, 30)

    @pytest.mark.asyncio
    async def test_conflict_on_the_new_table_is_caught(
        self, uow, reservation_repo, dispatcher, clock, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation())
        reservation_repo.add(
            make_reservation(
                reservation_id='other', table_id='T006', start=datetime(2025, 7, 15, 20, 0)
            )
        )
        use_case = UpdateReservationUseCase(
            uow=uow,
            table_lock=TableSwitchingLock(reservation_repo, switches=1),
            event_dispatcher=dispatcher,
            clock=clock,
        )

        with pytest.raises(ConflictError):
            await use_case.update_reservation(
                reservation_id=RESERVATION_ID,
                reservation_time=ReservationTime(datetime(2025, 7, 15, 19, 30), 120),
            )

    @pytest.mark.asyncio
    async def test_gives_up_when_it_keeps_moving(
        self, uow, reservation_repo, dispatcher, clock, make_reservation
    ) -> None:
        reservation_repo.add(make_reservation())
        table_lock = TableSwitchingLock(reservation_repo, switches=LOCK_ATTEMPTS)
        use_case = UpdateReservationUseCase(
            uow=uow, table_lock=table_lock, event_dispatcher=dispatcher, clock=clock
        )

        with pytest.raises(TableLockTimeoutError) as exc_info:
            await use_case.update_reservation(reservation_id=RESERVATION_ID, number_of_people=3)

        assert exc_info.value.status_code == 503
        assert len(table_lock.held) == LOCK_ATTEMPTS
        assert reservation_repo.reservations['res-1'].number_of_people == 2
        assert dispatcher.events == []
