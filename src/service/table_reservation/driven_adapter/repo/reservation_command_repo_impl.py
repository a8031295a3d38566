from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import select

from src.platform.clock import local_now
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.driven_adapter.model.reservation_model import ReservationModel
from src.service.table_reservation.driven_adapter.repo.reservation_mapper import (
    copy_to_model,
    to_entity,
)
from src.service.table_reservation.driven_adapter.repo.session_scoped_repo import (
    SessionScopedRepo,
)


def day_bounds(on_date: date) -> tuple[datetime, datetime]:
    start = datetime.combine(on_date, time.min)
    return start, start + timedelta(days=1)


class ReservationCommandRepoImpl(SessionScopedRepo, IReservationCommandRepo):
    @Logger.io
    async def get_by_id(self, *, reservation_id: ReservationId) -> Optional[Reservation]:
        async with self._get_session() as session:
            db_reservation = await session.get(ReservationModel, str(reservation_id))
            return to_entity(db_reservation) if db_reservation else None

    @Logger.io
    async def find_for_table_on_date(self, *, table_id: TableId, on_date: date) -> List[Reservation]:
        day_start, next_day = day_bounds(on_date)
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(
                    ReservationModel.table_id == str(table_id),
                    ReservationModel.start_time >= day_start,
                    ReservationModel.start_time < next_day,
                )
                .order_by(ReservationModel.start_time)
            )
            return [to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def save(self, *, reservation: Reservation) -> Reservation:
        async with self._get_session(write=True) as session:
            now = local_now()
            db_reservation = await session.get(ReservationModel, str(reservation.id))
            if db_reservation is None:
                db_reservation = ReservationModel(
                    id=str(reservation.id), created_at=reservation.created_at or now
                )
                session.add(db_reservation)
            copy_to_model(reservation, db_reservation)
            db_reservation.updated_at = now
            await session.flush()

            reservation.created_at = db_reservation.created_at
            reservation.updated_at = db_reservation.updated_at
            return reservation
