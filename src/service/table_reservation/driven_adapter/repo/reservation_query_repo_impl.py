from datetime import date
from typing import Any, List, Optional

from sqlalchemy import select

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.domain.aggregate.reservation_aggregate import Reservation
from src.service.table_reservation.domain.enum.reservation_status import ReservationStatus
from src.service.table_reservation.domain.value_object.identifiers import ReservationId, TableId
from src.service.table_reservation.driven_adapter.model.reservation_model import ReservationModel
from src.service.table_reservation.driven_adapter.repo.reservation_command_repo_impl import (
    day_bounds,
)
from src.service.table_reservation.driven_adapter.repo.reservation_mapper import to_entity
from src.service.table_reservation.driven_adapter.repo.session_scoped_repo import (
    SessionScopedRepo,
)


class ReservationQueryRepoImpl(SessionScopedRepo, IReservationQueryRepo):
    async def _list_where(self, *conditions: Any) -> List[Reservation]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(*conditions)
                .order_by(ReservationModel.start_time, ReservationModel.table_id)
            )
            return [to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, *, reservation_id: ReservationId) -> Optional[Reservation]:
        async with self._get_session() as session:
            db_reservation = await session.get(ReservationModel, str(reservation_id))
            return to_entity(db_reservation) if db_reservation else None

    @Logger.io
    async def list_by_customer_email(self, *, email: str) -> List[Reservation]:
        return await self._list_where(ReservationModel.customer_email == email.lower())

    @Logger.io
    async def list_by_date(self, *, on_date: date) -> List[Reservation]:
        day_start, next_day = day_bounds(on_date)
        return await self._list_where(
            ReservationModel.start_time >= day_start,
            ReservationModel.start_time < next_day,
        )

    @Logger.io
    async def list_by_status(self, *, status: ReservationStatus) -> List[Reservation]:
        return await self._list_where(ReservationModel.status == status.value)

    @Logger.io
    async def list_by_table_and_date(self, *, table_id: TableId, on_date: date) -> List[Reservation]:
        day_start, next_day = day_bounds(on_date)
        return await self._list_where(
            ReservationModel.table_id == str(table_id),
            ReservationModel.start_time >= day_start,
            ReservationModel.start_time < next_day,
        )
