from typing import List, Optional

from sqlalchemy import select

from src.platform.clock import local_now
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_repo import ITableRepo
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.value_object.capacity import Capacity
from src.service.table_reservation.domain.value_object.identifiers import TableId
from src.service.table_reservation.driven_adapter.model.table_model import TableModel
from src.service.table_reservation.driven_adapter.repo.session_scoped_repo import (
    SessionScopedRepo,
)


class TableRepoImpl(SessionScopedRepo, ITableRepo):
    @staticmethod
    def _to_entity(db_table: TableModel) -> Table:
        return Table(
            id=TableId(db_table.id),
            capacity=Capacity(db_table.capacity),
            is_active=db_table.is_active,
            location=db_table.location,
        )

    @Logger.io
    async def get_by_id(self, *, table_id: TableId) -> Optional[Table]:
        async with self._get_session() as session:
            db_table = await session.get(TableModel, str(table_id))
            return self._to_entity(db_table) if db_table else None

    @Logger.io
    async def list_active(self) -> List[Table]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TableModel).where(TableModel.is_active.is_(True)).order_by(TableModel.id)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_by_min_capacity(self, *, number_of_people: int) -> List[Table]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TableModel)
                .where(
                    TableModel.is_active.is_(True),
                    TableModel.capacity >= number_of_people,
                )
                .order_by(TableModel.capacity, TableModel.id)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Table]:
        async with self._get_session() as session:
            result = await session.execute(select(TableModel).order_by(TableModel.id))
            return [self._to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def save(self, *, table: Table) -> Table:
        async with self._get_session(write=True) as session:
            now = local_now()
            db_table = await session.get(TableModel, str(table.id))
            if db_table is None:
                db_table = TableModel(id=str(table.id), created_at=now)
                session.add(db_table)
            db_table.capacity = table.capacity.value
            db_table.is_active = table.is_active
            db_table.location = table.location
            db_table.updated_at = now
            await session.flush()
            return table
