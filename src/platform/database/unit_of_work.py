"""
Unit of Work - owns the database session and the repositories sharing it

Architecture:
- UoW manages the session lifecycle
- UoW commits or rolls back
- Repositories get the shared session from the UoW
- Use cases coordinate repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import get_async_session


if TYPE_CHECKING:
    from src.service.table_reservation.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from src.service.table_reservation.app.interface.i_reservation_query_repo import (
        IReservationQueryRepo,
    )
    from src.service.table_reservation.app.interface.i_table_repo import ITableRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            reservation = await uow.reservation_command_repo.save(reservation=...)
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    table_repo: ITableRepo
    reservation_command_repo: IReservationCommandRepo
    reservation_query_repo: IReservationQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        from src.service.table_reservation.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.table_reservation.driven_adapter.repo.reservation_query_repo_impl import (
            ReservationQueryRepoImpl,
        )
        from src.service.table_reservation.driven_adapter.repo.table_repo_impl import (
            TableRepoImpl,
        )

        self.table_repo = TableRepoImpl(session=self.session)
        self.reservation_command_repo = ReservationCommandRepoImpl(session=self.session)
        self.reservation_query_repo = ReservationQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def _commit(self):
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """FastAPI dependency: one Unit of Work per request"""
    return SqlAlchemyUnitOfWork(session)
