from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession


class SessionScopedRepo:
    """
    Base for SQLAlchemy repositories usable in two modes.

    - Inside a Unit of Work: `session` is injected, the UoW commits.
    - Standalone (DI singleton for queries): a session is opened per call
      from `session_factory` and committed by the repository itself.
    """

    def __init__(
        self,
        *,
        session: Optional[AsyncSession] = None,
        session_factory: Optional[Callable[..., AsyncContextManager[AsyncSession]]] = None,
    ) -> None:
        self.session = session
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self, *, write: bool = False) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
                if write:
                    await session.commit()
        else:
            raise RuntimeError('No session or session_factory available')
