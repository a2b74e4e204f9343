from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession


SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]


class SessionRepo:
    """
    Base for the SQLAlchemy repositories.

    Inside a unit of work the repo is built with the UoW's session and never commits.
    The DI container builds the user repo with a session_factory instead, every call
    then opens and closes its own session (login reads only).
    """

    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        *,
        session: AsyncSession | None = None,
    ):
        if session is None and session_factory is None:
            raise ValueError('A repository needs a session or a session_factory')
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
            return
        assert self.session_factory is not None
        async with self.session_factory() as session:
            yield session
