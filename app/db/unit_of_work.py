"""Unit of work wrapping multi-entity writes in one transaction."""

import logging
from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Explicit begin/commit/rollback scope over an ``AsyncSession``.

    Usage:
        async with UnitOfWork(session) as uow:
            uow.session.add(user)
            await uow.session.flush()
            uow.session.add(profile)

    Leaving the block normally commits. Any exception rolls back every write
    made inside the block and is re-raised unchanged.
    Entering with pending writes raises, so they cannot be committed on
    the unit's behalf.
    """

    def __init__(self, session: AsyncSession, name: str = "unit_of_work") -> None:
        self.session = session
        self.name = name
        self._committed = False

    async def __aenter__(self) -> "UnitOfWork":
        if self.session.new or self.session.dirty or self.session.deleted:
            raise RuntimeError(f"{self.name} started with unflushed writes pending")
        # Close any read-only transaction so the unit starts clean
        if self.session.in_transaction():
            await self.session.commit()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
            logger.warning(f"{self.name} rolled back: {exc_type.__name__}")
            return
        if not self._committed:
            try:
                await self.commit()
            except Exception as commit_exc:
                await self.rollback()
                logger.warning(f"{self.name} commit failed: {type(commit_exc).__name__}")
                raise

    async def commit(self) -> None:
        """Commit all writes of this unit."""
        await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Discard all writes of this unit."""
        await self.session.rollback()
