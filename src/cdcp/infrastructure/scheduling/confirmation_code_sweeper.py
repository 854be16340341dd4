"""Periodic removal of expired confirmation codes."""

import asyncio
import logging
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cdcp.application.services import ConfirmationCodeService

logger = logging.getLogger(__name__)


class ConfirmationCodeSweeper:
    """Runs ``ConfirmationCodeService.sweep_expired`` every ``interval_seconds``.

    Each sweep uses its own session and transaction. A failed sweep is
    logged and retried at the next interval.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        service_factory: Callable[[AsyncSession], ConfirmationCodeService],
        interval_seconds: float,
    ):
        if interval_seconds <= 0:
            msg = f"interval_seconds must be positive, got {interval_seconds}"
            raise ValueError(msg)

        self._session_maker = session_maker
        self._service_factory = service_factory
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sweep_once(self) -> int:
        async with self._session_maker() as session:
            try:
                removed = await self._service_factory(session).sweep_expired()
                await session.commit()
            except Exception:
                await session.rollback()
                raise
        return removed

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="confirmation-code-sweeper")
        logger.info(
            "Confirmation code sweeper started (interval: %ss)",
            self._interval,
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Confirmation code sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("Confirmation code sweep failed")
