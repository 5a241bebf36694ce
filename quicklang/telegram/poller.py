from __future__ import annotations

import asyncio
import contextlib
import logging

import httpx

from quicklang.exceptions import TelegramApiError
from quicklang.telegram.client import TelegramClient
from quicklang.telegram.dispatcher import UpdateDispatcher

logger = logging.getLogger(__name__)


class UpdatePoller:
    """Long-poll getUpdates and hand each update to the dispatcher in order."""

    def __init__(
        self,
        telegram: TelegramClient,
        dispatcher: UpdateDispatcher,
        timeout: int = 30,
        retry_delay: float = 5.0,
    ):
        self._telegram = telegram
        self._dispatcher = dispatcher
        self._timeout = timeout
        self._retry_delay = retry_delay
        self._offset: int | None = None
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> int:
        updates = await self._telegram.get_updates(offset=self._offset, timeout=self._timeout)
        for update in updates:
            # Confirm the update before handling it so a failing handler is not redelivered
            self._offset = update["update_id"] + 1
            try:
                await self._dispatcher.dispatch(update)
            except Exception:
                logger.exception("Failed to dispatch update %s", update.get("update_id"))
        return len(updates)

    async def run(self) -> None:
        logger.info("Polling Telegram for updates (timeout=%ds)", self._timeout)
        while True:
            try:
                await self.poll_once()
            except (TelegramApiError, httpx.HTTPError):
                logger.warning(
                    "Polling error, retrying in %.1fs", self._retry_delay, exc_info=True
                )
                await asyncio.sleep(self._retry_delay)
            except Exception:
                logger.exception("Unexpected polling failure, retrying in %.1fs", self._retry_delay)
                await asyncio.sleep(self._retry_delay)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped polling")
