from __future__ import annotations

import logging

from quicklang.commands.router import Router
from quicklang.telegram.client import TelegramClient
from quicklang.telegram.parser import extract_callback_query, extract_message

logger = logging.getLogger(__name__)


class UpdateDispatcher:
    """Feed Bot API updates to the router, whichever way they were delivered."""

    def __init__(self, router: Router, telegram: TelegramClient):
        self._router = router
        self._telegram = telegram

    async def dispatch(self, update: dict) -> None:
        message = extract_message(update)
        if message is not None:
            logger.info(
                "Incoming [%s]: %s",
                message.chat_id,
                message.text[:80] if message.text else "(no text)",
            )
            self._router.route(message)
            return

        query = extract_callback_query(update)
        if query is not None and query.data:
            # Acknowledge so the client stops its loading spinner
            await self._telegram.answer_callback_query(query.id)
