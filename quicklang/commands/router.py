from __future__ import annotations

import asyncio
import inspect
import logging
import re
from typing import Any

from quicklang.commands.parser import CommandMatch, parse_command
from quicklang.commands.registry import CommandRegistry, Handler
from quicklang.models import InboundMessage

logger = logging.getLogger(__name__)


class Router:
    """Pick at most one handler for each inbound message.

    Commands are matched first, by exact token: ``/add`` never matches the
    text ``/addword``. When no registered command matches, triggers are tried
    in registration order and the first hit wins.

    Handlers are fire-and-forget. A handler that returns an awaitable is
    scheduled as a task and ``route`` returns without waiting for it; an
    exception raised synchronously by a handler propagates to the caller.
    """

    def __init__(self, registry: CommandRegistry, bot_username: str | None = None) -> None:
        self._registry = registry
        self.bot_username = bot_username
        self._in_flight: set[asyncio.Future] = set()

    def route(self, message: InboundMessage) -> bool:
        text = message.text
        if not text:
            return False

        command = parse_command(text)
        if command is not None and self._addressed_to_me(command):
            spec = self._registry.get(command.name)
            if spec is not None:
                logger.info("Command /%s from chat %s", spec.name, message.chat_id)
                self._invoke(spec.handler, message, command)
                return True

        for trigger_spec in self._registry.triggers:
            match = trigger_spec.trigger.matches(text)
            if match:
                logger.info("Trigger %r from chat %s", trigger_spec.trigger, message.chat_id)
                self._invoke(
                    trigger_spec.handler,
                    message,
                    match if isinstance(match, re.Match) else None,
                )
                return True

        logger.debug("No handler for message %s in chat %s", message.message_id, message.chat_id)
        return False

    def _addressed_to_me(self, command: CommandMatch) -> bool:
        if command.mention is None or self.bot_username is None:
            return True
        return command.mention.lower() == self.bot_username.lower()

    def _invoke(self, handler: Handler, message: InboundMessage, match: Any) -> None:
        result = handler(message, match)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._in_flight.add(task)
            task.add_done_callback(self._on_handler_done)

    def _on_handler_done(self, task: asyncio.Future) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Handler failed", exc_info=exc)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def wait_for_in_flight(self, timeout: float = 30.0) -> None:
        """Wait for running handler tasks to complete."""
        if not self._in_flight:
            return
        logger.info(
            "Waiting for %d in-flight handlers (timeout=%.1fs)", len(self._in_flight), timeout
        )
        _done, pending = await asyncio.wait(set(self._in_flight), timeout=timeout)
        if pending:
            logger.warning("%d handlers still running after timeout", len(pending))
