from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from quicklang.commands.triggers import Trigger, as_trigger
from quicklang.exceptions import DuplicateCommandError
from quicklang.models import InboundMessage

logger = logging.getLogger(__name__)

# handler(message, match) -> None | awaitable; match is a CommandMatch, re.Match or None
Handler = Callable[[InboundMessage, Any], Awaitable[None] | None]

# Telegram accepts 1-32 lowercase letters, digits and underscores
_COMMAND_NAME_RE = re.compile(r"^[a-z0-9_]{1,32}$")


@dataclass(frozen=True)
class CommandSpec:
    name: str
    description: str
    handler: Handler
    usage: str = ""


@dataclass(frozen=True)
class TriggerSpec:
    trigger: Trigger
    handler: Handler


@dataclass(frozen=True)
class CommandInfo:
    name: str
    description: str


class CommandRegistry:
    """Ordered, append-only store of commands and free-text triggers."""

    def __init__(self) -> None:
        self._commands: list[CommandSpec] = []
        self._by_name: dict[str, CommandSpec] = {}
        self._triggers: list[TriggerSpec] = []

    def register_command(self, spec: CommandSpec) -> None:
        name = spec.name.removeprefix("/").lower()
        if not _COMMAND_NAME_RE.match(name):
            raise ValueError(f"Invalid command name: {spec.name!r}")
        if name in self._by_name:
            raise DuplicateCommandError(name)
        if name != spec.name:
            spec = CommandSpec(
                name=name, description=spec.description, handler=spec.handler, usage=spec.usage
            )
        self._commands.append(spec)
        self._by_name[name] = spec
        logger.debug("Registered command /%s", name)

    def register_trigger(self, spec: TriggerSpec) -> None:
        trigger = as_trigger(spec.trigger)
        if trigger is not spec.trigger:
            spec = TriggerSpec(trigger=trigger, handler=spec.handler)
        self._triggers.append(spec)
        logger.debug("Registered trigger %r", trigger)

    def get(self, name: str) -> CommandSpec | None:
        return self._by_name.get(name.lower())

    def list_commands(self) -> list[CommandInfo]:
        return [CommandInfo(name=c.name, description=c.description) for c in self._commands]

    @property
    def commands(self) -> tuple[CommandSpec, ...]:
        return tuple(self._commands)

    @property
    def triggers(self) -> tuple[TriggerSpec, ...]:
        return tuple(self._triggers)
