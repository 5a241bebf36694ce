from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from quicklang.commands.registry import CommandRegistry
from quicklang.models import BotCommand

if TYPE_CHECKING:
    from quicklang.telegram.client import TelegramClient

logger = logging.getLogger(__name__)


def build_menu(registry: CommandRegistry) -> list[BotCommand]:
    return [
        BotCommand(command=info.name, description=info.description)
        for info in registry.list_commands()
    ]


async def publish_commands(registry: CommandRegistry, telegram: TelegramClient) -> None:
    """Push the command menu to Telegram. Safe to call repeatedly."""
    menu = build_menu(registry)
    await telegram.set_my_commands(menu)
    logger.info("Published %d commands to the Telegram menu", len(menu))
