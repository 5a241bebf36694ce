from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quicklang.commands.registry import CommandRegistry
    from quicklang.config import Settings
    from quicklang.google.service import GoogleApiService
    from quicklang.telegram.client import TelegramClient


@dataclass
class CommandContext:
    telegram: TelegramClient
    google: GoogleApiService
    settings: Settings
    registry: CommandRegistry | None = field(default=None, repr=False)
