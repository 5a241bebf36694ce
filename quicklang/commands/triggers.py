from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class LiteralTrigger:
    """Case-insensitive substring match."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Literal trigger text must not be empty")

    def matches(self, text: str) -> bool:
        return self.text.casefold() in text.casefold()


@dataclass(frozen=True)
class PatternTrigger:
    """Regex match anywhere in the text, honouring the pattern's own flags and anchors."""

    pattern: re.Pattern[str]

    def matches(self, text: str) -> re.Match[str] | None:
        return self.pattern.search(text)


Trigger = LiteralTrigger | PatternTrigger


def as_trigger(value: str | re.Pattern[str] | Trigger) -> Trigger:
    """Wrap a bare string or compiled regex into its trigger variant."""
    if isinstance(value, (LiteralTrigger, PatternTrigger)):
        return value
    if isinstance(value, re.Pattern):
        return PatternTrigger(value)
    if isinstance(value, str):
        return LiteralTrigger(value)
    raise TypeError(f"Unsupported trigger type: {type(value).__name__}")
