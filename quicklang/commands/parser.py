from __future__ import annotations

import re
from dataclasses import dataclass

# /name, optionally addressed as /name@SomeBot, then whitespace or end of text
_COMMAND_TOKEN_RE = re.compile(r"^/(?P<name>[A-Za-z0-9_]+)(?:@(?P<mention>[A-Za-z0-9_]+))?(?=\s|$)")


@dataclass(frozen=True)
class CommandMatch:
    name: str
    args: str = ""
    mention: str | None = None


def parse_command(text: str) -> CommandMatch | None:
    # Anchored at the very first character; "  /start" is plain text
    m = _COMMAND_TOKEN_RE.match(text)
    if not m:
        return None
    args = text[m.end():].strip()
    return CommandMatch(name=m.group("name").lower(), args=args, mention=m.group("mention"))
