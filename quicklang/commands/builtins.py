from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from quicklang.commands.context import CommandContext
from quicklang.commands.parser import CommandMatch
from quicklang.commands.registry import CommandRegistry, CommandSpec, Handler, TriggerSpec
from quicklang.commands.triggers import LiteralTrigger, PatternTrigger
from quicklang.exceptions import GoogleApiError
from quicklang.models import InboundMessage

logger = logging.getLogger(__name__)

SHEET_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}"
VOCABULARY_HEADER = ("Word", "Meaning", "Added")

# "word - meaning", "word: meaning" or "word = meaning"
_WORD_ENTRY_RE = re.compile(r"^(?P<word>.+?)\s*(?:\s-\s|:|=)\s*(?P<meaning>.+)$")

ReplyFn = Callable[[str, CommandContext], Awaitable[str | None]]


def _replying(fn: ReplyFn, context: CommandContext) -> Handler:
    """Adapt an ``(args, context) -> reply`` function into a router handler."""

    async def handler(message: InboundMessage, match: Any) -> None:
        args = match.args if isinstance(match, CommandMatch) else (message.text or "")
        reply = await fn(args, context)
        if reply:
            await context.telegram.send_message(message.chat_id, reply)

    handler.__name__ = fn.__name__
    return handler


async def cmd_start(args: str, context: CommandContext) -> str:
    return "Hi! I'm Quicklang Bot. Type /help to see the list of commands."


async def cmd_help(args: str, context: CommandContext) -> str:
    if context.registry is None:
        return "No commands available."
    lines = ["🤖 Commands"]
    for info in context.registry.list_commands():
        lines.append(f"/{info.name} - {info.description}")
    return "\n".join(lines)


async def cmd_about(args: str, context: CommandContext) -> str:
    return (
        "👋 Quicklang Bot keeps your English vocabulary in a Google Sheet.\n\n"
        "Add words with /addenglishword, review them with /words, "
        "and check your calendar and inbox without leaving the chat."
    )


async def cmd_sheetlink(args: str, context: CommandContext) -> str:
    spreadsheet_id = context.settings.google_spreadsheet_id
    try:
        spreadsheet = await context.google.sheets.get_metadata(spreadsheet_id)
    except GoogleApiError:
        return "Couldn't reach the Google Sheet right now. Try again later."
    title = spreadsheet.properties.title or "Google Sheet"
    tabs = ", ".join(spreadsheet.sheet_titles())
    reply = f"📄 {title}: {SHEET_URL.format(spreadsheet_id=spreadsheet_id)}"
    if tabs:
        reply += f"\nSheets: {tabs}"
    return reply


async def cmd_addenglishword(args: str, context: CommandContext) -> str:
    m = _WORD_ENTRY_RE.match(args.strip())
    if not m:
        return "Usage: /addenglishword <word> - <meaning>"
    word, meaning = m.group("word").strip(), m.group("meaning").strip()
    sheets = context.google.sheets
    spreadsheet_id = context.settings.google_spreadsheet_id
    range_ = context.settings.vocabulary_range
    rows = [[word, meaning, datetime.now(UTC).date().isoformat()]]
    try:
        # /words reads row 1 as the header, so a fresh sheet gets one first
        if not await sheets.read(spreadsheet_id, range_):
            rows.insert(0, list(VOCABULARY_HEADER))
        await sheets.append(spreadsheet_id, range_, rows)
    except GoogleApiError:
        return f"Couldn't save '{word}'. Try again later."
    logger.info("Added vocabulary word %r", word)
    return f"✅ Added: {word} - {meaning}"


async def cmd_words(args: str, context: CommandContext) -> str:
    try:
        rows = await context.google.sheets.read_as_objects(
            context.settings.google_spreadsheet_id,
            context.settings.vocabulary_range,
        )
    except GoogleApiError:
        return "Couldn't read the vocabulary sheet. Try again later."
    if not rows:
        return "Your vocabulary list is empty. Add a word with /addenglishword."
    lines = [f"📚 Latest words ({len(rows)} total)"]
    for row in rows[-10:]:
        values = list(row.values())
        word = values[0] if values else None
        meaning = values[1] if len(values) > 1 else None
        lines.append(f"• {word} - {meaning or '?'}")
    return "\n".join(lines)


async def cmd_events(args: str, context: CommandContext) -> str:
    try:
        events = await context.google.calendar.list_events(
            time_min=datetime.now(UTC), max_results=5
        )
    except GoogleApiError:
        return "Couldn't read the calendar. Try again later."
    if not events.items:
        return "No upcoming events."
    lines = ["📅 Upcoming events"]
    for event in events.items:
        when = ""
        if event.start is not None:
            when = event.start.date_time or event.start.date or ""
        lines.append(f"• {when} {event.summary}".rstrip())
    return "\n".join(lines)


async def cmd_inbox(args: str, context: CommandContext) -> str:
    query = args.strip() or None
    gmail = context.google.gmail
    try:
        listing = await gmail.list_messages(query=query, max_results=5)
        messages = await asyncio.gather(*(gmail.get_message(m.id) for m in listing.messages))
    except GoogleApiError:
        return "Couldn't read the inbox. Try again later."
    if not messages:
        return "No messages found."
    lines = ["✉️ Latest messages"]
    for msg in messages:
        subject = msg.header("Subject") or "(no subject)"
        sender = msg.header("From") or "?"
        lines.append(f"• {subject} ({sender})")
    return "\n".join(lines)


async def reply_hello(args: str, context: CommandContext) -> str:
    return "Hello! Type /help to see what I can do."


async def reply_thanks(args: str, context: CommandContext) -> str:
    return "You're welcome!"


def register_builtins(registry: CommandRegistry, context: CommandContext) -> None:
    context.registry = registry

    commands: list[tuple[str, str, str, ReplyFn]] = [
        ("start", "Start the bot", "/start", cmd_start),
        ("help", "Show help", "/help", cmd_help),
        ("about", "About this bot", "/about", cmd_about),
        ("sheetlink", "Link to the Google Sheet", "/sheetlink", cmd_sheetlink),
        (
            "addenglishword",
            "Add a new English word",
            "/addenglishword <word> - <meaning>",
            cmd_addenglishword,
        ),
        ("words", "Show the latest saved words", "/words", cmd_words),
        ("events", "Show upcoming calendar events", "/events", cmd_events),
        ("inbox", "Show the latest emails", "/inbox [query]", cmd_inbox),
    ]
    for name, description, usage, fn in commands:
        registry.register_command(
            CommandSpec(
                name=name,
                description=description,
                usage=usage,
                handler=_replying(fn, context),
            )
        )

    registry.register_trigger(
        TriggerSpec(trigger=LiteralTrigger("hello"), handler=_replying(reply_hello, context))
    )
    registry.register_trigger(
        TriggerSpec(
            trigger=PatternTrigger(re.compile(r"^(thanks|thank you)\b", re.IGNORECASE)),
            handler=_replying(reply_thanks, context),
        )
    )
    logger.info(
        "Registered %d commands and %d triggers",
        len(registry.commands),
        len(registry.triggers),
    )
