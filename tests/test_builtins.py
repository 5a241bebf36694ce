from unittest.mock import AsyncMock

import pytest

from quicklang.commands.builtins import (
    cmd_addenglishword,
    cmd_events,
    cmd_help,
    cmd_inbox,
    cmd_sheetlink,
    cmd_words,
    register_builtins,
)
from quicklang.commands.registry import CommandRegistry
from quicklang.commands.router import Router
from quicklang.exceptions import GoogleApiError
from tests.conftest import make_message, make_response


@pytest.fixture
def registry(command_context) -> CommandRegistry:
    registry = CommandRegistry()
    register_builtins(registry, command_context)
    return registry


def _google_responds(context, *payloads: dict) -> AsyncMock:
    mock = AsyncMock(side_effect=[make_response(p) for p in payloads])
    context.google.client._http.request = mock
    return mock


def _google_fails(context) -> None:
    context.google.client._http.request = AsyncMock(
        return_value=make_response({"error": {"message": "boom"}}, 500)
    )


def test_builtin_order(registry):
    assert [c.name for c in registry.list_commands()] == [
        "start",
        "help",
        "about",
        "sheetlink",
        "addenglishword",
        "words",
        "events",
        "inbox",
    ]
    assert len(registry.triggers) == 2


@pytest.mark.asyncio
async def test_help_lists_registered_commands(registry, command_context):
    reply = await cmd_help("", command_context)
    assert "/start - Start the bot" in reply
    assert "/addenglishword - Add a new English word" in reply


@pytest.mark.asyncio
async def test_start_command_replies_through_router(registry, command_context):
    router = Router(registry)

    assert router.route(make_message("/start", chat_id=42)) is True
    await router.wait_for_in_flight(timeout=1.0)

    call = command_context.telegram._http.post.call_args
    assert call.args[0].endswith("/sendMessage")
    assert call.kwargs["json"]["chat_id"] == 42
    assert "/help" in call.kwargs["json"]["text"]


@pytest.mark.asyncio
async def test_hello_trigger_replies(registry, command_context):
    router = Router(registry)

    assert router.route(make_message("well HELLO there")) is True
    await router.wait_for_in_flight(timeout=1.0)

    assert "Hello!" in command_context.telegram._http.post.call_args.kwargs["json"]["text"]


@pytest.mark.asyncio
async def test_thanks_trigger_replies(registry, command_context):
    router = Router(registry)

    assert router.route(make_message("Thank you so much")) is True
    await router.wait_for_in_flight(timeout=1.0)

    assert command_context.telegram._http.post.call_args.kwargs["json"]["text"] == "You're welcome!"


@pytest.mark.asyncio
async def test_sheetlink(command_context):
    _google_responds(
        command_context,
        {
            "spreadsheetId": "sheet123",
            "properties": {"title": "Quicklang"},
            "sheets": [{"properties": {"title": "Vocabulary"}}],
        },
    )

    reply = await cmd_sheetlink("", command_context)

    assert "https://docs.google.com/spreadsheets/d/sheet123" in reply
    assert "Vocabulary" in reply


@pytest.mark.asyncio
async def test_sheetlink_remote_failure(command_context):
    _google_fails(command_context)
    assert "Couldn't reach" in await cmd_sheetlink("", command_context)


_HEADER = {"values": [["Word", "Meaning", "Added"]]}


@pytest.mark.asyncio
async def test_addenglishword_appends_row(command_context):
    mock = _google_responds(command_context, _HEADER, {"spreadsheetId": "sheet123"})

    reply = await cmd_addenglishword("serendipity - a happy accident", command_context)

    values = mock.call_args.kwargs["json"]["values"]
    assert len(values) == 1
    assert values[0][:2] == ["serendipity", "a happy accident"]
    assert mock.call_args.kwargs["params"] == {"valueInputOption": "USER_ENTERED"}
    assert "serendipity" in reply


@pytest.mark.asyncio
async def test_addenglishword_writes_header_on_empty_sheet(command_context):
    mock = _google_responds(command_context, {}, {"spreadsheetId": "sheet123"})

    await cmd_addenglishword("apple - a fruit", command_context)

    values = mock.call_args.kwargs["json"]["values"]
    assert values[0] == ["Word", "Meaning", "Added"]
    assert values[1][:2] == ["apple", "a fruit"]


@pytest.mark.asyncio
async def test_first_word_on_empty_sheet_is_listed(command_context):
    append = _google_responds(command_context, {}, {"spreadsheetId": "sheet123"})
    await cmd_addenglishword("apple - a fruit", command_context)
    saved = append.call_args.kwargs["json"]["values"]

    _google_responds(command_context, {"values": saved})
    reply = await cmd_words("", command_context)

    assert "1 total" in reply
    assert "apple - a fruit" in reply


@pytest.mark.asyncio
async def test_addenglishword_keeps_hyphenated_words(command_context):
    mock = _google_responds(command_context, _HEADER, {"spreadsheetId": "sheet123"})

    await cmd_addenglishword("well-known: famous", command_context)

    assert mock.call_args.kwargs["json"]["values"][0][:2] == ["well-known", "famous"]


@pytest.mark.asyncio
async def test_addenglishword_usage(command_context):
    mock = _google_responds(command_context)
    assert (await cmd_addenglishword("", command_context)).startswith("Usage:")
    mock.assert_not_called()


@pytest.mark.asyncio
async def test_addenglishword_remote_failure(command_context):
    _google_fails(command_context)
    assert "Couldn't save" in await cmd_addenglishword("apple - fruit", command_context)


@pytest.mark.asyncio
async def test_words_lists_latest(command_context):
    _google_responds(
        command_context,
        {"values": [["Word", "Meaning", "Added"], ["apple", "a fruit", "2026-10-18"], ["run"]]},
    )

    reply = await cmd_words("", command_context)

    assert "2 total" in reply
    assert "apple - a fruit" in reply
    assert "run - ?" in reply


@pytest.mark.asyncio
async def test_words_empty(command_context):
    _google_responds(command_context, {"values": [["Word", "Meaning", "Added"]]})
    assert "empty" in await cmd_words("", command_context)


@pytest.mark.asyncio
async def test_events(command_context):
    mock = _google_responds(
        command_context,
        {"items": [{"id": "e1", "summary": "Lesson", "start": {"dateTime": "2026-10-20T09:00:00Z"}}]},
    )

    reply = await cmd_events("", command_context)

    assert "2026-10-20T09:00:00Z Lesson" in reply
    assert mock.call_args.kwargs["params"]["maxResults"] == 5


@pytest.mark.asyncio
async def test_inbox(command_context):
    _google_responds(
        command_context,
        {"messages": [{"id": "m1"}]},
        {
            "id": "m1",
            "payload": {
                "headers": [
                    {"name": "Subject", "value": "Homework"},
                    {"name": "From", "value": "tutor@example.com"},
                ]
            },
        },
    )

    reply = await cmd_inbox("", command_context)

    assert "Homework (tutor@example.com)" in reply


@pytest.mark.asyncio
async def test_inbox_empty(command_context):
    _google_responds(command_context, {"resultSizeEstimate": 0})
    assert await cmd_inbox("", command_context) == "No messages found."


@pytest.mark.asyncio
async def test_remote_failure_error_type(command_context):
    _google_fails(command_context)
    with pytest.raises(GoogleApiError):
        await command_context.google.gmail.list_messages()
