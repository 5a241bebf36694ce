from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from quicklang.commands.context import CommandContext
from quicklang.commands.registry import CommandRegistry
from quicklang.commands.router import Router
from quicklang.config import Settings
from quicklang.google.service import GoogleApiService
from quicklang.main import app
from quicklang.models import InboundMessage
from quicklang.telegram.client import TelegramClient
from quicklang.telegram.dispatcher import UpdateDispatcher

TEST_SETTINGS = Settings(
    telegram_token="123:test_token",
    google_key_file_path="/nonexistent/key.json",
    google_spreadsheet_id="sheet123",
    telegram_webhook_secret="webhook_secret",
    log_json=False,
    _env_file=None,
)


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


def make_response(json_data: dict | None = None, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = json_data if json_data is not None else {}
    resp.content = b"{}" if json_data is not None else b""
    resp.text = ""
    return resp


def telegram_ok(result: object = True) -> MagicMock:
    return make_response({"ok": True, "result": result})


@pytest.fixture
def mock_http() -> AsyncMock:
    mock = AsyncMock()
    mock.post = AsyncMock(return_value=telegram_ok({"message_id": 1}))
    mock.request = AsyncMock(return_value=make_response({}))
    return mock


@pytest.fixture
def telegram_client(mock_http) -> TelegramClient:
    return TelegramClient(http_client=mock_http, token="123:test_token")


@pytest.fixture
def google_service(mock_http) -> GoogleApiService:
    service = GoogleApiService(http_client=mock_http, key_file_path="/nonexistent/key.json")
    # Skip the service-account handshake: pretend it already happened
    service.client._credentials = MagicMock(valid=True, token="google-token")
    return service


@pytest.fixture
def command_context(telegram_client, google_service, settings) -> CommandContext:
    return CommandContext(telegram=telegram_client, google=google_service, settings=settings)


def make_message(text: str | None = "hello", chat_id: int = 42, message_id: int = 1) -> InboundMessage:
    return InboundMessage(message_id=message_id, chat_id=chat_id, text=text)


def make_update(
    text: str | None = "Hello!",
    update_id: int = 1000,
    chat_id: int = 42,
    message_id: int = 7,
) -> dict:
    message: dict = {
        "message_id": message_id,
        "from": {"id": 99, "is_bot": False, "first_name": "Ana", "username": "ana"},
        "chat": {"id": chat_id, "type": "private"},
        "date": 1700000000,
    }
    if text is not None:
        message["text"] = text
    else:
        message["sticker"] = {"file_id": "stk"}
    return {"update_id": update_id, "message": message}


def make_callback_update(data: str | None = "btn", update_id: int = 2000) -> dict:
    query: dict = {
        "id": "cbq1",
        "from": {"id": 99, "is_bot": False, "first_name": "Ana"},
        "message": {"message_id": 7, "chat": {"id": 42, "type": "private"}, "date": 0},
        "chat_instance": "ci",
    }
    if data is not None:
        query["data"] = data
    return {"update_id": update_id, "callback_query": query}


@pytest.fixture
def client(settings, mock_http, telegram_client, google_service) -> TestClient:
    registry = CommandRegistry()
    router = Router(registry, bot_username="quicklang_bot")

    app.state.settings = settings
    app.state.http_client = mock_http
    app.state.telegram_client = telegram_client
    app.state.google_service = google_service
    app.state.command_registry = registry
    app.state.router = router
    app.state.dispatcher = UpdateDispatcher(router, telegram_client)
    app.state.poller = None

    # Not used as a context manager, so the lifespan (real network setup) never runs
    return TestClient(app, raise_server_exceptions=False)
