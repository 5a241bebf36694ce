from __future__ import annotations

import logging
from typing import Any

import httpx

from quicklang.exceptions import TelegramApiError
from quicklang.models import BotCommand, TelegramUser
from quicklang.telegram.splitter import split_message

logger = logging.getLogger(__name__)

BOT_API_URL = "https://api.telegram.org"


class TelegramClient:
    def __init__(self, http_client: httpx.AsyncClient, token: str):
        self._http = http_client
        self._token = token

    def _url(self, method: str) -> str:
        return f"{BOT_API_URL}/bot{self._token}/{method}"

    def _check_response(self, method: str, resp: httpx.Response) -> Any:
        try:
            data = resp.json()
        except ValueError:
            resp.raise_for_status()
            raise TelegramApiError(method, resp.status_code, "invalid JSON response")
        if not data.get("ok"):
            error_code = data.get("error_code", resp.status_code)
            description = data.get("description", "")
            if error_code == 401:
                logger.error("Telegram API auth failed (401): bot token is invalid or revoked")
            raise TelegramApiError(method, error_code, description)
        return data.get("result")

    async def _call(
        self,
        method: str,
        payload: dict | None = None,
        files: dict | None = None,
        timeout: float | None = None,
    ) -> Any:
        kwargs: dict[str, Any] = {}
        if files:
            kwargs["data"] = payload or {}
            kwargs["files"] = files
        else:
            kwargs["json"] = payload or {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        resp = await self._http.post(self._url(method), **kwargs)
        return self._check_response(method, resp)

    async def get_me(self) -> TelegramUser:
        result = await self._call("getMe")
        return TelegramUser.model_validate(result)

    async def get_updates(self, offset: int | None = None, timeout: int = 30) -> list[dict]:
        payload: dict[str, Any] = {
            "timeout": timeout,
            "allowed_updates": ["message", "callback_query"],
        }
        if offset is not None:
            payload["offset"] = offset
        # The HTTP read must outlive the long poll itself
        return await self._call("getUpdates", payload, timeout=timeout + 10)

    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        reply_markup: dict | None = None,
        parse_mode: str | None = None,
    ) -> dict:
        chunks = split_message(text)
        sent: dict = {}
        for i, chunk in enumerate(chunks):
            payload: dict[str, Any] = {"chat_id": chat_id, "text": chunk}
            if parse_mode:
                payload["parse_mode"] = parse_mode
            # Keyboard goes on the final chunk so it sits under the whole reply
            if reply_markup and i == len(chunks) - 1:
                payload["reply_markup"] = reply_markup
            sent = await self._call("sendMessage", payload)
        logger.info("Outgoing  [%s]: %s", chat_id, text[:80])
        return sent

    async def send_photo(
        self, chat_id: int | str, photo: str | bytes, caption: str | None = None
    ) -> dict:
        payload: dict[str, Any] = {"chat_id": chat_id}
        if caption:
            payload["caption"] = caption
        if isinstance(photo, bytes):
            return await self._call("sendPhoto", payload, files={"photo": ("photo.jpg", photo)})
        payload["photo"] = photo
        return await self._call("sendPhoto", payload)

    async def send_document(
        self,
        chat_id: int | str,
        document: str | bytes,
        filename: str = "document",
        caption: str | None = None,
    ) -> dict:
        payload: dict[str, Any] = {"chat_id": chat_id}
        if caption:
            payload["caption"] = caption
        if isinstance(document, bytes):
            return await self._call(
                "sendDocument", payload, files={"document": (filename, document)}
            )
        payload["document"] = document
        return await self._call("sendDocument", payload)

    async def send_location(self, chat_id: int | str, latitude: float, longitude: float) -> dict:
        return await self._call(
            "sendLocation",
            {"chat_id": chat_id, "latitude": latitude, "longitude": longitude},
        )

    async def edit_message_text(
        self,
        chat_id: int | str,
        message_id: int,
        text: str,
        reply_markup: dict | None = None,
    ) -> dict | bool:
        payload: dict[str, Any] = {"chat_id": chat_id, "message_id": message_id, "text": text}
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return await self._call("editMessageText", payload)

    async def answer_callback_query(self, callback_query_id: str, text: str | None = None) -> bool:
        payload: dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
        return await self._call("answerCallbackQuery", payload)

    async def set_my_commands(self, commands: list[BotCommand]) -> bool:
        return await self._call(
            "setMyCommands", {"commands": [c.model_dump() for c in commands]}
        )

    async def set_webhook(self, url: str, secret_token: str | None = None) -> bool:
        payload: dict[str, Any] = {
            "url": url,
            "allowed_updates": ["message", "callback_query"],
        }
        if secret_token:
            payload["secret_token"] = secret_token
        return await self._call("setWebhook", payload)

    async def delete_webhook(self) -> bool:
        return await self._call("deleteWebhook")

    @staticmethod
    def inline_keyboard(buttons: list[list[dict]]) -> dict:
        return {"inline_keyboard": buttons}
