from __future__ import annotations

from quicklang.google.client import GoogleApiClient, require
from quicklang.google.models import GmailMessage, MessageList

GMAIL_API_URL = "https://gmail.googleapis.com/gmail/v1/users/me/messages"


class GmailService:
    def __init__(self, client: GoogleApiClient):
        self._client = client

    async def list_messages(self, query: str | None = None, max_results: int = 10) -> MessageList:
        data = await self._client.request(
            "gmail.messages.list",
            "GET",
            GMAIL_API_URL,
            params={"q": query, "maxResults": max_results},
        )
        return MessageList.model_validate(data)

    async def get_message(self, message_id: str) -> GmailMessage:
        require(message_id=message_id)
        data = await self._client.request(
            "gmail.messages.get", "GET", f"{GMAIL_API_URL}/{message_id}"
        )
        return GmailMessage.model_validate(data)
