from __future__ import annotations

import httpx

from quicklang.google.calendar import CalendarService
from quicklang.google.client import GoogleApiClient
from quicklang.google.drive import DriveService
from quicklang.google.gmail import GmailService
from quicklang.google.sheets import SheetsService


class GoogleApiService:
    """Sheets, Drive, Calendar and Gmail behind one service-account login."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        key_file_path: str,
        scopes: list[str] | None = None,
        time_zone: str = "UTC",
    ):
        self.client = GoogleApiClient(http_client, key_file_path, scopes)
        self.sheets = SheetsService(self.client)
        self.drive = DriveService(self.client)
        self.calendar = CalendarService(self.client, time_zone=time_zone)
        self.gmail = GmailService(self.client)

    async def initialize(self) -> None:
        await self.client.initialize()

    @property
    def authenticated(self) -> bool:
        return self.client.authenticated
