"""Typed records for the Google API responses the bot consumes.

Field names are snake_case and map to the API's camelCase keys. Fields the
bot does not read are kept as extras, so nothing in a response is lost.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GoogleRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# --- Sheets ---


class SheetProperties(GoogleRecord):
    sheet_id: int | None = None
    title: str = ""
    index: int | None = None


class Sheet(GoogleRecord):
    properties: SheetProperties = Field(default_factory=SheetProperties)


class SpreadsheetProperties(GoogleRecord):
    title: str = ""
    locale: str | None = None
    time_zone: str | None = None


class Spreadsheet(GoogleRecord):
    spreadsheet_id: str = ""
    properties: SpreadsheetProperties = Field(default_factory=SpreadsheetProperties)
    sheets: list[Sheet] = []
    spreadsheet_url: str | None = None

    def sheet_titles(self) -> list[str]:
        return [s.properties.title for s in self.sheets]


class ValueRange(GoogleRecord):
    range: str = ""
    major_dimension: str | None = None
    values: list[list[Any]] = []


class UpdateValuesResponse(GoogleRecord):
    spreadsheet_id: str = ""
    updated_range: str | None = None
    updated_rows: int = 0
    updated_columns: int = 0
    updated_cells: int = 0


class AppendValuesResponse(GoogleRecord):
    spreadsheet_id: str = ""
    table_range: str | None = None
    updates: UpdateValuesResponse | None = None


class ClearValuesResponse(GoogleRecord):
    spreadsheet_id: str = ""
    cleared_range: str | None = None


class BatchUpdateValuesResponse(GoogleRecord):
    spreadsheet_id: str = ""
    total_updated_rows: int = 0
    total_updated_columns: int = 0
    total_updated_cells: int = 0
    total_updated_sheets: int = 0
    responses: list[UpdateValuesResponse] = []


# --- Drive ---


class DriveFile(GoogleRecord):
    id: str = ""
    name: str = ""
    mime_type: str | None = None
    created_time: str | None = None
    modified_time: str | None = None
    web_view_link: str | None = None
    parents: list[str] = []


class FileList(GoogleRecord):
    files: list[DriveFile] = []
    next_page_token: str | None = None


# --- Calendar ---


class EventDateTime(GoogleRecord):
    date_time: str | None = None
    date: str | None = None  # all-day events
    time_zone: str | None = None


class CalendarEvent(GoogleRecord):
    id: str = ""
    summary: str = ""
    description: str | None = None
    location: str | None = None
    start: EventDateTime | None = None
    end: EventDateTime | None = None
    html_link: str | None = None
    status: str | None = None


class Events(GoogleRecord):
    summary: str | None = None
    time_zone: str | None = None
    items: list[CalendarEvent] = []
    next_page_token: str | None = None


# --- Gmail ---


class MessageRef(GoogleRecord):
    id: str
    thread_id: str | None = None


class MessageList(GoogleRecord):
    messages: list[MessageRef] = []
    next_page_token: str | None = None
    result_size_estimate: int = 0


class MessagePartHeader(GoogleRecord):
    name: str
    value: str = ""


class MessagePart(GoogleRecord):
    mime_type: str | None = None
    filename: str | None = None
    headers: list[MessagePartHeader] = []
    body: dict[str, Any] | None = None
    parts: list[MessagePart] = []


class GmailMessage(GoogleRecord):
    id: str
    thread_id: str | None = None
    label_ids: list[str] = []
    snippet: str = ""
    internal_date: str | None = None
    payload: MessagePart | None = None

    def header(self, name: str) -> str | None:
        if self.payload is None:
            return None
        for h in self.payload.headers:
            if h.name.lower() == name.lower():
                return h.value
        return None
