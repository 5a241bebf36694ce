from __future__ import annotations

import logging
from typing import Any, Literal
from urllib.parse import quote

from quicklang.google.client import GoogleApiClient, require
from quicklang.google.models import (
    AppendValuesResponse,
    BatchUpdateValuesResponse,
    ClearValuesResponse,
    Spreadsheet,
    UpdateValuesResponse,
    ValueRange,
)

logger = logging.getLogger(__name__)

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"

ValueInputOption = Literal["RAW", "USER_ENTERED"]
ValueRenderOption = Literal["FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA"]


def rows_to_objects(rows: list[list[Any]]) -> list[dict[str, Any]]:
    """Zip each data row with the header row; missing trailing cells become None."""
    if len(rows) < 2:
        return []
    headers = rows[0]
    return [
        {header: row[i] if i < len(row) else None for i, header in enumerate(headers)}
        for row in rows[1:]
    ]


class SheetsService:
    def __init__(self, client: GoogleApiClient):
        self._client = client

    @staticmethod
    def _values_url(spreadsheet_id: str, range_: str, suffix: str = "") -> str:
        return f"{SHEETS_API_URL}/{spreadsheet_id}/values/{quote(range_, safe='')}{suffix}"

    async def get_metadata(self, spreadsheet_id: str) -> Spreadsheet:
        require(spreadsheet_id=spreadsheet_id)
        data = await self._client.request(
            "sheets.get", "GET", f"{SHEETS_API_URL}/{spreadsheet_id}"
        )
        return Spreadsheet.model_validate(data)

    async def read(
        self,
        spreadsheet_id: str,
        range_: str,
        value_render_option: ValueRenderOption = "FORMATTED_VALUE",
    ) -> list[list[Any]]:
        require(spreadsheet_id=spreadsheet_id, range=range_)
        data = await self._client.request(
            "sheets.values.get",
            "GET",
            self._values_url(spreadsheet_id, range_),
            params={"valueRenderOption": value_render_option},
        )
        return ValueRange.model_validate(data).values

    async def read_as_objects(
        self,
        spreadsheet_id: str,
        range_: str,
        value_render_option: ValueRenderOption = "FORMATTED_VALUE",
    ) -> list[dict[str, Any]]:
        rows = await self.read(spreadsheet_id, range_, value_render_option)
        return rows_to_objects(rows)

    async def append(
        self,
        spreadsheet_id: str,
        range_: str,
        values: list[list[Any]],
        value_input_option: ValueInputOption = "USER_ENTERED",
    ) -> AppendValuesResponse:
        require(spreadsheet_id=spreadsheet_id, range=range_)
        data = await self._client.request(
            "sheets.values.append",
            "POST",
            self._values_url(spreadsheet_id, range_, ":append"),
            params={"valueInputOption": value_input_option},
            json={"values": values},
        )
        return AppendValuesResponse.model_validate(data)

    async def update(
        self,
        spreadsheet_id: str,
        range_: str,
        values: list[list[Any]],
        value_input_option: ValueInputOption = "USER_ENTERED",
    ) -> UpdateValuesResponse:
        require(spreadsheet_id=spreadsheet_id, range=range_)
        data = await self._client.request(
            "sheets.values.update",
            "PUT",
            self._values_url(spreadsheet_id, range_),
            params={"valueInputOption": value_input_option},
            json={"values": values},
        )
        return UpdateValuesResponse.model_validate(data)

    async def clear(self, spreadsheet_id: str, range_: str) -> ClearValuesResponse:
        require(spreadsheet_id=spreadsheet_id, range=range_)
        data = await self._client.request(
            "sheets.values.clear",
            "POST",
            self._values_url(spreadsheet_id, range_, ":clear"),
            json={},
        )
        return ClearValuesResponse.model_validate(data)

    async def batch_update(
        self,
        spreadsheet_id: str,
        ranges: list[str],
        data: list[list[list[Any]]],
        value_input_option: ValueInputOption = "USER_ENTERED",
    ) -> BatchUpdateValuesResponse:
        require(spreadsheet_id=spreadsheet_id, ranges=ranges)
        if len(ranges) != len(data):
            raise ValueError(
                f"ranges and data must have the same length ({len(ranges)} != {len(data)})"
            )
        body = {
            "valueInputOption": value_input_option,
            "data": [{"range": r, "values": v} for r, v in zip(ranges, data)],
        }
        resp = await self._client.request(
            "sheets.values.batchUpdate",
            "POST",
            f"{SHEETS_API_URL}/{spreadsheet_id}/values:batchUpdate",
            json=body,
        )
        return BatchUpdateValuesResponse.model_validate(resp)

    async def create(self, title: str, sheet_titles: list[str] | None = None) -> Spreadsheet:
        require(title=title)
        sheets = [{"properties": {"title": t}} for t in (sheet_titles or ["Sheet1"])]
        data = await self._client.request(
            "sheets.create",
            "POST",
            SHEETS_API_URL,
            json={"properties": {"title": title}, "sheets": sheets},
        )
        spreadsheet = Spreadsheet.model_validate(data)
        logger.info("Created spreadsheet %s (%s)", spreadsheet.spreadsheet_id, title)
        return spreadsheet
