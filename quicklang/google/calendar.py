from __future__ import annotations

import datetime
import logging
from urllib.parse import quote

from quicklang.google.client import GoogleApiClient, require
from quicklang.google.models import CalendarEvent, Events

logger = logging.getLogger(__name__)

CALENDAR_API_URL = "https://www.googleapis.com/calendar/v3/calendars"


def _rfc3339(value: datetime.datetime | None, name: str) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        raise ValueError(f"{name} must be timezone-aware")
    return value.isoformat()


class CalendarService:
    def __init__(self, client: GoogleApiClient, time_zone: str = "UTC"):
        self._client = client
        self._time_zone = time_zone

    @staticmethod
    def _events_url(calendar_id: str) -> str:
        return f"{CALENDAR_API_URL}/{quote(calendar_id, safe='')}/events"

    async def list_events(
        self,
        calendar_id: str = "primary",
        time_min: datetime.datetime | None = None,
        time_max: datetime.datetime | None = None,
        max_results: int = 10,
    ) -> Events:
        require(calendar_id=calendar_id)
        data = await self._client.request(
            "calendar.events.list",
            "GET",
            self._events_url(calendar_id),
            params={
                "timeMin": _rfc3339(time_min, "time_min"),
                "timeMax": _rfc3339(time_max, "time_max"),
                "maxResults": max_results,
                "singleEvents": "true",
                "orderBy": "startTime",
            },
        )
        return Events.model_validate(data)

    async def create_event(
        self,
        summary: str,
        description: str,
        start: datetime.datetime,
        end: datetime.datetime,
        location: str | None = None,
        calendar_id: str = "primary",
    ) -> CalendarEvent:
        require(calendar_id=calendar_id, summary=summary, start=start, end=end)
        body: dict = {
            "summary": summary,
            "description": description,
            "start": {"dateTime": _rfc3339(start, "start"), "timeZone": self._time_zone},
            "end": {"dateTime": _rfc3339(end, "end"), "timeZone": self._time_zone},
        }
        if location:
            body["location"] = location
        data = await self._client.request(
            "calendar.events.insert", "POST", self._events_url(calendar_id), json=body
        )
        event = CalendarEvent.model_validate(data)
        logger.info("Created calendar event %s in %s", event.id, calendar_id)
        return event
