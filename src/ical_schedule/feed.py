"""Calendar feed download and parsing.

Provides :func:`fetch_feed`, :func:`parse_feed` and the :class:`RawEvent`
data class holding one ``VEVENT`` as found in the feed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import requests
from icalendar import Calendar, Component

from .errors import FetchError, ParseError

logger = logging.getLogger(__name__)


@dataclass
class RawEvent:
    """A single event as read from an iCalendar feed.

    :param summary: The event title, empty if the feed has none.
    :param description: Free text description, or ``None``.
    :param location: The event location, or ``None``.
    :param start: Start time in the feed's own timezone. A plain
        :class:`~datetime.date` for all-day events.
    :param end: End time in the feed's own timezone.
    """

    summary: str
    description: str | None
    location: str | None
    start: datetime | date
    end: datetime | date


def fetch_feed(url: str, timeout: float = 30) -> str:
    """Download a calendar feed and return its body.

    ``webcal://`` URLs are fetched over HTTPS.

    :param url: The feed URL.
    :param timeout: Request timeout in seconds.
    :returns: The response body as a string.
    :raises FetchError: If the host is unreachable, the request times out
        or the server returns an error status.
    """
    if url.startswith("webcal://"):
        url = "https://" + url[len("webcal://"):]
    logger.debug("Fetching calendar feed %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Could not fetch {url}: {e}") from e
    return resp.text


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def _to_raw_event(component: Component) -> RawEvent:
    dtstart = component.get("dtstart")
    if dtstart is None:
        raise ParseError(f"Event {component.get('uid')!s} has no DTSTART")
    start = dtstart.dt

    if component.get("dtend") is not None:
        end = component.get("dtend").dt
    elif component.get("duration") is not None:
        end = start + component.get("duration").dt
    else:
        end = start

    return RawEvent(
        summary=str(component.get("summary", "")),
        description=_optional_text(component.get("description")),
        location=_optional_text(component.get("location")),
        start=start,
        end=end,
    )


def parse_feed(text: str) -> list[RawEvent]:
    """Parse iCalendar text into a list of :class:`RawEvent`.

    Events are returned in feed order.

    :param text: The calendar document.
    :returns: One :class:`RawEvent` per ``VEVENT``; empty for a calendar
        without events.
    :raises ParseError: If the text is not a valid ``VCALENDAR``.
    """
    try:
        cal = Calendar.from_ical(text)
        if cal.name != "VCALENDAR":
            raise ParseError(f"Expected a VCALENDAR, got {cal.name}")
        # Property values are decoded lazily, so bad dates surface here
        events = [_to_raw_event(component) for component in cal.walk("VEVENT")]
    except ValueError as e:
        raise ParseError(f"Malformed calendar feed: {e}") from e
    logger.debug("Parsed %d events", len(events))
    return events
