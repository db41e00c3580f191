"""Schedule data model, event normalization and date grouping."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Sequence

from .feed import RawEvent

SCHEDULE_TZ = timezone(timedelta(hours=1))
"""Fixed offset every event is shown in."""


@dataclass(frozen=True)
class Track:
    """A named schedule track backed by one calendar feed."""

    name: str
    url: str


@dataclass(frozen=True)
class NormalizedEvent:
    """An event ready for rendering.

    :param summary: The event title, possibly empty.
    :param presenter: Taken from the event description; ``None`` or blank
        means nobody is presenting.
    :param location: The event location, or ``None``.
    :param start: Start time at :data:`SCHEDULE_TZ`.
    :param end: End time at :data:`SCHEDULE_TZ`.
    """

    summary: str
    presenter: str | None
    location: str | None
    start: datetime
    end: datetime

    @property
    def has_presenter(self) -> bool:
        return bool(self.presenter and self.presenter.strip())


@dataclass(frozen=True)
class EventGroup:
    """Consecutive events that start on the same calendar date."""

    date: date
    events: tuple[NormalizedEvent, ...]


def to_schedule_tz(value: datetime | date) -> datetime:
    """Convert a feed timestamp to :data:`SCHEDULE_TZ`.

    Floating times are taken to be UTC and all-day dates become midnight
    at the schedule offset.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time(), tzinfo=SCHEDULE_TZ)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(SCHEDULE_TZ)


def normalize(raw_events: Iterable[RawEvent]) -> list[NormalizedEvent]:
    """Convert raw feed events and sort them by start time.

    The sort is stable, so events starting at the same moment keep their
    feed order. Nothing is filtered out.
    """
    events = [
        NormalizedEvent(
            summary=raw.summary,
            presenter=raw.description,
            location=raw.location,
            start=to_schedule_tz(raw.start),
            end=to_schedule_tz(raw.end),
        )
        for raw in raw_events
    ]
    return sorted(events, key=lambda event: event.start)


def group(events: Sequence[NormalizedEvent]) -> list[EventGroup]:
    """Split start-sorted events into runs sharing a calendar date.

    :param events: Events sorted ascending by ``start``.
    :returns: Groups in input order; empty for no events.
    """
    groups: list[EventGroup] = []
    current_date: date | None = None
    current: list[NormalizedEvent] = []

    for event in events:
        event_date = event.start.date()
        if current and event_date != current_date:
            groups.append(EventGroup(current_date, tuple(current)))
            current = []
        current_date = event_date
        current.append(event)

    if current:
        groups.append(EventGroup(current_date, tuple(current)))
    return groups


def full_date(d: date) -> str:
    """Format a date like ``"Friday May 3, 2024"``."""
    return f"{d:%A %B} {d.day}, {d.year}"


def display_time(dt: datetime) -> str:
    """Format a time like ``"9:30 AM"``."""
    return dt.strftime("%I:%M %p").lstrip("0")
