"""Plain text rendering of a track schedule."""

from __future__ import annotations

from typing import Sequence, TextIO

from .schedule import EventGroup, NormalizedEvent, full_date


def event_line(event: NormalizedEvent) -> str:
    """Format one event as ``HH:MM-HH:MM: summary - presenter, location``."""
    line = f"{event.start:%H:%M}-{event.end:%H:%M}: {event.summary}"
    if event.has_presenter:
        line += f" - {event.presenter.strip()}"
    # An absent location still gets its separator
    line += f", {event.location or ''}"
    return line


def render_track_schedule_text(sink: TextIO, groups: Sequence[EventGroup]) -> None:
    """Write a date heading, the event lines and a blank line per group."""
    for event_group in groups:
        sink.write(full_date(event_group.date) + "\n")
        for event in event_group.events:
            sink.write(event_line(event) + "\n")
        sink.write("\n")
