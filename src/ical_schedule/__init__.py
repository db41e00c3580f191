"""Renders an event schedule from one or more iCalendar feeds.

This package exposes the following public symbols:

* :class:`ScheduleBuilder` — fetches the track feeds and renders the
  schedule as HTML or plain text.
* :class:`Track` — a named feed URL.
* :class:`FetchError` and :class:`ParseError` — raised when a feed cannot
  be downloaded or parsed.
"""

from .builder import ScheduleBuilder
from .errors import FetchError, ParseError, ScheduleError
from .schedule import EventGroup, NormalizedEvent, Track

__all__ = [
    "EventGroup",
    "FetchError",
    "NormalizedEvent",
    "ParseError",
    "ScheduleBuilder",
    "ScheduleError",
    "Track",
]
