"""ScheduleBuilder class module.

Provides :class:`ScheduleBuilder`, which turns a list of tracks into a
complete HTML or plain text schedule.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable, Mapping, TextIO

from bs4 import BeautifulSoup

from .feed import fetch_feed, parse_feed
from .html_renderer import add_title_row, new_tag, render_track_schedule
from .schedule import EventGroup, Track, group, normalize
from .text_renderer import render_track_schedule_text

logger = logging.getLogger(__name__)

SCHEDULE_TITLE = "Event Schedule"


def _as_tracks(tracks: Iterable[Track] | Mapping[str, str]) -> list[Track]:
    if isinstance(tracks, Mapping):
        return [Track(name, url) for name, url in tracks.items()]
    return list(tracks)


class ScheduleBuilder:
    """Builds a multi-track schedule from iCalendar feeds.

    Tracks are fetched one after the other and always rendered in the
    order they were given. A failing feed aborts the whole run with
    :class:`~ical_schedule.errors.FetchError` or
    :class:`~ical_schedule.errors.ParseError`.

    :param tracks: Ordered :class:`~ical_schedule.schedule.Track` list, or
        an ordered mapping of track name to feed URL.
    :param timeout: HTTP timeout in seconds for each feed.

    Example usage::

        builder = ScheduleBuilder({
            "Primary Track": "https://example.com/primary.ics",
            "Secondary Track": "https://example.com/secondary.ics",
        })
        builder.write_html("schedule.html")
    """

    def __init__(
        self,
        tracks: Iterable[Track] | Mapping[str, str],
        timeout: float = 30,
    ) -> None:
        self.tracks = _as_tracks(tracks)
        self.timeout = timeout

    def _fetch_feed(self, url: str) -> str:
        """Fetch and return the iCalendar text of a feed.

        :param url: The feed URL.
        :returns: The calendar document.
        :raises FetchError: If the feed cannot be downloaded.
        """
        return fetch_feed(url, timeout=self.timeout)

    def events_for(self, track: Track) -> list[EventGroup]:
        """Fetch a track's feed and return its events grouped by date."""
        logger.info("Loading track %r", track.name)
        events = normalize(parse_feed(self._fetch_feed(track.url)))
        logger.debug("Track %r has %d events", track.name, len(events))
        return group(events)

    def build_html(self, sink: TextIO, pretty: bool = False) -> None:
        """Write the schedule as an embeddable HTML fragment.

        :param sink: Text stream receiving the markup.
        :param pretty: Indent the markup one element per line.
        """
        soup = BeautifulSoup("", "html.parser")
        section = new_tag("section", "section schedule", id="schedule")
        container = new_tag("div", "container")
        section.append(container)
        soup.append(section)

        add_title_row(container, SCHEDULE_TITLE)
        for track in self.tracks:
            groups = self.events_for(track)
            add_title_row(container, track.name)
            render_track_schedule(container, groups)

        if pretty:
            sink.write(soup.prettify(formatter="html"))
        else:
            sink.write(soup.decode(formatter="html"))

    def build_text(self, sink: TextIO) -> None:
        """Write the schedule as plain text, one section per track.

        :param sink: Text stream receiving the schedule.
        """
        for track in self.tracks:
            groups = self.events_for(track)
            sink.write(track.name + "\n\n")
            render_track_schedule_text(sink, groups)
            sink.write("\n")

    def get_html(self, pretty: bool = False) -> str:
        """Build the schedule and return it as an HTML string."""
        buf = io.StringIO()
        self.build_html(buf, pretty=pretty)
        return buf.getvalue()

    def get_text(self) -> str:
        """Build the schedule and return it as plain text."""
        buf = io.StringIO()
        self.build_text(buf)
        return buf.getvalue()

    def write_html(self, path: str | Path, pretty: bool = False) -> None:
        """Build the schedule and write the HTML to a file.

        :param path: Destination file path. Parent directories must exist.
        """
        Path(path).write_text(self.get_html(pretty=pretty), encoding="utf-8")

    def write_text(self, path: str | Path) -> None:
        """Build the schedule and write the plain text to a file.

        :param path: Destination file path. Parent directories must exist.
        """
        Path(path).write_text(self.get_text(), encoding="utf-8")
