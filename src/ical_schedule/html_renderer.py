"""HTML rendering of a track schedule.

Markup is built as a BeautifulSoup tree. The class names used here
(``row``, ``col-md-12``, ``section-title``, ``schedule-box``,
``panel-body``, ``time``) are what the site stylesheet targets.

Serialize the finished tree with ``formatter="html"`` so that the
non-breaking spaces come out as ``&nbsp;``.
"""

from __future__ import annotations

import textwrap
from datetime import datetime
from typing import Sequence

from bs4 import BeautifulSoup, Tag

from .schedule import EventGroup, NormalizedEvent, display_time, full_date

NBSP = "\xa0"
TITLE_WIDTH = 20
TITLE_BREAKS = 5
"""Every event title is padded to this many line breaks."""

_soup = BeautifulSoup("", "html.parser")


def new_tag(name: str, css_class: str | None = None, **attrs) -> Tag:
    """Create a detached tag, optionally with a ``class`` attribute."""
    if css_class is not None:
        attrs["class"] = css_class
    return _soup.new_tag(name, attrs=attrs)


def add_title_row(sink: Tag, title: str) -> None:
    """Append a full width ``section-title`` row to *sink*."""
    heading = new_tag("h3", "section-title")
    heading.string = title
    column = new_tag("div", "col-md-12")
    column.append(heading)
    row = new_tag("div", "row")
    row.append(column)
    sink.append(row)


def wrap_title(text: str, width: int = TITLE_WIDTH) -> list[str]:
    """Word wrap *text* into lines of at most *width* characters.

    Lines only break at whitespace; a word longer than *width* is kept
    whole. Existing newlines are kept and lines already short enough are
    left untouched.
    """
    lines: list[str] = []
    for line in text.split("\n"):
        if len(line) > width:
            wrapped = textwrap.wrap(
                line,
                width=width,
                expand_tabs=False,
                break_long_words=False,
                break_on_hyphens=False,
            )
            lines.extend(part.rstrip() for part in wrapped or [""])
        else:
            lines.append(line)
    return lines


def _time_element(dt: datetime) -> Tag:
    element = new_tag("time", datetime=dt.isoformat())
    element.string = display_time(dt)
    return element


def _title_element(summary: str) -> Tag:
    heading = new_tag("h3")
    lines = wrap_title(summary)
    for i, line in enumerate(lines):
        if i:
            heading.append(new_tag("br"))
        if line:
            heading.append(line)
    # Pad short titles so all boxes in a row have the same height
    for _ in range(TITLE_BREAKS - (len(lines) - 1)):
        heading.append(NBSP)
        heading.append(new_tag("br"))
    return heading


def event_box(event: NormalizedEvent) -> Tag:
    """Build the ``schedule-box`` column for one event."""
    times = new_tag("div", "time")
    times.append(_time_element(event.start))
    times.append(f"{NBSP}-{NBSP}\n")
    times.append(_time_element(event.end))

    presenter = new_tag("p")
    presenter.string = event.presenter.strip() if event.has_presenter else NBSP

    body = new_tag("div", "panel-body")
    body.append(times)
    body.append(_title_element(event.summary))
    body.append(presenter)

    box = new_tag("div", "schedule-box")
    box.append(body)
    column = new_tag("div", "col-md-4 col-sm-6")
    column.append(box)
    return column


def render_track_schedule(sink: Tag, groups: Sequence[EventGroup]) -> None:
    """Append the rows for one track's date groups to *sink*.

    Each date gets a title row, a row of event boxes and then an empty
    title row. The event location is not shown.
    """
    for event_group in groups:
        add_title_row(sink, full_date(event_group.date))
        row = new_tag("div", "row")
        for event in event_group.events:
            row.append(event_box(event))
        sink.append(row)
        add_title_row(sink, "")
