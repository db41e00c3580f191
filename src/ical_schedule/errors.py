"""Exceptions raised while building a schedule."""


class ScheduleError(Exception):
    """Base class for errors that abort a schedule run."""


class FetchError(ScheduleError):
    """Raised when a calendar feed cannot be downloaded."""


class ParseError(ScheduleError):
    """Raised when a downloaded feed is not a valid iCalendar document."""
