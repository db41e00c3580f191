"""Tests for the ical-schedule command line."""

import argparse
from pathlib import Path
from unittest.mock import patch

import pytest

from ical_schedule import FetchError, ScheduleBuilder, Track
from ical_schedule.cli import load_tracks, main, parse_track

FIXTURES = Path(__file__).parent / "fixtures"
TRACK_A = (FIXTURES / "track_a.ics").read_text(encoding="utf-8")


@pytest.fixture()
def feeds():
    """Serve every feed URL from the Track A fixture."""
    with patch.object(ScheduleBuilder, "_fetch_feed", return_value=TRACK_A) as fetch:
        yield fetch


def test_parse_track():
    assert parse_track("Track A=https://example.com/a.ics?x=1") == Track(
        "Track A", "https://example.com/a.ics?x=1"
    )


@pytest.mark.parametrize("value", ["Track A", "=https://example.com", "Track A="])
def test_parse_track_rejects_bad_values(value):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_track(value)


def test_load_tracks_keeps_order(tmp_path):
    config = tmp_path / "tracks.toml"
    config.write_text(
        "[tracks]\n"
        '"Secondary Track" = "https://example.com/b.ics"\n'
        '"Primary Track" = "https://example.com/a.ics"\n',
        encoding="utf-8",
    )
    assert load_tracks(config) == [
        Track("Secondary Track", "https://example.com/b.ics"),
        Track("Primary Track", "https://example.com/a.ics"),
    ]


def test_text_output(feeds, capsys):
    assert main(["--text", "--track", "Track A=https://example.com/a.ics"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Track A\n\nFriday May 3, 2024\n")
    feeds.assert_called_once_with("https://example.com/a.ics")


def test_html_output_to_file(feeds, tmp_path):
    target = tmp_path / "schedule.html"
    assert main(["-t", "Track A=https://example.com/a.ics", "-o", str(target)]) == 0
    html = target.read_text(encoding="utf-8")
    assert html.startswith('<section id="schedule" class="section schedule">')
    assert "Friday May 3, 2024" in html


def test_config_tracks_come_first(feeds, tmp_path, capsys):
    config = tmp_path / "tracks.toml"
    config.write_text('[tracks]\n"From Config" = "https://example.com/c.ics"\n')
    main(["--text", "-c", str(config), "-t", "From Flag=https://example.com/f.ics"])
    out = capsys.readouterr().out
    assert out.index("From Config") < out.index("From Flag")
    assert [c.args[0] for c in feeds.call_args_list] == [
        "https://example.com/c.ics",
        "https://example.com/f.ics",
    ]


def test_no_tracks_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
    assert "no tracks configured" in capsys.readouterr().err


def test_missing_config_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["-c", str(tmp_path / "missing.toml")])
    assert exc_info.value.code == 2


def test_fetch_error_exit_status(capsys):
    with patch.object(
        ScheduleBuilder, "_fetch_feed", side_effect=FetchError("host unreachable")
    ):
        assert main(["-t", "Track A=https://example.com/a.ics"]) == 1
    captured = capsys.readouterr()
    assert captured.err == "error: host unreachable\n"
    assert captured.out == ""


def test_malformed_feed_exit_status(capsys):
    bad_feed = (
        "BEGIN:VCALENDAR\nVERSION:2.0\nPRODID:-//Test//EN\n"
        "BEGIN:VEVENT\nUID:bad@example.com\nDTSTART:notadate\nEND:VEVENT\n"
        "END:VCALENDAR\n"
    )
    with patch.object(ScheduleBuilder, "_fetch_feed", return_value=bad_feed):
        assert main(["--text", "-t", "Track A=https://example.com/a.ics"]) == 1
    assert capsys.readouterr().err.startswith("error: ")
