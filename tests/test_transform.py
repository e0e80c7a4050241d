"""Tests for the itinerary text transformer."""

from datetime import timedelta

import pytest

from itinerary.transform import (
    normalize_line_breaks,
    parse_timestamp,
    process_text,
    remove_extra_newlines,
    replace_12h_times,
    replace_24h_times,
    replace_airport_codes,
    replace_dates,
)


def test_replace_airport_codes_simple():
    """Test a plain IATA substitution."""
    assert replace_airport_codes("Fly from #LAX", {"#LAX": "Los Angeles"}) == "Fly from Los Angeles"


def test_replace_airport_codes_icao_not_split_by_iata():
    """Test that '##KLAX' is not eaten by a shorter '#KLA' token."""
    lookup = {"#KLA": "Kampala", "##KLAX": "Los Angeles Intl"}

    assert replace_airport_codes("##KLAX and #KLA", lookup) == "Los Angeles Intl and Kampala"


def test_replace_airport_codes_not_recursive():
    """Test that a name containing a token is not substituted again."""
    lookup = {"#AAA": "see #BBB", "#BBB": "Bravo"}

    assert replace_airport_codes("#AAA", lookup) == "see #BBB"


def test_replace_airport_codes_is_substring_based():
    """Test that tokens match inside words."""
    assert replace_airport_codes("x#LAXy", {"#LAX": "LA"}) == "xLAy"


def test_replace_airport_codes_empty_lookup():
    assert replace_airport_codes("#LAX", {}) == "#LAX"


def test_replace_airport_codes_escapes_tokens():
    """Test that tokens are literal text, not patterns."""
    assert replace_airport_codes("#A.C #ABC", {"#A.C": "Dot"}) == "Dot #ABC"


def test_parse_timestamp_offset():
    moment = parse_timestamp("2024-03-05T15:04-07:00")

    assert (moment.year, moment.month, moment.day, moment.hour, moment.minute) == (2024, 3, 5, 15, 4)
    assert moment.utcoffset() == timedelta(hours=-7)


def test_parse_timestamp_zulu():
    assert parse_timestamp("2024-03-05T15:04Z").utcoffset() == timedelta(0)


@pytest.mark.parametrize("value", [
    "not-a-date",
    "2024-03-05T15:04:00Z",
    "2024-03-05T15:04:00-07:00",
    "2024-03-05T15:04",
    "2024-03-05T15:04-0700",
    "2024-3-5T15:04Z",
    "2024-03-05 15:04Z",
    "2024-03-05T15:04z",
    "2024-02-30T10:00Z",
    "2024-03-05T24:00Z",
    "2024-03-05T15:04+24:00",
    "2024-03-05T9:04Z",
    "2024-03-05T15:04+05:60",
])
def test_parse_timestamp_rejects(value):
    """Test that only the two exact grammars are accepted."""
    assert parse_timestamp(value) is None


def test_replace_dates():
    assert replace_dates("D(2024-03-05T10:00Z)") == "05 Mar 2024"
    assert replace_dates("on D(2024-06-01T09:00-07:00).") == "on 01 Jun 2024."


def test_replace_dates_leaves_bad_tokens():
    """Test that unparseable tokens stay exactly as written."""
    assert replace_dates("D(not-a-date)") == "D(not-a-date)"
    assert replace_dates("D()") == "D()"


def test_replace_12h_times():
    assert replace_12h_times("T12(2024-03-05T15:04-07:00)") == "03:04PM (-07:00)"
    assert replace_12h_times("T12(2024-03-05T00:30Z)") == "12:30AM (+00:00)"
    assert replace_12h_times("T12(2024-03-05T09:15+05:30)") == "09:15AM (+05:30)"


def test_replace_24h_times():
    assert replace_24h_times("T24(2024-03-05T15:04Z)") == "15:04 (+00:00)"
    assert replace_24h_times("T24(2024-03-05T07:45-03:30)") == "07:45 (-03:30)"


def test_negative_zero_offset_renders_positive():
    assert replace_24h_times("T24(2024-03-05T15:04-00:00)") == "15:04 (+00:00)"


def test_time_tokens_leave_bad_tokens():
    assert replace_12h_times("T12(tomorrow)") == "T12(tomorrow)"
    assert replace_24h_times("T24(2024-03-05T15:04:59Z)") == "T24(2024-03-05T15:04:59Z)"


def test_multiple_tokens_on_one_line():
    text = "D(2024-01-02T03:04Z) to D(2024-12-31T23:59+01:00)"

    assert replace_dates(text) == "02 Jan 2024 to 31 Dec 2024"


def test_normalize_line_breaks_escapes():
    """Test that the literal two-character escapes become newlines."""
    assert normalize_line_breaks("a\\rb") == "a\nb"
    assert normalize_line_breaks("a\\vb\\fc") == "a\nb\nc"


def test_normalize_line_breaks_ignores_real_control_characters():
    assert normalize_line_breaks("a\rb") == "a\rb"


def test_normalize_line_breaks_collapses():
    assert normalize_line_breaks("a\n\n\n\n\nb") == "a\n\nb"
    assert normalize_line_breaks("a\nb") == "a\nb"
    assert normalize_line_breaks("a\n\nb") == "a\n\nb"


def test_normalize_line_breaks_escapes_then_collapse():
    assert normalize_line_breaks("a\\r\\r\\r\\rb") == "a\n\nb"


def test_remove_extra_newlines():
    assert remove_extra_newlines("a\n\n\n\nb\n\nc\nd") == "a\n\nb\n\nc\nd"


def test_process_text_end_to_end():
    lookup = {"#LAX": "Los Angeles Intl", "##KLAX": "Los Angeles Intl"}
    text = "Depart #LAX on D(2024-06-01T09:00-07:00) at T24(2024-06-01T09:00-07:00)\\v\\v\\vEnd"

    assert process_text(text, lookup) == "Depart Los Angeles Intl on 01 Jun 2024 at 09:00 (-07:00)\n\nEnd"


def test_process_text_order():
    """Test that codes are replaced before date tokens are scanned."""
    lookup = {"#XYZ": "D(2024-03-05T10:00Z)"}

    assert process_text("#XYZ", lookup) == "05 Mar 2024"
