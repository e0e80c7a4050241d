import re
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

DATE_TOKEN = re.compile(r"D\(([^)]+)\)")
TIME_12H_TOKEN = re.compile(r"T12\(([^)]+)\)")
TIME_24H_TOKEN = re.compile(r"T24\(([^)]+)\)")

# Tried in order; the first grammar that matches wins.
OFFSET_TIMESTAMP = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
    r"(?P<sign>[+-])(?P<offset_hour>[0-9]{2}):(?P<offset_minute>[0-9]{2})"
)
ZULU_TIMESTAMP = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})Z"
)
TIMESTAMP_GRAMMARS = (OFFSET_TIMESTAMP, ZULU_TIMESTAMP)

DATE_FORMAT = "%d %b %Y"
TIME_12H_FORMAT = "%I:%M%p"
TIME_24H_FORMAT = "%H:%M"

LINE_BREAK_ESCAPES = ("\\v", "\\f", "\\r")
THREE_OR_MORE_NEWLINES = re.compile(r"\n{3,}")
TWO_OR_MORE_NEWLINES = re.compile(r"\n{2,}")


def _zone_from_match(match: re.Match) -> Optional[timezone]:
    if "sign" not in match.groupdict():
        return timezone.utc

    hours = int(match.group("offset_hour"))
    minutes = int(match.group("offset_minute"))
    if hours > 23 or minutes > 59:
        return None

    offset = timedelta(hours=hours, minutes=minutes)
    return timezone(-offset if match.group("sign") == "-" else offset)


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parses 'YYYY-MM-DDThh:mm+hh:mm' or 'YYYY-MM-DDThh:mmZ'.
    Returns None if the value fits neither grammar or is not a real date.
    """
    for grammar in TIMESTAMP_GRAMMARS:
        match = grammar.fullmatch(value)
        if match is None:
            continue

        zone = _zone_from_match(match)
        if zone is None:
            return None
        try:
            return datetime(
                int(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
                int(match.group("hour")),
                int(match.group("minute")),
                tzinfo=zone,
            )
        except ValueError:
            return None
    return None


def format_offset(moment: datetime) -> str:
    """Renders the UTC offset as '(+hh:mm)'. A zero offset is always '+00:00'."""
    total_minutes = int(moment.utcoffset().total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"({sign}{hours:02d}:{minutes:02d})"


def format_date(moment: datetime) -> str:
    return moment.strftime(DATE_FORMAT)


def format_time_12h(moment: datetime) -> str:
    return f"{moment.strftime(TIME_12H_FORMAT)} {format_offset(moment)}"


def format_time_24h(moment: datetime) -> str:
    return f"{moment.strftime(TIME_24H_FORMAT)} {format_offset(moment)}"


def _replace_tokens(text: str, pattern: re.Pattern, render) -> str:
    def replace(match: re.Match) -> str:
        moment = parse_timestamp(match.group(1))
        if moment is None:
            return match.group(0)
        return render(moment)

    return pattern.sub(replace, text)


def replace_airport_codes(text: str, lookup: Mapping[str, str]) -> str:
    """
    Replaces every '#IATA' / '##ICAO' token in the text with the airport name.

    Tokens are matched as literal substrings in a single left-to-right scan,
    longest token first at each position, so '##KLAX' is never split into
    '#' + '#KLA' + 'X' and a substituted name is never scanned again.

    Args:
        text: The raw itinerary text.
        lookup: Mapping from prefixed code to airport name.

    Returns:
        The text with all known codes replaced.
    """
    if not lookup:
        return text

    tokens = sorted(lookup, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(token) for token in tokens))
    return pattern.sub(lambda match: lookup[match.group(0)], text)


def replace_dates(text: str) -> str:
    """D(2024-03-05T10:00Z) -> 05 Mar 2024"""
    return _replace_tokens(text, DATE_TOKEN, format_date)


def replace_12h_times(text: str) -> str:
    """T12(2024-03-05T15:04-07:00) -> 03:04PM (-07:00)"""
    return _replace_tokens(text, TIME_12H_TOKEN, format_time_12h)


def replace_24h_times(text: str) -> str:
    """T24(2024-03-05T15:04-07:00) -> 15:04 (-07:00)"""
    return _replace_tokens(text, TIME_24H_TOKEN, format_time_24h)


def remove_extra_newlines(text: str) -> str:
    """Collapses any run of two or more newlines to exactly two."""
    return TWO_OR_MORE_NEWLINES.sub("\n\n", text)


def normalize_line_breaks(text: str) -> str:
    """
    Turns the literal escapes '\\v', '\\f' and '\\r' into real newlines and
    leaves at most one blank line between paragraphs.
    """
    for escape in LINE_BREAK_ESCAPES:
        text = text.replace(escape, "\n")
    text = THREE_OR_MORE_NEWLINES.sub("\n\n", text)

    # No-op after the 3+ collapse above, kept so the 2+ rule is always applied.
    return remove_extra_newlines(text)


def process_text(text: str, lookup: Mapping[str, str]) -> str:
    """
    Runs the full itinerary rewrite.

    Args:
        text: The raw itinerary text.
        lookup: Mapping from prefixed airport code to airport name.

    Returns:
        The prettified itinerary. Date and time tokens that cannot be parsed
        are left exactly as written.
    """
    text = replace_airport_codes(text, lookup)
    text = replace_dates(text)
    text = replace_12h_times(text)
    text = replace_24h_times(text)
    return normalize_line_breaks(text)
