import logging
import math
import re
from datetime import UTC, datetime
from dateutil.parser import ParserError, isoparse
from dateutil.parser import parse as parse_date

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}')


def parse_csv_fields(line: str) -> list[str]:
    """
    Split one delimited line into fields.

    A double quote toggles quoting and is dropped; commas inside quotes are
    kept. Doubled quotes are not an escape, so '""' simply disappears. The
    field after the last comma is always emitted, even when empty.
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)

    fields.append(''.join(current))
    return fields


def escape_csv_field(value: str | None) -> str:
    """Quote a field (doubling inner quotes) only when it holds a comma, quote or line break"""
    if not value:
        return ''

    if any(char in value for char in (',', '"', '\n', '\r')):
        return '"' + value.replace('"', '""') + '"'

    return value


def parse_coordinate(value) -> float | None:
    """Parse a latitude/longitude independent of locale; None when it is not a finite number"""
    if isinstance(value, bool) or value is None:
        return None

    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None

    return number if math.isfinite(number) else None


def parse_visit_date(value) -> datetime | None:
    """
    Parse a visit date, returning None when it is blank or cannot be read.

    Timezone-aware values are converted to UTC and stored naive.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = parse_date(value.strip())
        except (ParserError, ValueError, OverflowError) as e:
            logger.debug(f"Unreadable date '{value}': {e}")
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)

    return parsed


def parse_iso_date(value) -> datetime | None:
    """
    Strict variant of parse_visit_date for JSON uploads.

    Only ISO 8601 values starting with a full yyyy-MM-dd date are accepted, so
    partial input such as "7" or "2024" is rejected instead of being completed
    with today's day or month.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and ISO_DATE_PATTERN.match(value.strip()):
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError) as e:
            logger.debug(f"Unreadable ISO date '{value}': {e}")
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)

    return parsed
