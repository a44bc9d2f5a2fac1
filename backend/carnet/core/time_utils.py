from datetime import date, datetime, time, timedelta, timezone

from carnet.core.constants import DAYS_IN_WEEK


def monday_of(d: date) -> date:
    # Monday = 0, Sunday = 6
    return d - timedelta(days=d.weekday())


def week_range(d: date) -> tuple[date, date]:
    """Return the Monday..Sunday range (inclusive) containing `d`."""
    start = monday_of(d)
    return start, start + timedelta(days=DAYS_IN_WEEK - 1)


def week_dates(start: date) -> list[date]:
    """The seven calendar dates of a week starting at `start`."""
    return [start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]


def _nearest_midnight(dt: datetime) -> date:
    """Calendar date of the midnight closest to `dt` (UTC for aware values)."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    d = dt.date()
    if dt.time() >= time(12):
        d += timedelta(days=1)
    return d


def parse_day(value, end_of_range: bool = False) -> date:
    """Parse a calendar date.

    Accepts `date`, `datetime`, 'YYYY-MM-DD', or a full ISO-8601 datetime
    string such as '2024-02-11T23:00:00.000Z'. Browsers send local
    midnights converted to UTC, so datetimes are rounded to the nearest
    midnight, which holds for offsets up to 12 hours. With `end_of_range`
    the value is a local end of day (23:59:59.999) and the date before the
    following midnight is returned. Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        s = value.strip()
        if len(s) == 10:
            return date.fromisoformat(s)
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        dt = datetime.fromisoformat(s)
    else:
        raise ValueError(f"Invalid date: {value!r}")

    if end_of_range:
        return _nearest_midnight(dt + timedelta(milliseconds=1)) - timedelta(days=1)
    return _nearest_midnight(dt)


def to_iso(value) -> str:
    """Serialize a date or datetime to ISO-8601; strings pass through."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def index_in_week(d: date, week_start: date) -> int:
    """Index of `d` within the week starting at `week_start` (0..6)."""
    return (d - week_start).days
