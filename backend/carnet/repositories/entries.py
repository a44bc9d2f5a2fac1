"""Entry store: persistence and range queries for weekly entries.

Weekly entries are always loaded with their day records. Ownership is not
checked here; `carnet.services.entries` is the only place that does it.
"""

from datetime import date

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from carnet.core.errors import InvalidRequest
from carnet.core.time_utils import week_dates
from carnet.models.day_entry import DayEntry
from carnet.models.weekly_entry import WeeklyEntry


def _range_query(user_id: str, start: date, end: date):
    return (
        select(WeeklyEntry)
        .options(selectinload(WeeklyEntry.days))
        .where(
            WeeklyEntry.user_id == user_id,
            WeeklyEntry.start_date >= start,
            WeeklyEntry.end_date <= end,
        )
    )


def find_entries(db: Session, user_id: str, start: date, end: date) -> list[WeeklyEntry]:
    """Entries of `user_id` lying within [start, end], oldest first."""
    query = _range_query(user_id, start, end).order_by(WeeklyEntry.start_date)
    return list(db.execute(query).scalars().all())


def find_entry(db: Session, user_id: str, start: date, end: date) -> WeeklyEntry | None:
    return db.execute(_range_query(user_id, start, end).limit(1)).scalars().first()


def get_entry(db: Session, entry_id: str) -> WeeklyEntry | None:
    query = (
        select(WeeklyEntry)
        .options(selectinload(WeeklyEntry.days))
        .where(WeeklyEntry.id == entry_id)
    )
    return db.execute(query).scalars().first()


def create_entry(db: Session, user_id: str, start: date, end: date) -> WeeklyEntry:
    """Create an entry and its seven empty day records in one commit.

    Raises sqlalchemy.exc.IntegrityError if the user already has this week.
    """
    entry = WeeklyEntry(
        user_id=user_id,
        start_date=start,
        end_date=end,
        days=[DayEntry(date=d, exercises={}) for d in week_dates(start)],
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.debug(f"Created entry {entry.id} for {start}..{end}")
    return entry


def upsert_entry_fields(
    db: Session,
    entry: WeeklyEntry,
    fields: dict[str, str | None],
    day_upserts: list[tuple[date, dict[str, bool]]],
) -> WeeklyEntry:
    """Apply text fields and day updates to `entry`.

    `fields` maps ORM attribute names to values (None is stored as "").
    Days are matched to stored rows by date; a date with no stored row is
    created. Dates outside the entry's week raise InvalidRequest.
    """
    for day_date, _ in day_upserts:
        if not entry.start_date <= day_date <= entry.end_date:
            raise InvalidRequest(f"Day {day_date.isoformat()} is outside this week")

    for column, value in fields.items():
        setattr(entry, column, value or "")

    by_date = {day.date: day for day in entry.days}
    for day_date, exercises in day_upserts:
        existing = by_date.get(day_date)
        if existing is None:
            existing = DayEntry(date=day_date, exercises=dict(exercises))
            entry.days.append(existing)
            by_date[day_date] = existing
        else:
            # Assign a new dict so the JSON column is flagged as changed
            existing.exercises = dict(exercises)

    db.commit()
    db.refresh(entry)
    return entry
