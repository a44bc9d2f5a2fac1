"""Entry service: identity-scoped operations on weekly entries.

Every function takes the caller's user id, injected per request by the API
layer, and is the only place ownership of an entry is enforced.
"""

from datetime import date, timedelta

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carnet.core.constants import DAYS_IN_WEEK, TEXT_FIELD_COLUMNS
from carnet.core.errors import DuplicateWeek, Forbidden, InvalidRequest, NotFound, Unauthenticated
from carnet.models.weekly_entry import WeeklyEntry
from carnet.repositories import entries as store
from carnet.schemas.entry import WeeklyEntryRead, WeeklyEntryUpdate


def format_entry(entry: WeeklyEntry) -> WeeklyEntryRead:
    """Storage shape -> transport shape (blank strings, days by date)."""
    return WeeklyEntryRead.model_validate(entry)


def _require_caller(caller_id: str | None) -> str:
    if not caller_id:
        raise Unauthenticated()
    return caller_id


def _load_owned(db: Session, caller_id: str, entry_id: str) -> WeeklyEntry:
    entry = store.get_entry(db, entry_id)
    if entry is None:
        raise NotFound()
    if entry.user_id != caller_id:
        logger.warning(f"User {caller_id} denied access to entry {entry_id}")
        raise Forbidden()
    return entry


def list_entries(db: Session, caller_id: str | None, start: date, end: date) -> list[WeeklyEntryRead]:
    caller_id = _require_caller(caller_id)
    return [format_entry(e) for e in store.find_entries(db, caller_id, start, end)]


def create_week(db: Session, caller_id: str | None, start: date, end: date) -> WeeklyEntryRead:
    """Start a new week for the caller.

    Raises InvalidRequest unless the range spans exactly seven days, and
    DuplicateWeek if the caller already has an entry in it.
    """
    caller_id = _require_caller(caller_id)
    if end - start != timedelta(days=DAYS_IN_WEEK - 1):
        raise InvalidRequest("A week must span exactly 7 days")

    if store.find_entry(db, caller_id, start, end) is not None:
        raise DuplicateWeek()

    try:
        entry = store.create_entry(db, caller_id, start, end)
    except IntegrityError as e:
        # Lost a race with a concurrent create for the same week
        db.rollback()
        raise DuplicateWeek() from e

    logger.info(f"User {caller_id} started week {start}..{end} ({entry.id})")
    return format_entry(entry)


def get_week(db: Session, caller_id: str | None, entry_id: str) -> WeeklyEntryRead:
    caller_id = _require_caller(caller_id)
    return format_entry(_load_owned(db, caller_id, entry_id))


def update_week(
    db: Session, caller_id: str | None, entry_id: str, patch: WeeklyEntryUpdate
) -> WeeklyEntryRead:
    """Apply `patch` to an entry the caller owns.

    Only fields present in the request are written; omitting `days` leaves
    the day records untouched.
    """
    caller_id = _require_caller(caller_id)
    entry = _load_owned(db, caller_id, entry_id)

    sent = patch.model_fields_set
    fields = {
        column: getattr(patch, column)
        for column in TEXT_FIELD_COLUMNS.values()
        if column in sent
    }
    day_upserts = []
    if "days" in sent and patch.days is not None:
        day_upserts = [(day.date, day.exercises) for day in patch.days]

    entry = store.upsert_entry_fields(db, entry, fields, day_upserts)
    logger.info(f"User {caller_id} saved entry {entry_id}")
    return format_entry(entry)
