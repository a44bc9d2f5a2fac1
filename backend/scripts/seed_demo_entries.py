from datetime import date, timedelta
import random
import sys

from carnet.db import Base, SessionLocal, engine
from carnet.core.exercises import EXERCISES
from carnet.core.time_utils import monday_of
from carnet.models.day_entry import DayEntry  # noqa: F401
from carnet.models.weekly_entry import WeeklyEntry
from carnet.repositories import entries as store


def clear_recent_entries(db, user_id: str, weeks: int = 6) -> None:
    """Delete the user's entries of the last N weeks so we can reseed cleanly."""
    cutoff = monday_of(date.today()) - timedelta(weeks=weeks)
    rows = (
        db.query(WeeklyEntry)
        .filter(WeeklyEntry.user_id == user_id)
        .filter(WeeklyEntry.start_date >= cutoff)
        .all()
    )
    for row in rows:
        db.delete(row)
    db.commit()


def seed_demo_entries(db, user_id: str, weeks: int = 6) -> None:
    """Create N weeks ending with the current one, ticking ~70% of available exercises."""
    this_monday = monday_of(date.today())
    today = date.today()

    for i in range(weeks):
        start = this_monday - timedelta(weeks=weeks - 1 - i)
        entry = store.create_entry(db, user_id, start, start + timedelta(days=6))

        upserts = []
        for idx, day in enumerate(entry.days):
            # Skip future days
            if day.date > today:
                continue
            done = {
                ex.id: random.random() < 0.7
                for ex in EXERCISES
                if ex.is_available(idx)
            }
            upserts.append((day.date, done))

        store.upsert_entry_fields(
            db,
            entry,
            {"comments": f"Semaine {i + 1}", "successes": "Fidèle à la prière du matin."},
            upserts,
        )

    print(f"Seeded {weeks} demo weeks for {user_id}")


def main():
    user_id = sys.argv[1] if len(sys.argv) > 1 else "demo-user"
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_recent_entries(db, user_id, weeks=6)
        seed_demo_entries(db, user_id, weeks=6)
    finally:
        db.close()


if __name__ == "__main__":
    main()
