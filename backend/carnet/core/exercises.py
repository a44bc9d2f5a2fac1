"""Exercise catalog.

The catalog is static metadata, never persisted. Each exercise is either
available every day or only on one weekday (0 = Monday, 6 = Sunday). Stored
day records may carry keys that are no longer in the catalog; readers ignore
them rather than reject them.
"""

from dataclasses import dataclass
from typing import Optional

from carnet.core.config import settings
from carnet.core.constants import DAY_LABELS


@dataclass(frozen=True)
class Exercise:
    id: str
    label: str
    # None means every day
    available_day: Optional[int] = None

    @property
    def every_day(self) -> bool:
        return self.available_day is None

    def is_available(self, day_index: int) -> bool:
        if self.available_day is None:
            return True
        return self.available_day == day_index

    @property
    def restriction_note(self) -> str | None:
        """Short note shown next to day-restricted exercises, e.g. 'mardi uniquement'."""
        if self.available_day is None:
            return None
        return f"{DAY_LABELS[self.available_day]} uniquement"


def build_catalog(wakeup_weekday: int = 6) -> tuple[Exercise, ...]:
    return (
        Exercise("morningPrayer", "Prière matinale"),
        Exercise("mass", "Messe"),
        Exercise("rosary", "Chapelet"),
        Exercise("lectio", "Lectio"),
        Exercise("fasting", "Jeûne"),
        Exercise("eveningPrayer", "Prière du soir"),
        Exercise("tuesdayPrayer", "Prière mardi 21h45", available_day=1),
        Exercise("fridayPrayer", "Prière vendredi 21h45", available_day=4),
        Exercise("wakeupSpace", "Espace du réveil", available_day=wakeup_weekday),
    )


EXERCISES = build_catalog(settings.wakeup_weekday)


def get_exercise(exercise_id: str, catalog=EXERCISES) -> Exercise | None:
    for exercise in catalog:
        if exercise.id == exercise_id:
            return exercise
    return None


def is_exercise_available(exercise_id: str, day_index: int, catalog=EXERCISES) -> bool:
    """Unknown exercises are never available."""
    exercise = get_exercise(exercise_id, catalog)
    if exercise is None:
        return False
    return exercise.is_available(day_index)
