"""Weekly tracker: a local draft of one weekly entry.

Checkbox and text edits only touch the draft; `save()` sends the whole draft
to the API and hands control back to the owner to reload from the server.
"""

import copy
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from carnet.client.api import EntriesApiError, EntriesClient
from carnet.core.constants import DAY_LABELS, DAYS_IN_WEEK, TEXT_FIELDS
from carnet.core.exercises import EXERCISES, Exercise, is_exercise_available
from carnet.core.time_utils import index_in_week, parse_day


class TrackerState(str, Enum):
    VIEWING = "viewing"
    SAVING = "saving"


@dataclass
class ExerciseCell:
    exercise_id: str
    label: str
    day_index: int
    checked: bool
    disabled: bool


@dataclass
class ExerciseRow:
    exercise_id: str
    label: str
    note: Optional[str]
    cells: list[ExerciseCell]


class WeeklyTracker:
    def __init__(
        self,
        entry: dict,
        api: EntriesClient,
        on_update: Optional[Callable[[], None]] = None,
        catalog: tuple[Exercise, ...] = EXERCISES,
        today: Optional[date] = None,
    ):
        self.draft = copy.deepcopy(entry)
        self.api = api
        self.on_update = on_update
        self.catalog = catalog
        self.state = TrackerState.VIEWING
        self.last_error: Optional[str] = None
        self.weekly_mode = False
        self.selected_day = self._today_index(today or date.today())

    def _today_index(self, today: date) -> int:
        start = self.draft.get("startDate")
        if start is not None:
            idx = index_in_week(today, parse_day(start))
            if 0 <= idx < DAYS_IN_WEEK:
                return idx
        return today.weekday()

    # --- draft access -------------------------------------------------

    @property
    def days(self) -> list[dict]:
        return self.draft.setdefault("days", [])

    def _date_of(self, index: int) -> date:
        return parse_day(self.draft["startDate"]) + timedelta(days=index)

    def _find_day(self, index: int) -> Optional[dict]:
        """Draft day for `index`, matched by date like the server does."""
        target = self._date_of(index)
        for day in self.days:
            if parse_day(day["date"]) == target:
                return day
        return None

    def _day(self, index: int) -> dict:
        """Day for `index`, created on demand."""
        if not 0 <= index < DAYS_IN_WEEK:
            raise IndexError(f"day index out of range: {index}")
        day = self._find_day(index)
        if day is None:
            day = {"date": self._date_of(index), "exercises": {}}
            self.days.append(day)
            self.days.sort(key=lambda d: parse_day(d["date"]))
        return day

    def is_available(self, day_index: int, exercise_id: str) -> bool:
        return is_exercise_available(exercise_id, day_index, self.catalog)

    def is_checked(self, day_index: int, exercise_id: str) -> bool:
        if not 0 <= day_index < DAYS_IN_WEEK:
            return False
        day = self._find_day(day_index)
        if day is None:
            return False
        exercises = day.get("exercises") or {}
        return bool(exercises.get(exercise_id, False))

    def toggle(self, day_index: int, exercise_id: str, checked: bool) -> bool:
        """Set a checkbox in the draft. Disabled cells are inert (returns False)."""
        if not 0 <= day_index < DAYS_IN_WEEK:
            raise IndexError(f"day index out of range: {day_index}")
        if not self.is_available(day_index, exercise_id):
            return False
        day = self._day(day_index)
        day["exercises"] = {**(day.get("exercises") or {}), exercise_id: checked}
        return True

    def set_text(self, field: str, value: str) -> None:
        if field not in TEXT_FIELDS:
            raise ValueError(f"Unknown reflection field: {field}")
        self.draft[field] = value

    def text(self, field: str) -> str:
        return self.draft.get(field) or ""

    # --- views --------------------------------------------------------

    def select_day(self, index: int) -> None:
        if not 0 <= index < DAYS_IN_WEEK:
            raise IndexError(f"day index out of range: {index}")
        self.selected_day = index

    def toggle_view(self) -> None:
        self.weekly_mode = not self.weekly_mode

    def _cell(self, exercise: Exercise, index: int) -> ExerciseCell:
        return ExerciseCell(
            exercise_id=exercise.id,
            label=exercise.label,
            day_index=index,
            checked=self.is_checked(index, exercise.id),
            disabled=not exercise.is_available(index),
        )

    def daily_view(self, index: Optional[int] = None) -> list[ExerciseCell]:
        index = self.selected_day if index is None else index
        return [self._cell(exercise, index) for exercise in self.catalog]

    def weekly_view(self) -> list[ExerciseRow]:
        return [
            ExerciseRow(
                exercise_id=exercise.id,
                label=exercise.label,
                note=exercise.restriction_note,
                cells=[self._cell(exercise, i) for i in range(DAYS_IN_WEEK)],
            )
            for exercise in self.catalog
        ]

    @property
    def day_label(self) -> str:
        return DAY_LABELS[self.selected_day]

    # --- save ---------------------------------------------------------

    @property
    def can_save(self) -> bool:
        return self.state is TrackerState.VIEWING

    def save(self) -> bool:
        """Send the draft. On failure the draft is kept so the user can retry."""
        if not self.can_save:
            return False

        self.state = TrackerState.SAVING
        try:
            saved = self.api.update_entry(self.draft["id"], self.draft)
            self.last_error = None
            # The server's copy replaces the draft
            if self.on_update is not None:
                self.on_update()
            else:
                self.draft = copy.deepcopy(saved)
            return True
        except EntriesApiError as e:
            self.last_error = str(e)
            logger.warning(f"Could not save entry {self.draft.get('id')}: {e}")
            return False
        finally:
            self.state = TrackerState.VIEWING
