"""Dashboard: week navigation and entry loading.

Holds the current date, derives the Monday..Sunday week from it and binds a
WeeklyTracker to the week's entry. Nothing is cached across weeks; every
navigation re-fetches.
"""

from datetime import date, timedelta
from typing import Optional

from loguru import logger

from carnet.client.api import EntriesApiError, EntriesClient
from carnet.core.exercises import EXERCISES, Exercise
from carnet.core.time_utils import week_range
from carnet.ui.tracker import WeeklyTracker


class Dashboard:
    def __init__(
        self,
        api: EntriesClient,
        today: Optional[date] = None,
        catalog: tuple[Exercise, ...] = EXERCISES,
    ):
        self.api = api
        self.catalog = catalog
        self.current_date = today or date.today()
        self.entries: list[dict] = []
        self.tracker: Optional[WeeklyTracker] = None
        self.loaded = False
        self.last_error: Optional[str] = None

    @property
    def week_start(self) -> date:
        return week_range(self.current_date)[0]

    @property
    def week_end(self) -> date:
        return week_range(self.current_date)[1]

    @property
    def week_label(self) -> str:
        return f"Semaine du {self.week_start:%d/%m} au {self.week_end:%d/%m/%Y}"

    @property
    def entry(self) -> Optional[dict]:
        """The displayed entry; only one is expected per week."""
        return self.entries[0] if self.entries else None

    @property
    def can_create_week(self) -> bool:
        return self.loaded and self.last_error is None and not self.entries

    def load(self) -> None:
        try:
            self.entries = self.api.fetch_entries(self.week_start, self.week_end)
            self.last_error = None
        except EntriesApiError as e:
            logger.warning(f"Could not load entries for {self.week_label}: {e}")
            self.entries = []
            self.last_error = str(e)
        self.loaded = True

        if self.entry is not None:
            self.tracker = WeeklyTracker(
                self.entry,
                self.api,
                on_update=self.load,
                catalog=self.catalog,
                today=self.current_date,
            )
        else:
            self.tracker = None

    def create_new_week(self) -> bool:
        try:
            self.api.create_entry(self.week_start, self.week_end)
        except EntriesApiError as e:
            logger.warning(f"Could not create {self.week_label}: {e}")
            self.last_error = str(e)
            return False
        self.load()
        return True

    def go_to(self, d: date) -> None:
        self.current_date = d
        self.load()

    def previous_week(self) -> None:
        self.go_to(self.current_date - timedelta(days=7))

    def next_week(self) -> None:
        self.go_to(self.current_date + timedelta(days=7))
