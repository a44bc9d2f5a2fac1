from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from carnet.core.time_utils import parse_day


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DayEntryRead(CamelModel):
    id: Optional[str] = None
    date: date
    exercises: dict[str, bool] = {}

    model_config = ConfigDict(from_attributes=True)

    @field_validator("exercises", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or {}


class WeeklyEntryRead(CamelModel):
    """Schema returned to the client; optional text is always a string."""

    id: str
    user_id: str
    start_date: date
    end_date: date
    charity_acts: str = ""
    comments: str = ""
    difficulties: str = ""
    improvements: str = ""
    successes: str = ""
    days: list[DayEntryRead] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator(
        "charity_acts", "comments", "difficulties", "improvements", "successes",
        mode="before",
    )
    @classmethod
    def _none_to_blank(cls, v):
        return "" if v is None else v


class WeekRangeRequest(CamelModel):
    """Body of the create-week request.

    Dates stay optional strings so missing values answer 400, not 422.
    """

    start_date: Optional[str] = None
    end_date: Optional[str] = None


class DayEntryUpdate(CamelModel):
    # Accepted but not used to match rows; the date is the key
    id: Optional[str] = None
    date: date
    exercises: dict[str, bool] = {}

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        return parse_day(v)


class WeeklyEntryUpdate(CamelModel):
    """Body of the update request (all fields optional).

    Clients send the whole entry back; identity fields are tolerated and
    ignored.
    """

    charity_acts: Optional[str] = None
    comments: Optional[str] = None
    difficulties: Optional[str] = None
    improvements: Optional[str] = None
    successes: Optional[str] = None
    days: Optional[list[DayEntryUpdate]] = None

    model_config = ConfigDict(extra="ignore")
