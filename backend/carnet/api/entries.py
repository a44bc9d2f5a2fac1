from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from carnet.core.auth import get_current_user_id
from carnet.core.errors import InvalidRequest
from carnet.core.time_utils import parse_day
from carnet.db import get_db
from carnet.schemas.entry import WeekRangeRequest, WeeklyEntryRead, WeeklyEntryUpdate
from carnet.services import entries as service


router = APIRouter(prefix="/entries", tags=["entries"])


def _parse_range(start_date: Optional[str], end_date: Optional[str]) -> tuple[date, date]:
    if not start_date or not end_date:
        raise InvalidRequest("Missing dates")
    try:
        return parse_day(start_date), parse_day(end_date, end_of_range=True)
    except ValueError:
        raise InvalidRequest("Invalid dates")


@router.get("", response_model=list[WeeklyEntryRead])
def list_entries(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    List the caller's entries lying within [startDate, endDate].

    This is what the dashboard calls for the displayed week:
      GET /entries?startDate=2024-02-12&endDate=2024-02-18
    """
    start, end = _parse_range(start_date, end_date)
    return service.list_entries(db, user_id, start, end)


@router.post("", response_model=WeeklyEntryRead)
@router.post("/create", response_model=WeeklyEntryRead)
def create_week(
    payload: Optional[WeekRangeRequest] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    payload = payload or WeekRangeRequest()
    start, end = _parse_range(payload.start_date, payload.end_date)
    return service.create_week(db, user_id, start, end)


@router.get("/{entry_id}", response_model=WeeklyEntryRead)
def get_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return service.get_week(db, user_id, entry_id)


@router.put("/{entry_id}", response_model=WeeklyEntryRead)
def update_entry(
    entry_id: str,
    payload: WeeklyEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return service.update_week(db, user_id, entry_id, payload)
