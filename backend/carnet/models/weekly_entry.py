import uuid

from sqlalchemy import Column, Date, DateTime, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from carnet.db import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class WeeklyEntry(Base):
    __tablename__ = "weekly_entries"
    __table_args__ = (
        # One entry per user per week
        UniqueConstraint("user_id", "start_date", "end_date", name="uq_weekly_entries_user_week"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)

    # Set from the authenticated caller, never changed
    user_id = Column(String, nullable=False, index=True)

    # Inclusive bounds, Monday..Sunday
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    charity_acts = Column(Text, nullable=True)
    comments = Column(Text, nullable=True)
    difficulties = Column(Text, nullable=True)
    improvements = Column(Text, nullable=True)
    successes = Column(Text, nullable=True)

    days = relationship(
        "DayEntry",
        back_populates="weekly_entry",
        order_by="DayEntry.date",
        cascade="all, delete-orphan",
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
