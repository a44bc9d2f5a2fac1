import uuid

from sqlalchemy import JSON, Column, Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from carnet.db import Base


class DayEntry(Base):
    __tablename__ = "day_entries"
    __table_args__ = (
        # Days are matched by date on save
        UniqueConstraint("weekly_entry_id", "date", name="uq_day_entries_entry_date"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    weekly_entry_id = Column(
        String(36),
        ForeignKey("weekly_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date = Column(Date, nullable=False)

    # {exercise_id: done}; keys outside the catalog are kept as-is
    exercises = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict)

    weekly_entry = relationship("WeeklyEntry", back_populates="days")
