from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from planner.db import Base


class WeeklySchedule(Base):
    __tablename__ = "weekly_schedules"
    __table_args__ = (
        UniqueConstraint("year", "week", name="uq_weekly_schedules_year_week"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # ISO week-year and ISO week number (1-53)
    year = Column(Integer, nullable=False)
    week = Column(Integer, nullable=False)

    overall_goal = Column(String, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # Deleting a week takes its targets and tasks with it
    targets = relationship(
        "Target",
        back_populates="weekly_schedule",
        cascade="all, delete-orphan",
        order_by="Target.id",
    )
    tasks = relationship(
        "Task",
        back_populates="weekly_schedule",
        cascade="all, delete-orphan",
        order_by="Task.date",
    )
