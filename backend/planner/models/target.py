from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from planner.db import Base


class Target(Base):
    __tablename__ = "targets"

    id = Column(Integer, primary_key=True, index=True)
    weekly_schedule_id = Column(
        Integer,
        ForeignKey("weekly_schedules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    target_hours = Column(Numeric(5, 2), nullable=False)  # hours wanted this week
    goal = Column(String, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    weekly_schedule = relationship("WeeklySchedule", back_populates="targets")
    customer = relationship("Customer", back_populates="targets", lazy="joined")
    tasks = relationship("Task", back_populates="target")
