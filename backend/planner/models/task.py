from sqlalchemy import Boolean, Column, Integer, String, Date, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, true
from planner.db import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    weekly_schedule_id = Column(
        Integer,
        ForeignKey("weekly_schedules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    # Optional: which weekly target this work counts against
    target_id = Column(
        Integer,
        ForeignKey("targets.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    date = Column(Date, nullable=False)

    estimated_hours = Column(Numeric(5, 2), nullable=False)
    actual_hours = Column(Numeric(5, 2), nullable=False, default=0, server_default="0")

    notes = Column(String, nullable=False, default="")
    billable = Column(Boolean, nullable=False, default=True, server_default=true())

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    weekly_schedule = relationship("WeeklySchedule", back_populates="tasks")
    customer = relationship("Customer", back_populates="tasks", lazy="joined")
    target = relationship("Target", back_populates="tasks")
