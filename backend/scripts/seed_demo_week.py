from decimal import Decimal

from planner import storage
from planner.core.time_utils import current_week, week_dates
from planner.db import Base, SessionLocal, engine
from planner.models.weekly_schedule import WeeklySchedule


DEMO_CUSTOMERS = [
    ("Acme Corp", Decimal("120.00"), "billing@acme.example"),
    ("Globex", Decimal("95.00"), None),
    ("Internal", Decimal("0.00"), None),
]


def clear_week(db, year: int, week: int) -> None:
    """Delete the demo week (and its targets/tasks) so we can reseed cleanly."""
    row = db.query(WeeklySchedule).filter_by(year=year, week=week).first()
    if row:
        storage.delete_weekly_schedule(db, row.id)


def seed_demo_week(db) -> None:
    """Current week: one target per paying customer, a few tasks each day."""
    year, week = current_week()
    days = week_dates(year, week)

    existing = {c.name: c for c in storage.list_customers(db)}
    customers = []
    for name, rate, email in DEMO_CUSTOMERS:
        c = existing.get(name) or storage.create_customer(
            db, {"name": name, "billing_rate": rate, "email": email}
        )
        customers.append(c)
    acme, globex, internal = customers

    schedule = storage.create_weekly_schedule(
        db, {"year": year, "week": week, "overall_goal": "Ship Acme milestone, keep Globex warm"}
    )
    acme_target = storage.create_target(db, {
        "weekly_schedule_id": schedule.id,
        "customer_id": acme.id,
        "target_hours": Decimal("20.00"),
        "goal": "Milestone 2 delivery",
    })
    globex_target = storage.create_target(db, {
        "weekly_schedule_id": schedule.id,
        "customer_id": globex.id,
        "target_hours": Decimal("8.00"),
        "goal": "Support retainer",
    })

    plan = [
        # (day, customer, target, est, act, notes, billable)
        (0, acme, acme_target, "4.00", "4.50", "Sprint planning + API work", True),
        (1, acme, acme_target, "6.00", "5.25", "API work", True),
        (1, globex, globex_target, "2.00", "2.00", "Ticket triage", True),
        (2, internal, None, "1.50", "1.00", "Bookkeeping", False),
        (3, acme, acme_target, "6.00", "0", "Integration tests", True),
        (4, globex, globex_target, "3.00", "0", "Quarterly review prep", True),
    ]
    for day, customer, target, est, act, notes, billable in plan:
        storage.create_task(db, {
            "weekly_schedule_id": schedule.id,
            "customer_id": customer.id,
            "target_id": target.id if target else None,
            "date": days[day],
            "estimated_hours": Decimal(est),
            "actual_hours": Decimal(act),
            "notes": notes,
            "billable": billable,
        })

    print(f"Seeded week {week} of {year} with {len(plan)} demo tasks")


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        year, week = current_week()
        clear_week(db, year, week)
        seed_demo_week(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
