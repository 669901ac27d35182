#!/usr/bin/env python3
"""
Seed several weeks of plans into a running planner API.

Per week (Mon-Sat):
  - one weekly schedule with an overall goal
  - a target per customer (hours from CUSTOMERS below)
  - tasks spread over the week that allocate ~90% of each target

Usage examples:
  - Against a local dev server:
      python scripts/seed_weeks.py --base-url http://localhost:8000
  - Eight weeks ending with the current one:
      python scripts/seed_weeks.py --base-url http://localhost:8000 --weeks 8
"""

from __future__ import annotations

import argparse
import datetime as dt
import sys
from decimal import ROUND_HALF_UP, Decimal

import httpx


# name, hourly rate, weekly target hours
CUSTOMERS = [
    ("Acme Corp", "120.00", "20.00"),
    ("Globex", "95.00", "10.00"),
    ("Initech", "80.00", "6.00"),
]


def iso_week_back(today: dt.date, weeks_back: int) -> tuple[int, int]:
    iso = (today - dt.timedelta(weeks=weeks_back)).isocalendar()
    return iso[0], iso[1]


def split_hours(total: Decimal, parts: int) -> list[Decimal]:
    """Split `total` into `parts` two-place amounts that add back up exactly."""
    base = (total / parts).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    amounts = [base] * parts
    amounts[-1] = total - base * (parts - 1)
    return amounts


def call(client: httpx.Client, method: str, path: str, payload: dict | None = None) -> dict:
    r = client.request(method, path, json=payload)
    if r.status_code >= 300:
        raise RuntimeError(f"{method} {path} -> HTTP {r.status_code}: {r.text}")
    return r.json() if r.content else {}


def ensure_customers(client: httpx.Client) -> dict[str, dict]:
    existing = {c["name"]: c for c in call(client, "GET", "/api/customers")}
    for name, rate, _ in CUSTOMERS:
        if name not in existing:
            existing[name] = call(client, "POST", "/api/customers", {"name": name, "billing_rate": rate})
    return existing


def seed_week(client: httpx.Client, customers: dict[str, dict], year: int, week: int) -> None:
    schedule = call(
        client, "PUT", f"/api/weekly-schedules/by-week/{year}/{week}",
        {"overall_goal": f"Seeded plan for {year}-W{week:02d}"},
    )
    info = call(client, "GET", f"/api/weeks/{year}/{week}")

    for i, (name, _, target_hours) in enumerate(CUSTOMERS):
        customer = customers[name]
        target = call(client, "POST", "/api/targets", {
            "weekly_schedule_id": schedule["id"],
            "customer_id": customer["id"],
            "target_hours": target_hours,
            "goal": f"{name} weekly allocation",
        })
        planned = (Decimal(target_hours) * Decimal("0.9")).quantize(Decimal("0.01"))
        # stagger customers across the week
        days = [(i + k) % 6 for k in range(3)]
        for day, hours in zip(days, split_hours(planned, len(days))):
            draft = call(client, "GET", f"/api/targets/{target['id']}/draft?day_index={day}")
            draft.update({"estimated_hours": str(hours), "notes": "seed"})
            call(client, "POST", "/api/tasks", draft)

    print(f"{info['label']}: seeded {len(CUSTOMERS)} targets")


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed weekly schedules, targets and tasks")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--weeks", type=int, default=4, help="How many weeks to seed, ending this week")
    args = ap.parse_args()

    today = dt.date.today()
    with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=15) as client:
        try:
            customers = ensure_customers(client)
            for back in reversed(range(args.weeks)):
                year, week = iso_week_back(today, back)
                seed_week(client, customers, year, week)
        except httpx.HTTPError as exc:
            print(f"Could not reach {args.base_url}: {exc}", file=sys.stderr)
            sys.exit(1)

    print(f"Seed complete: {args.weeks} weeks created.")


if __name__ == "__main__":
    main()
