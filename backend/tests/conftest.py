import os

# Use in-memory sqlite for tests; must be set before planner.db is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import pytest  # noqa: E402


@pytest.fixture
def client():
    from fastapi.testclient import TestClient  # noqa: WPS433
    from planner.db import Base, engine  # noqa: WPS433
    from planner.main import app  # noqa: WPS433

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_customer(client):
    def _make(name="Acme Corp", billing_rate="100.00", **extra):
        r = client.post("/api/customers", json={"name": name, "billing_rate": billing_rate, **extra})
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_schedule(client):
    def _make(year=2024, week=10, overall_goal="Ship it"):
        r = client.post(
            "/api/weekly-schedules",
            json={"year": year, "week": week, "overall_goal": overall_goal},
        )
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_target(client):
    def _make(schedule, customer, target_hours="20.00", goal="Milestone"):
        r = client.post("/api/targets", json={
            "weekly_schedule_id": schedule["id"],
            "customer_id": customer["id"],
            "target_hours": target_hours,
            "goal": goal,
        })
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_task(client):
    def _make(schedule, customer, date="2024-03-04", estimated_hours="4.00", **extra):
        payload = {
            "weekly_schedule_id": schedule["id"],
            "customer_id": customer["id"],
            "date": date,
            "estimated_hours": estimated_hours,
            "notes": "",
        }
        payload.update(extra)
        r = client.post("/api/tasks", json=payload)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
