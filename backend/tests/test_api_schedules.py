def test_create_and_fetch_by_week(client, make_schedule):
    s = make_schedule(year=2024, week=10, overall_goal="Close Q1")
    r = client.get("/api/weekly-schedules/by-week/2024/10")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == s["id"]
    assert body["overall_goal"] == "Close Q1"
    assert body["targets"] == []
    assert body["tasks"] == []


def test_missing_week_is_404(client):
    r = client.get("/api/weekly-schedules/by-week/2024/11")
    assert r.status_code == 404
    assert r.json()["message"] == "Weekly schedule not found"


def test_duplicate_week_rejected(client, make_schedule):
    make_schedule(year=2024, week=10)
    r = client.post(
        "/api/weekly-schedules",
        json={"year": 2024, "week": 10, "overall_goal": "again"},
    )
    assert r.status_code == 400
    assert r.json()["errors"][0]["type"] == "unique"


def test_week_53_only_in_long_years(client, make_schedule):
    make_schedule(year=2020, week=53)
    r = client.post(
        "/api/weekly-schedules",
        json={"year": 2024, "week": 53, "overall_goal": "nope"},
    )
    assert r.status_code == 400
    r = client.post(
        "/api/weekly-schedules",
        json={"year": 2024, "week": 54, "overall_goal": "nope"},
    )
    assert r.status_code == 400


def test_upsert_by_week_creates_then_updates(client):
    r1 = client.put("/api/weekly-schedules/by-week/2024/12", json={"overall_goal": "first"})
    assert r1.status_code == 200, r1.text
    r2 = client.put("/api/weekly-schedules/by-week/2024/12", json={"overall_goal": "second"})
    assert r2.status_code == 200
    assert r2.json()["id"] == r1.json()["id"]
    assert r2.json()["overall_goal"] == "second"
    assert len(client.get("/api/weekly-schedules").json()) == 1


def test_list_newest_first(client, make_schedule):
    make_schedule(year=2023, week=52)
    make_schedule(year=2024, week=2)
    make_schedule(year=2024, week=1)
    weeks = [(s["year"], s["week"]) for s in client.get("/api/weekly-schedules").json()]
    assert weeks == [(2024, 2), (2024, 1), (2023, 52)]


def test_update_schedule_goal(client, make_schedule):
    s = make_schedule()
    r = client.put(f"/api/weekly-schedules/{s['id']}", json={"overall_goal": "Revised"})
    assert r.status_code == 200
    assert r.json()["overall_goal"] == "Revised"
    assert r.json()["week"] == s["week"]


def test_delete_schedule_takes_targets_and_tasks(
    client, make_customer, make_schedule, make_target, make_task
):
    c = make_customer()
    s = make_schedule()
    t = make_target(s, c)
    task = make_task(s, c, target_id=t["id"])

    assert client.delete(f"/api/weekly-schedules/{s['id']}").status_code == 204
    assert client.get(f"/api/weekly-schedules/{s['id']}").status_code == 404
    assert client.get(f"/api/targets/{t['id']}").status_code == 404
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_summary_totals(client, make_customer, make_schedule, make_target, make_task):
    acme = make_customer(name="Acme", billing_rate="100.00")
    internal = make_customer(name="Internal", billing_rate="50.00")
    s = make_schedule(year=2024, week=10)
    target = make_target(s, acme, target_hours="20.00")

    make_task(s, acme, date="2024-03-04", estimated_hours="4.00", actual_hours="2.00", target_id=target["id"])
    make_task(s, acme, date="2024-03-06", estimated_hours="6.00", target_id=target["id"])
    make_task(s, internal, date="2024-03-06", estimated_hours="4.00", actual_hours="2.00", billable=False)

    r = client.get(f"/api/weekly-schedules/{s['id']}/summary")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["label"] == "Mar 4 - Mar 9, 2024"

    monday, _, wednesday = body["days"][:3]
    assert monday["date"] == "2024-03-04"
    assert monday["totals"] == {
        "estimated_hours": "4.00",
        "actual_hours": "2.00",
        "estimated_revenue": "400.00",
        "actual_revenue": "200.00",
    }
    assert len(wednesday["task_ids"]) == 2
    assert wednesday["totals"]["estimated_hours"] == "10.00"
    assert wednesday["totals"]["estimated_revenue"] == "600.00"

    totals = body["totals"]
    assert totals["estimated_hours"] == "14.00"
    assert totals["actual_hours"] == "4.00"
    assert totals["estimated_revenue"] == "1000.00"
    assert totals["actual_revenue"] == "200.00"
    assert totals["total_target_hours"] == "20.00"

    (progress_row,) = body["targets"]
    assert progress_row["customer_name"] == "Acme"
    assert progress_row["progress"]["allocated_hours"] == "10.00"
    assert progress_row["progress"]["percentage"] == "50.00"
    assert progress_row["progress"]["remaining_hours"] == "10.00"


def test_summary_of_empty_week(client, make_schedule):
    s = make_schedule()
    body = client.get(f"/api/weekly-schedules/{s['id']}/summary").json()
    assert body["totals"]["estimated_revenue"] == "0.00"
    assert all(d["task_ids"] == [] for d in body["days"])
    assert body["targets"] == []


def test_changing_week_cannot_strand_tasks(client, make_customer, make_schedule, make_task):
    s = make_schedule(year=2024, week=10)
    make_task(s, make_customer(), date="2024-03-04")

    r = client.put(f"/api/weekly-schedules/{s['id']}", json={"week": 20})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Invalid weekly schedule data"
    assert body["errors"][0]["loc"] == ["body", "week"]
    assert "2024-03-04" in body["errors"][0]["msg"]

    r = client.put(f"/api/weekly-schedules/{s['id']}", json={"year": 2025})
    assert r.status_code == 400

    row = client.get(f"/api/weekly-schedules/{s['id']}").json()
    assert (row["year"], row["week"]) == (2024, 10)


def test_changing_week_of_empty_schedule(client, make_schedule):
    s = make_schedule(year=2024, week=10)
    r = client.put(f"/api/weekly-schedules/{s['id']}", json={"week": 20})
    assert r.status_code == 200, r.text
    assert r.json()["week"] == 20
