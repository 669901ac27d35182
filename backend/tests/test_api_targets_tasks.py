def test_target_read_embeds_customer(client, make_customer, make_schedule, make_target):
    c = make_customer(name="Acme")
    t = make_target(make_schedule(), c, target_hours="12.50")
    r = client.get(f"/api/targets/{t['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["target_hours"] == "12.50"
    assert body["customer"]["name"] == "Acme"


def test_target_with_unknown_refs_is_400(client, make_customer):
    c = make_customer()
    r = client.post("/api/targets", json={
        "weekly_schedule_id": 999,
        "customer_id": c["id"],
        "target_hours": "5",
        "goal": "x",
    })
    assert r.status_code == 400
    assert r.json()["errors"][0]["loc"] == ["body", "weekly_schedule_id"]


def test_targets_by_schedule_include_progress(
    client, make_customer, make_schedule, make_target, make_task
):
    c = make_customer()
    s = make_schedule()
    other = make_schedule(week=11)
    t = make_target(s, c, target_hours="20.00")
    make_target(other, c)
    make_task(s, c, estimated_hours="30.00", target_id=t["id"])

    rows = client.get(f"/api/targets/by-schedule/{s['id']}").json()
    assert [row["id"] for row in rows] == [t["id"]]
    progress = rows[0]["progress"]
    assert progress["allocated_hours"] == "30.00"
    assert progress["percentage"] == "100.00"
    assert progress["remaining_hours"] == "0.00"


def test_draft_from_dropped_target(client, make_customer, make_schedule, make_target):
    c = make_customer()
    s = make_schedule(year=2024, week=10)
    t = make_target(s, c, goal="X")

    r = client.get(f"/api/targets/{t['id']}/draft", params={"day_index": 2})
    assert r.status_code == 200, r.text
    draft = r.json()
    assert draft["customer_id"] == c["id"]
    assert draft["target_id"] == t["id"]
    assert draft["weekly_schedule_id"] == s["id"]
    assert draft["date"] == "2024-03-06"
    assert draft["actual_hours"] == "0"
    assert draft["billable"] is True

    # drafting writes nothing
    assert client.get(f"/api/tasks/by-schedule/{s['id']}").json() == []


def test_draft_day_index_out_of_range(client, make_customer, make_schedule, make_target):
    t = make_target(make_schedule(), make_customer())
    r = client.get(f"/api/targets/{t['id']}/draft", params={"day_index": 6})
    assert r.status_code == 400
    assert client.get("/api/targets/999/draft", params={"day_index": 0}).status_code == 404


def test_confirmed_draft_creates_task(client, make_customer, make_schedule, make_target):
    c = make_customer()
    s = make_schedule()
    t = make_target(s, c)
    draft = client.get(f"/api/targets/{t['id']}/draft", params={"day_index": 0}).json()
    draft.update({"estimated_hours": "3.50", "notes": "kickoff"})

    r = client.post("/api/tasks", json=draft)
    assert r.status_code == 201, r.text
    task = r.json()
    assert task["target"]["id"] == t["id"]
    assert task["customer"]["id"] == c["id"]
    assert task["actual_hours"] == "0.00"
    assert task["billable"] is True

    # the target itself is untouched
    assert client.get(f"/api/targets/{t['id']}").json()["target_hours"] == t["target_hours"]


def test_task_defaults(client, make_customer, make_schedule):
    c = make_customer()
    s = make_schedule()
    r = client.post("/api/tasks", json={
        "weekly_schedule_id": s["id"],
        "customer_id": c["id"],
        "date": "2024-03-05",
        "estimated_hours": "2",
        "notes": "",
    })
    assert r.status_code == 201, r.text
    task = r.json()
    assert task["actual_hours"] == "0.00"
    assert task["billable"] is True
    assert task["target"] is None


def test_task_requires_notes_and_non_negative_hours(client, make_customer, make_schedule):
    c = make_customer()
    s = make_schedule()
    r = client.post("/api/tasks", json={
        "weekly_schedule_id": s["id"],
        "customer_id": c["id"],
        "date": "2024-03-05",
        "estimated_hours": "-1",
    })
    assert r.status_code == 400
    fields = {e["loc"][-1] for e in r.json()["errors"]}
    assert {"estimated_hours", "notes"} <= fields


def test_task_target_must_match_schedule_and_customer(
    client, make_customer, make_schedule, make_target, make_task
):
    acme = make_customer(name="Acme")
    globex = make_customer(name="Globex")
    s = make_schedule(week=10)
    other = make_schedule(week=11)
    acme_target = make_target(s, acme)
    next_week_target = make_target(other, acme)

    r = client.post("/api/tasks", json={
        "weekly_schedule_id": s["id"],
        "customer_id": globex["id"],
        "target_id": acme_target["id"],
        "date": "2024-03-05",
        "estimated_hours": "1",
        "notes": "",
    })
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid task data"

    r = client.post("/api/tasks", json={
        "weekly_schedule_id": s["id"],
        "customer_id": acme["id"],
        "target_id": next_week_target["id"],
        "date": "2024-03-05",
        "estimated_hours": "1",
        "notes": "",
    })
    assert r.status_code == 400
    assert all(e["loc"] == ["body", "target_id"] for e in r.json()["errors"])


def test_task_date_must_be_in_schedule_week(client, make_customer, make_schedule):
    c = make_customer()
    s = make_schedule(year=2024, week=10)
    for bad in ["2024-03-10", "2024-03-11"]:  # the Sunday, then next Monday
        r = client.post("/api/tasks", json={
            "weekly_schedule_id": s["id"],
            "customer_id": c["id"],
            "date": bad,
            "estimated_hours": "1",
            "notes": "",
        })
        assert r.status_code == 400
        assert r.json()["errors"][0]["loc"] == ["body", "date"]


def test_update_task_and_clear_target(
    client, make_customer, make_schedule, make_target, make_task
):
    c = make_customer()
    s = make_schedule()
    t = make_target(s, c)
    task = make_task(s, c, target_id=t["id"])

    r = client.put(f"/api/tasks/{task['id']}", json={"actual_hours": "3.75", "notes": "done"})
    assert r.status_code == 200, r.text
    assert r.json()["actual_hours"] == "3.75"
    assert r.json()["target"]["id"] == t["id"]

    r = client.put(f"/api/tasks/{task['id']}", json={"target_id": None})
    assert r.status_code == 200
    assert r.json()["target"] is None
    assert r.json()["notes"] == "done"


def test_update_task_date_outside_week_rejected(client, make_customer, make_schedule, make_task):
    c = make_customer()
    s = make_schedule()
    task = make_task(s, c)
    r = client.put(f"/api/tasks/{task['id']}", json={"date": "2024-04-01"})
    assert r.status_code == 400
    assert client.get(f"/api/tasks/{task['id']}").json()["date"] == task["date"]


def test_delete_target_keeps_tasks(client, make_customer, make_schedule, make_target, make_task):
    c = make_customer()
    s = make_schedule()
    t = make_target(s, c)
    task = make_task(s, c, target_id=t["id"])

    assert client.delete(f"/api/targets/{t['id']}").status_code == 204
    r = client.get(f"/api/tasks/{task['id']}")
    assert r.status_code == 200
    assert r.json()["target_id"] is None


def test_tasks_by_schedule(client, make_customer, make_schedule, make_task):
    c = make_customer()
    s = make_schedule(week=10)
    other = make_schedule(week=11)
    mine = make_task(s, c, date="2024-03-08")
    make_task(other, c, date="2024-03-12")

    rows = client.get(f"/api/tasks/by-schedule/{s['id']}").json()
    assert [row["id"] for row in rows] == [mine["id"]]
    assert rows[0]["customer"]["billing_rate"] == "100.00"
    assert len(client.get("/api/tasks").json()) == 2


def test_delete_task(client, make_customer, make_schedule, make_task):
    task = make_task(make_schedule(), make_customer())
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 204
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


def test_target_with_tasks_cannot_change_schedule_or_customer(
    client, make_customer, make_schedule, make_target, make_task
):
    acme = make_customer(name="Acme")
    globex = make_customer(name="Globex")
    s = make_schedule(week=10)
    other = make_schedule(week=11)
    t = make_target(s, acme)
    make_task(s, acme, target_id=t["id"])

    r = client.put(f"/api/targets/{t['id']}", json={"weekly_schedule_id": other["id"]})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid target data"
    assert r.json()["errors"][0]["loc"] == ["body", "weekly_schedule_id"]

    r = client.put(f"/api/targets/{t['id']}", json={"customer_id": globex["id"]})
    assert r.status_code == 400
    assert r.json()["errors"][0]["loc"] == ["body", "customer_id"]

    body = client.get(f"/api/targets/{t['id']}").json()
    assert body["weekly_schedule_id"] == s["id"]
    assert body["customer_id"] == acme["id"]

    # other fields still update
    r = client.put(f"/api/targets/{t['id']}", json={"target_hours": "25.00"})
    assert r.status_code == 200
    assert r.json()["target_hours"] == "25.00"


def test_target_without_tasks_can_move(client, make_customer, make_schedule, make_target):
    acme = make_customer(name="Acme")
    globex = make_customer(name="Globex")
    t = make_target(make_schedule(week=10), acme)
    other = make_schedule(week=11)

    r = client.put(
        f"/api/targets/{t['id']}",
        json={"weekly_schedule_id": other["id"], "customer_id": globex["id"]},
    )
    assert r.status_code == 200, r.text
    assert r.json()["weekly_schedule_id"] == other["id"]
    assert r.json()["customer"]["name"] == "Globex"


def test_target_move_allowed_when_consistency_off(
    client, monkeypatch, make_customer, make_schedule, make_target, make_task
):
    from planner.core.config import settings

    monkeypatch.setattr(settings, "enforce_task_consistency", False)
    c = make_customer()
    s = make_schedule(week=10)
    other = make_schedule(week=11)
    t = make_target(s, c)
    make_task(s, c, target_id=t["id"])

    r = client.put(f"/api/targets/{t['id']}", json={"weekly_schedule_id": other["id"]})
    assert r.status_code == 200
