from academy.extensions import db
from academy.models import Student, TrainingGroup, TrainingSession


def test_api_requires_a_token(client):
    assert client.get("/api/students").status_code == 401


def test_create_student(client, auth_headers, make_coach):
    coach = make_coach()
    response = client.post("/api/students", headers=auth_headers, json={
        "full_name": "Salma Adel",
        "coach_id": coach.id,
        "training_schedule": [
            {"day": "wed", "start": "16:00", "end": "18:00"},
            {"day": "sat", "start": "9:00", "end": "10:00"},
        ],
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["warnings"] == []
    assert body["student"]["training_days"] == ["sat", "wed"]
    assert body["student"]["training_group_id"] is None
    assert body["projection"]["schedule_key"] == "sat:09:00:10:00|wed:16:00:18:00"

    rows = client.get(f"/api/students/{body['student']['id']}/schedule", headers=auth_headers).get_json()
    assert [row["day_of_week"] for row in rows] == ["sat", "wed"]

    sessions = client.get(f"/api/coaches/{coach.id}/sessions", headers=auth_headers).get_json()
    assert [(s["day_of_week"], s["start_time"]) for s in sessions] == [("Saturday", "09:00"), ("Wednesday", "16:00")]


def test_blank_coach_means_no_coach(client, auth_headers):
    response = client.post("/api/students", headers=auth_headers, json={
        "full_name": "Guest",
        "coach_id": "",
        "training_schedule": [{"day": "sun", "start": "10:00", "end": "11:00"}],
    })
    assert response.status_code == 201
    assert response.get_json()["student"]["coach_id"] is None
    assert TrainingSession.query.count() == 0


def test_invalid_schedule_is_rejected_before_saving(client, auth_headers):
    response = client.post("/api/students", headers=auth_headers, json={
        "full_name": "Salma",
        "training_schedule": [
            {"day": "sat", "start": "16:00", "end": "18:00"},
            {"day": "sat", "start": "18:00", "end": "19:00"},
        ],
    })
    assert response.status_code == 400
    assert "training_schedule" in response.get_json()["errors"]
    assert Student.query.count() == 0


def test_unknown_coach_is_rejected(client, auth_headers):
    response = client.post("/api/students", headers=auth_headers, json={"full_name": "Salma", "coach_id": 42})
    assert response.status_code == 400
    assert Student.query.count() == 0


def test_update_student_replaces_schedule(client, auth_headers, make_coach):
    coach = make_coach()
    created = client.post("/api/students", headers=auth_headers, json={
        "full_name": "Salma",
        "coach_id": coach.id,
        "training_schedule": [{"day": "sat", "start": "16:00", "end": "18:00"}],
    }).get_json()["student"]

    response = client.put(f"/api/students/{created['id']}", headers=auth_headers, json={
        "full_name": "Salma",
        "coach_id": coach.id,
        "training_schedule": [{"day": "mon", "start": "17:00", "end": "18:00"}],
    })

    assert response.status_code == 200
    rows = client.get(f"/api/students/{created['id']}/schedule", headers=auth_headers).get_json()
    assert [(r["day_of_week"], r["start_time"]) for r in rows] == [("mon", "17:00")]


def test_group_lifecycle(client, auth_headers, make_coach, make_student, sat_mon):
    coach = make_coach()
    a, b, c = (make_student(name) for name in ("A", "B", "C"))

    created = client.post("/api/groups", headers=auth_headers, json={
        "name": "Juniors",
        "coach_id": coach.id,
        "days": ["saturday", "monday"],
        "start_time": "16:00",
        "duration": 120,
        "student_ids": [a.id, b.id, c.id],
    })
    assert created.status_code == 201
    group = created.get_json()["group"]
    assert group["schedule_key"] == "mon:16:00:18:00|sat:16:00:18:00"
    assert group["student_count"] == 3
    assert group["coach_name"] == coach.full_name

    updated = client.put(f"/api/groups/{group['id']}", headers=auth_headers, json={
        "name": "Juniors",
        "coach_id": coach.id,
        "days": ["sat", "mon"],
        "start_time": "16:00",
        "duration": 120,
        "student_ids": [a.id, b.id],
    })
    assert updated.status_code == 200
    assert updated.get_json()["result"]["detached_ids"] == [c.id]
    assert db.session.get(Student, c.id).training_schedule == sat_mon

    details = client.get(f"/api/groups/{group['id']}", headers=auth_headers).get_json()
    assert details["form"]["duration"] == 120
    assert details["form"]["student_ids"] == [a.id, b.id]

    deleted = client.delete(f"/api/groups/{group['id']}", headers=auth_headers)
    assert deleted.get_json()["detached_ids"] == [a.id, b.id]
    assert TrainingGroup.query.count() == 0


def test_group_form_defaults_and_validation(client, auth_headers, make_coach):
    coach = make_coach()
    response = client.post("/api/groups", headers=auth_headers, json={
        "name": "Defaults", "coach_id": coach.id, "days": ["tue"],
    })
    assert response.get_json()["group"]["schedule_key"] == "tue:16:00:17:00"

    bad = client.post("/api/groups", headers=auth_headers, json={
        "name": "Bad", "coach_id": coach.id, "days": ["someday"],
    })
    assert bad.status_code == 400
    assert "days" in bad.get_json()["errors"]


def test_duplicate_group_conflicts(client, auth_headers, make_coach):
    coach = make_coach()
    payload = {"name": "Juniors", "coach_id": coach.id, "days": ["sat"]}
    assert client.post("/api/groups", headers=auth_headers, json=payload).status_code == 201
    assert client.post("/api/groups", headers=auth_headers, json=payload).status_code == 409


def test_group_list_hides_front_desk_staff(client, auth_headers, make_coach, make_group, sat_mon):
    coach = make_coach()
    desk = make_coach("Front desk", role="reception")
    make_group(coach, sat_mon, name="Juniors")
    make_group(desk, sat_mon, name="Desk")

    names = [g["name"] for g in client.get("/api/groups", headers=auth_headers).get_json()]
    assert names == ["Juniors"]


def test_groups_for_day(client, auth_headers, make_coach, make_group, sat_mon):
    coach = make_coach()
    make_group(coach, sat_mon, name="Sat/Mon")
    make_group(coach, [{"day": "wed", "start": "10:00", "end": "11:00"}], name="Wed")

    events = client.get("/api/groups/day/Saturday", headers=auth_headers).get_json()
    assert [(e["name"], e["slot"]["start"]) for e in events] == [("Sat/Mon", "16:00")]
    assert client.get("/api/groups/day/someday", headers=auth_headers).status_code == 400


def test_sync_endpoint(client, auth_headers, make_coach, make_student, sat_mon):
    coach = make_coach()
    student = make_student(coach=coach, schedule=sat_mon)

    response = client.post("/api/groups/sync", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()["count"] == 1
    assert db.session.get(Student, student.id).training_group_id is not None


def test_sync_command(app, make_coach, make_student, sat_mon):
    make_student(coach=make_coach(), schedule=sat_mon)
    result = app.test_cli_runner().invoke(args=["sync-groups"])
    assert "Synced 1 students" in result.output


def test_coaches(client, auth_headers):
    created = client.post("/api/coaches", headers=auth_headers, json={"full_name": "Coach Omar"})
    assert created.status_code == 201
    coach_id = created.get_json()["coach"]["id"]
    assert client.get(f"/api/coaches/{coach_id}", headers=auth_headers).get_json()["role"] == "coach"
    assert client.get("/api/coaches/999", headers=auth_headers).status_code == 404
