import pytest
from sqlalchemy import inspect

from academy.errors import GroupConflictError
from academy.extensions import db
from academy.models import Student, TrainingGroup
from academy.scheduling.groups import delete_group, resolve_or_create, update_group


def test_resolve_or_create_is_idempotent(make_coach):
    coach = make_coach()
    first = resolve_or_create(coach.id, "mon:16:00:18:00|sat:16:00:18:00", "SAT/MON 4 PM")
    second = resolve_or_create(coach.id, "mon:16:00:18:00|sat:16:00:18:00", "Other name")

    assert first == second
    assert TrainingGroup.query.count() == 1
    assert db.session.get(TrainingGroup, first).name == "SAT/MON 4 PM"


def test_same_key_for_another_coach_is_another_group(make_coach):
    mona, omar = make_coach("Coach Mona"), make_coach("Coach Omar")
    key = "sat:16:00:18:00"
    assert resolve_or_create(mona.id, key, "SAT 4 PM") != resolve_or_create(omar.id, key, "SAT 4 PM")


def test_resolve_or_create_reuses_the_group_that_won_the_insert(make_coach, make_group, monkeypatch):
    from academy.scheduling import groups

    coach = make_coach()
    winner = make_group(coach, [{"day": "sun", "start": "10:00", "end": "11:00"}], name="Winner")
    real_find = groups.find_group
    calls = []

    def stale_then_real(coach_id, schedule_key):
        calls.append(schedule_key)
        # first lookup misses, as if the other request had not committed yet
        if len(calls) == 1:
            return None
        return real_find(coach_id, schedule_key)

    monkeypatch.setattr(groups, "find_group", stale_then_real)
    assert resolve_or_create(coach.id, winner.schedule_key, "Loser") == winner.id
    assert TrainingGroup.query.count() == 1


def test_update_group_does_not_touch_members(make_coach, make_group, make_student, sat_mon):
    coach = make_coach()
    group = make_group(coach, sat_mon)
    student = make_student(coach=coach, schedule=sat_mon, group=group)

    update_group(group.id, name="Renamed", schedule_key="tue:10:00:11:00")

    refreshed = db.session.get(Student, student.id)
    assert db.session.get(TrainingGroup, group.id).name == "Renamed"
    assert refreshed.training_schedule == sat_mon
    assert refreshed.training_group_id == group.id


def test_update_group_rejects_a_key_owned_by_another_group(make_coach, make_group, sat_mon):
    coach = make_coach()
    make_group(coach, sat_mon, name="Taken")
    group = make_group(coach, [{"day": "wed", "start": "16:00", "end": "17:00"}])

    with pytest.raises(GroupConflictError):
        update_group(group.id, schedule_key="mon:16:00:18:00|sat:16:00:18:00")


def test_delete_group_detaches_members(make_coach, make_group, make_student, sat_mon):
    coach = make_coach()
    group = make_group(coach, sat_mon)
    student = make_student(coach=coach, schedule=sat_mon, group=group)

    assert delete_group(group.id) == [student.id]

    refreshed = db.session.get(Student, student.id)
    assert refreshed.training_group_id is None
    assert refreshed.training_schedule == sat_mon
    assert TrainingGroup.query.count() == 0


def test_coach_column_has_a_single_index(app):
    indexes = inspect(db.engine).get_indexes("training_groups")
    coach_indexes = [index["name"] for index in indexes if index["column_names"] == ["coach_id"]]
    assert coach_indexes == ["idx_training_groups_coach_id"]
