from sqlalchemy.exc import OperationalError

from academy.extensions import db
from academy.models import Student, StudentTrainingSchedule, TrainingSession
from academy.scheduling import projector
from academy.scheduling.types import WeeklySchedule
from academy.services.student_service import save_student


def _form(schedule, coach=None, full_name="Salma"):
    return {
        "full_name": full_name,
        "coach_id": coach.id if coach else None,
        "training_schedule": WeeklySchedule.from_entries(schedule),
    }


def _rows(student_id):
    rows = StudentTrainingSchedule.query.filter_by(student_id=student_id).all()
    return sorted((row.day_of_week, row.start_time, row.end_time) for row in rows)


def test_new_student_gets_rows_and_coach_sessions(make_coach, sat_mon):
    coach = make_coach()
    student, projection = save_student(_form(sat_mon, coach))

    assert projection.complete
    assert projection.schedule_key == "mon:16:00:18:00|sat:16:00:18:00"
    assert _rows(student.id) == [("mon", "16:00", "18:00"), ("sat", "16:00", "18:00")]
    sessions = TrainingSession.query.filter_by(coach_id=coach.id).all()
    assert sorted(s.day_of_week for s in sessions) == ["Monday", "Saturday"]
    assert {(s.title, s.capacity) for s in sessions} == {("Group Training", 20)}
    assert student.training_days == ["sat", "mon"]


def test_existing_session_is_found_by_full_day_name(make_coach):
    coach = make_coach()
    existing = TrainingSession(coach_id=coach.id, day_of_week="Wednesday", start_time="16:00",
                               end_time="18:00", title="Advanced", capacity=8)
    db.session.add(existing)
    db.session.commit()

    _, projection = save_student(_form([{"day": "wed", "start": "16:00", "end": "18:00"}], coach))

    assert projection.sessions_created == []
    sessions = TrainingSession.query.filter_by(coach_id=coach.id).all()
    assert [(s.id, s.title, s.capacity) for s in sessions] == [(existing.id, "Advanced", 8)]


def test_second_student_with_same_slots_does_not_duplicate_sessions(make_coach, sat_mon):
    coach = make_coach()
    save_student(_form(sat_mon, coach, "Salma"))
    save_student(_form(sat_mon, coach, "Nour"))
    assert TrainingSession.query.filter_by(coach_id=coach.id).count() == 2


def test_edit_replaces_rows(make_coach, sat_mon):
    coach = make_coach()
    student, _ = save_student(_form(sat_mon, coach))

    student, _ = save_student(_form([{"day": "thu", "start": "17:00", "end": "18:00"}], coach), student)

    assert _rows(student.id) == [("thu", "17:00", "18:00")]


def test_edit_with_empty_schedule_clears_rows(app, sat_mon):
    student, _ = save_student(_form(sat_mon))
    student, projection = save_student(_form([]), student)

    assert projection.rows_written == 0
    assert _rows(student.id) == []
    assert TrainingSession.query.count() == 0


def test_student_without_coach_gets_no_sessions(app, sat_mon):
    student, projection = save_student(_form(sat_mon))
    assert len(_rows(student.id)) == 2
    assert TrainingSession.query.count() == 0


def test_projection_never_assigns_a_group(make_coach, make_group, sat_mon):
    coach = make_coach()
    make_group(coach, sat_mon)
    student, _ = save_student(_form(sat_mon, coach))
    assert student.training_group_id is None


def test_session_failure_is_a_warning(make_coach, sat_mon, monkeypatch):
    coach = make_coach()

    def broken(*args, **kwargs):
        raise OperationalError("INSERT INTO training_sessions", {}, Exception("connection lost"))

    monkeypatch.setattr(projector, "ensure_coach_sessions", broken)
    student, projection = save_student(_form(sat_mon, coach))

    assert [warning.step for warning in projection.warnings] == ["ensure_coach_sessions"]
    # earlier steps stay committed
    assert Student.query.count() == 1
    assert len(_rows(student.id)) == 2


def test_new_sessions_use_configured_defaults(app, make_coach, sat_mon):
    app.config.update(DEFAULT_SESSION_TITLE="Evening Squad", DEFAULT_SESSION_CAPACITY=12)
    coach = make_coach()

    _, projection = save_student(_form(sat_mon, coach))

    assert {(s.title, s.capacity) for s in projection.sessions_created} == {("Evening Squad", 12)}
