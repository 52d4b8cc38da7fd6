"""Derives a student's per-day rows and the coach's class calendar from their schedule."""

import logging

from academy.extensions import db
from academy.models import StudentTrainingSchedule
from academy.realtime import notify_change

from .cascade import CascadeResult
from .sessions import ensure_coach_sessions

logger = logging.getLogger(__name__)


class ProjectionResult(CascadeResult):
    def __init__(self, student_id, schedule_key):
        super().__init__()
        self.student_id = student_id
        self.schedule_key = schedule_key
        self.rows_written = 0
        self.sessions_created = []

    def to_dict(self):
        return {
            "student_id": self.student_id,
            "schedule_key": self.schedule_key,
            "rows_written": self.rows_written,
            "sessions_created": [session.id for session in self.sessions_created],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


def replace_schedule_rows(student_ids, schedule, clear_existing=True):
    """Give every student in ``student_ids`` exactly one row per slot of ``schedule``."""
    student_ids = list(student_ids)
    if not student_ids:
        return 0
    if clear_existing:
        StudentTrainingSchedule.query.filter(
            StudentTrainingSchedule.student_id.in_(student_ids)
        ).delete(synchronize_session=False)

    rows = [
        StudentTrainingSchedule(
            student_id=student_id,
            day_of_week=slot.day,
            start_time=slot.start,
            end_time=slot.end,
        )
        for student_id in student_ids
        for slot in schedule.slots
    ]
    db.session.add_all(rows)
    db.session.commit()
    notify_change("student_training_schedule", "replace")
    return len(rows)


def project_student_schedule(student, schedule, coach_id, is_new=False):
    """Bring a saved student's derived records in line with ``schedule``.

    Rows are inserted for a new student and replaced for an existing one.
    Coach sessions are created for every slot when a coach is set. The
    student's group is left alone: group membership is only changed from
    the group form or by the reconciler.
    """
    result = ProjectionResult(student.id, schedule.key)

    written = result.run_step(
        "replace_schedule_rows",
        replace_schedule_rows,
        [student.id],
        schedule,
        clear_existing=not is_new,
    )
    result.rows_written = written or 0

    if coach_id and schedule:
        created = result.run_step("ensure_coach_sessions", ensure_coach_sessions, coach_id, schedule.slots)
        result.sessions_created = created or []

    if result.warnings:
        logger.warning("Student %s saved with %d failed follow-up steps", student.id, len(result.warnings))
    return result
