"""Repairs students whose group pointer drifted from their own schedule."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from academy.extensions import db
from academy.models import Student
from academy.realtime import notify_change

from .codec import encode_schedule_key
from .groups import resolve_or_create
from .naming import generate_group_name

logger = logging.getLogger(__name__)


class ReconcileResult:
    def __init__(self, success, count=0, error=None, failed_ids=None):
        self.success = success
        self.count = count
        self.error = error
        self.failed_ids = failed_ids or []

    def to_dict(self):
        data = {"success": self.success, "count": self.count, "failed_ids": self.failed_ids}
        if self.error is not None:
            data["error"] = str(self.error)
        return data


def reconcile_student(student):
    """Point ``student`` at the group matching its coach and schedule.

    Creates the group when none exists. Returns True when the student was
    repointed, False when it already matched or has nothing to match.
    """
    schedule = student.training_schedule
    if student.coach_id is None or not schedule or not isinstance(schedule, list):
        return False

    schedule_key = encode_schedule_key(schedule)
    days = student.training_days or [entry["day"] for entry in schedule]
    group_name = generate_group_name(days, schedule[0].get("start"))

    group_id = resolve_or_create(student.coach_id, schedule_key, group_name)
    if student.training_group_id == group_id:
        return False

    previous = student.training_group_id
    student.training_group_id = group_id
    db.session.commit()
    logger.info("Student %s moved from group %s to %s", student.id, previous, group_id)
    notify_change("students", "update", student.id, student.coach_id)
    return True


def sync_all_students_to_groups():
    """Reconcile every student that has a coach. One failing student does not stop the run."""
    try:
        students = Student.query.filter(Student.coach_id.isnot(None)).order_by(Student.id).all()
    except SQLAlchemyError as exc:
        logger.exception("Group sync failed")
        return ReconcileResult(False, error=exc)

    count = 0
    failed = []
    for student in students:
        student_id = student.id
        try:
            if reconcile_student(student):
                count += 1
        except (SQLAlchemyError, LookupError, TypeError, ValueError, AttributeError) as exc:
            db.session.rollback()
            failed.append(student_id)
            logger.error("Could not reconcile student %s: %s", student_id, exc)

    logger.info("Group sync repaired %d students, %d failed", count, len(failed))
    return ReconcileResult(True, count=count, failed_ids=failed)
