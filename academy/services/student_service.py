"""Student create/edit: the student row first, derived schedule records after."""

import logging

from academy.errors import NotFoundError, ScheduleValidationError
from academy.extensions import db
from academy.models import Coach, Student
from academy.realtime import notify_change
from academy.scheduling.projector import project_student_schedule

logger = logging.getLogger(__name__)


def get_student(student_id):
    student = db.session.get(Student, student_id)
    if student is None:
        raise NotFoundError("Student not found")
    return student


def save_student(form, student=None):
    """Save a student from a loaded ``StudentFormSchema`` and project its schedule.

    Returns ``(student, projection)``. Only the student write can fail the
    save; projection problems come back as warnings on the projection.
    """
    schedule = form["training_schedule"]
    coach_id = form.get("coach_id")
    if coach_id is not None and db.session.get(Coach, coach_id) is None:
        raise ScheduleValidationError("Coach not found", {"errors": {"coach_id": ["Unknown coach."]}})

    is_new = student is None
    if is_new:
        student = Student()
        db.session.add(student)

    student.full_name = form["full_name"]
    student.contact_number = form.get("contact_number")
    student.notes = form.get("notes")
    student.coach_id = coach_id
    student.training_days = list(schedule.days)
    student.training_schedule = schedule.as_training_schedule()
    # training_group_id is owned by the group form and the reconciler
    db.session.commit()

    logger.info("%s student %s", "Created" if is_new else "Updated", student.id)
    notify_change("students", "insert" if is_new else "update", student.id, coach_id)

    projection = project_student_schedule(student, schedule, coach_id, is_new=is_new)
    return student, projection


def delete_student(student_id):
    student = get_student(student_id)
    coach_id = student.coach_id
    db.session.delete(student)
    db.session.commit()
    notify_change("students", "delete", student_id, coach_id)
