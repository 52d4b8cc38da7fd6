"""Saves a training group from the group form and fans the schedule out to its roster."""

import logging

from flask import current_app

from academy.errors import ScheduleValidationError
from academy.extensions import db
from academy.models import Coach, Student
from academy.realtime import notify_change

from .cascade import CascadeResult
from .codec import decode_schedule_key, duration_minutes, normalize_time
from .groups import create_group, member_ids, update_group
from .projector import replace_schedule_rows
from .sessions import ensure_coach_sessions

logger = logging.getLogger(__name__)


class GroupSaveResult(CascadeResult):
    def __init__(self, group, created, schedule):
        super().__init__()
        self.group_id = group.id
        self.created = created
        self.schedule = schedule
        self.member_ids = []
        self.detached_ids = []
        self.sessions_created = []

    @property
    def schedule_key(self):
        return self.schedule.key

    def to_dict(self):
        return {
            "group_id": self.group_id,
            "created": self.created,
            "schedule_key": self.schedule_key,
            "member_ids": self.member_ids,
            "detached_ids": self.detached_ids,
            "sessions_created": [session.id for session in self.sessions_created],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


def _validate_references(edit):
    if db.session.get(Coach, edit.coach_id) is None:
        raise ScheduleValidationError("Coach not found", {"errors": {"coach_id": ["Unknown coach."]}})

    if edit.student_ids:
        found = {
            row.id for row in
            db.session.query(Student.id).filter(Student.id.in_(edit.student_ids))
        }
        missing = [student_id for student_id in edit.student_ids if student_id not in found]
        if missing:
            raise ScheduleValidationError(
                "Unknown students selected",
                {"errors": {"student_ids": [f"Unknown student ids: {missing}"]}},
            )


def assign_members(group_id, coach_id, schedule, student_ids):
    students = Student.query.filter(Student.id.in_(student_ids)).all()
    for student in students:
        student.coach_id = coach_id
        student.training_days = list(schedule.days)
        student.training_schedule = schedule.as_training_schedule()
        student.training_group_id = group_id
    db.session.commit()
    notify_change("students", "update", None, coach_id)
    return [student.id for student in students]


def detach_members(student_ids):
    """Clear the group pointer only, personal schedules stay as they are."""
    Student.query.filter(Student.id.in_(student_ids)).update(
        {Student.training_group_id: None}, synchronize_session=False
    )
    db.session.commit()
    notify_change("students", "update")
    return list(student_ids)


def save_group(edit, group=None, previous_member_ids=None):
    """Create or update a group from a :class:`GroupEdit` and cascade to students.

    ``previous_member_ids`` defaults to the students pointing at ``group``
    before the save. It has to be read before members are reassigned, or
    removed members could not be told apart from new ones.
    """
    _validate_references(edit)
    schedule = edit.schedule()

    if previous_member_ids is None:
        previous_member_ids = member_ids(group.id) if group is not None else []

    if group is None:
        group = create_group(edit.name, edit.coach_id, schedule.key)
        created = True
    else:
        group = update_group(group.id, name=edit.name, coach_id=edit.coach_id, schedule_key=schedule.key)
        created = False
    result = GroupSaveResult(group, created, schedule)
    logger.info("%s training group %s with key %r",
                "Created" if created else "Updated", result.group_id, result.schedule_key)

    selected = list(edit.student_ids)
    if selected:
        assigned = result.run_step(
            "assign_members", assign_members, result.group_id, edit.coach_id, schedule, selected
        )
        result.member_ids = assigned or []
        result.run_step("replace_schedule_rows", replace_schedule_rows, selected, schedule)

    removed = [student_id for student_id in previous_member_ids if student_id not in selected]
    if removed:
        detached = result.run_step("detach_members", detach_members, removed)
        result.detached_ids = detached or []

    if current_app.config.get("SYNC_GROUP_SESSIONS", True):
        created_sessions = result.run_step(
            "ensure_coach_sessions", ensure_coach_sessions, edit.coach_id, schedule.slots
        )
        result.sessions_created = created_sessions or []

    return result


def form_state(group, default_start="16:00", default_duration=60):
    """Values to pre-fill the group form with, derived from the stored key.

    Duration comes from the first slot and wraps past midnight. Slots that
    start or run differently from the first one become day overrides.
    """
    entries = decode_schedule_key(group.schedule_key)
    start_time, duration = default_start, default_duration
    overrides = {}

    parsed = []
    for entry in entries:
        try:
            parsed.append((entry["day"], normalize_time(entry["start"]), duration_minutes(entry["start"], entry["end"])))
        except ValueError:
            logger.warning("Group %s has an unreadable slot %r", group.id, entry)
    if parsed:
        _, start_time, duration = parsed[0]
        for day, start, length in parsed[1:]:
            if (start, length) != (start_time, duration):
                overrides[day] = {"start": start, "duration": length}

    return {
        "name": group.name,
        "coach_id": group.coach_id,
        "days": [entry["day"] for entry in entries],
        "start_time": start_time,
        "duration": duration,
        "day_overrides": overrides,
        "student_ids": member_ids(group.id),
    }
