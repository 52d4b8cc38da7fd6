"""Training group lookups keyed by ``(coach_id, schedule_key)``."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from academy.errors import GroupConflictError, NotFoundError
from academy.extensions import db
from academy.models import Student, TrainingGroup
from academy.realtime import notify_change

logger = logging.getLogger(__name__)


def find_group(coach_id, schedule_key):
    return TrainingGroup.query.filter_by(coach_id=coach_id, schedule_key=schedule_key).first()


def get_group(group_id):
    group = db.session.get(TrainingGroup, group_id)
    if group is None:
        raise NotFoundError("Group not found")
    return group


def member_ids(group_id):
    rows = db.session.query(Student.id).filter(Student.training_group_id == group_id).order_by(Student.id)
    return [row.id for row in rows]


def resolve_or_create(coach_id, schedule_key, fallback_name):
    """Return the id of the coach's group for ``schedule_key``, creating it if missing.

    The lookup runs right before the insert. If a concurrent request wins the
    insert, the unique constraint rejects ours and the winner's id is returned.
    """
    group = find_group(coach_id, schedule_key)
    if group is not None:
        return group.id

    group = TrainingGroup(coach_id=coach_id, schedule_key=schedule_key, name=fallback_name)
    db.session.add(group)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        group = find_group(coach_id, schedule_key)
        if group is None:
            raise
        logger.info("Group for coach %s and key %r created concurrently, reusing %s", coach_id, schedule_key, group.id)
        return group.id

    logger.info("Created training group %s (%r) for coach %s", group.id, group.name, coach_id)
    notify_change("training_groups", "insert", group.id, coach_id)
    return group.id


def _check_key_free(coach_id, schedule_key, group_id=None):
    existing = find_group(coach_id, schedule_key)
    if existing is not None and existing.id != group_id:
        raise GroupConflictError(
            f"Group '{existing.name}' already has this schedule for the coach",
            {"group_id": existing.id},
        )


def create_group(name, coach_id, schedule_key):
    _check_key_free(coach_id, schedule_key)
    group = TrainingGroup(name=name, coach_id=coach_id, schedule_key=schedule_key)
    db.session.add(group)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise GroupConflictError("A group with this schedule already exists for the coach")
    notify_change("training_groups", "insert", group.id, coach_id)
    return group


def update_group(group_id, name=None, coach_id=None, schedule_key=None):
    """Update group fields in place. Members are not touched."""
    group = get_group(group_id)
    previous_coach_id = group.coach_id

    new_coach_id = coach_id if coach_id is not None else group.coach_id
    new_key = schedule_key if schedule_key is not None else group.schedule_key
    if (new_coach_id, new_key) != (group.coach_id, group.schedule_key):
        _check_key_free(new_coach_id, new_key, group.id)

    if name is not None:
        group.name = name
    group.coach_id = new_coach_id
    group.schedule_key = new_key
    group.updated_at = datetime.utcnow()
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise GroupConflictError("A group with this schedule already exists for the coach")

    notify_change("training_groups", "update", group.id, group.coach_id)
    if previous_coach_id != group.coach_id:
        notify_change("training_groups", "update", group.id, previous_coach_id)
    return group


def delete_group(group_id):
    """Delete a group after detaching its members. Returns the detached student ids."""
    group = get_group(group_id)
    coach_id = group.coach_id
    detached = member_ids(group_id)
    if detached:
        Student.query.filter(Student.id.in_(detached)).update(
            {Student.training_group_id: None}, synchronize_session=False
        )
    db.session.delete(group)
    db.session.commit()

    logger.info("Deleted training group %s, detached %d students", group_id, len(detached))
    notify_change("training_groups", "delete", group_id, coach_id)
    if detached:
        notify_change("students", "update", None, coach_id)
    return detached
