import logging

from flask import current_app

from academy.extensions import db
from academy.models import TrainingSession
from academy.realtime import notify_change

from .days import full_day_name

logger = logging.getLogger(__name__)


def find_session(coach_id, day_name, start_time, end_time):
    return (
        TrainingSession.query
        .filter_by(coach_id=coach_id, day_of_week=day_name, start_time=start_time, end_time=end_time)
        .first()
    )


def ensure_coach_sessions(coach_id, slots):
    """Create the coach's recurring session for each slot unless that exact slot exists.

    Existing sessions are never edited. Returns the sessions created.
    """
    title = current_app.config["DEFAULT_SESSION_TITLE"]
    capacity = current_app.config["DEFAULT_SESSION_CAPACITY"]

    created = []
    seen = set()
    for slot in slots:
        day_name = full_day_name(slot.day)
        slot_id = (day_name, slot.start, slot.end)
        if slot_id in seen:
            continue
        seen.add(slot_id)

        if find_session(coach_id, day_name, slot.start, slot.end) is not None:
            continue
        session = TrainingSession(
            coach_id=coach_id,
            day_of_week=day_name,
            start_time=slot.start,
            end_time=slot.end,
            title=title,
            capacity=capacity,
        )
        db.session.add(session)
        created.append(session)

    if created:
        db.session.commit()
        for session in created:
            logger.info("Created %s session for coach %s at %s-%s",
                        session.day_of_week, coach_id, session.start_time, session.end_time)
            notify_change("training_sessions", "insert", session.id, coach_id)
    return created
