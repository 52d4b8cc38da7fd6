"""Table change feed over Socket.IO.

Clients join a room per table (``training_groups``) or per coach filter
(``training_groups:coach_id=3``) and get a ``table_changed`` event after
each committed write. The feed only tells views to re-fetch.
"""

import logging

from flask_socketio import join_room, leave_room

from academy.extensions import socketio

logger = logging.getLogger(__name__)

WATCHED_TABLES = (
    "coaches",
    "students",
    "training_groups",
    "student_training_schedule",
    "training_sessions",
)


def room_name(table, coach_id=None):
    if coach_id is None:
        return table
    return f"{table}:coach_id={coach_id}"


def notify_change(table, action, record_id=None, coach_id=None):
    payload = {"table": table, "action": action, "id": record_id, "coach_id": coach_id}
    socketio.emit("table_changed", payload, to=room_name(table))
    if coach_id is not None:
        socketio.emit("table_changed", payload, to=room_name(table, coach_id))


def _room_from(data):
    data = data or {}
    table = data.get("table")
    if table not in WATCHED_TABLES:
        return None
    return room_name(table, data.get("coach_id"))


@socketio.on("subscribe")
def handle_subscribe(data):
    room = _room_from(data)
    if room is None:
        return {"success": False, "msg": "Unknown table"}
    join_room(room)
    logger.debug("Client subscribed to %s", room)
    return {"success": True, "room": room}


@socketio.on("unsubscribe")
def handle_unsubscribe(data):
    room = _room_from(data)
    if room is None:
        return {"success": False, "msg": "Unknown table"}
    leave_room(room)
    return {"success": True, "room": room}
