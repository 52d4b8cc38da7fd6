from academy.extensions import socketio
from academy.scheduling.groups import resolve_or_create


def _changes(client):
    return [packet["args"][0] for packet in client.get_received() if packet["name"] == "table_changed"]


def test_subscribers_hear_about_new_groups(app, make_coach):
    coach = make_coach()
    everything = socketio.test_client(app)
    this_coach = socketio.test_client(app)
    other_coach = socketio.test_client(app)

    assert everything.emit("subscribe", {"table": "training_groups"}, callback=True)["success"]
    this_coach.emit("subscribe", {"table": "training_groups", "coach_id": coach.id}, callback=True)
    other_coach.emit("subscribe", {"table": "training_groups", "coach_id": coach.id + 1}, callback=True)

    group_id = resolve_or_create(coach.id, "sat:16:00:18:00", "SAT 4 PM")

    expected = {"table": "training_groups", "action": "insert", "id": group_id, "coach_id": coach.id}
    assert _changes(everything) == [expected]
    assert _changes(this_coach) == [expected]
    assert _changes(other_coach) == []


def test_unknown_table_is_refused(app):
    client = socketio.test_client(app)
    ack = client.emit("subscribe", {"table": "payments"}, callback=True)
    assert ack == {"success": False, "msg": "Unknown table"}
