from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from academy.errors import ScheduleValidationError
from academy.models import Coach, TrainingGroup
from academy.schemas import TrainingGroupSchema, GroupFormSchema
from academy.scheduling.codec import key_has_day, slot_for_day
from academy.scheduling.days import normalize_day_code
from academy.scheduling.group_editor import form_state, save_group
from academy.scheduling.groups import delete_group, get_group
from academy.scheduling.reconciler import sync_all_students_to_groups

groups_bp = Blueprint("groups", __name__)

group_schema = TrainingGroupSchema()
groups_schema = TrainingGroupSchema(many=True)
group_form_schema = GroupFormSchema()


def _visible_groups(coach_id=None):
    query = TrainingGroup.query.join(Coach)
    if coach_id is not None:
        query = query.filter(TrainingGroup.coach_id == coach_id)
    groups = query.order_by(TrainingGroup.name).all()
    # front desk staff never run a group
    return [group for group in groups if group.coach.runs_groups]


def _saved_response(result, msg, status):
    group = get_group(result.group_id)
    body = {
        "msg": msg,
        "success": True,
        "group": group_schema.dump(group),
        "result": result.to_dict(),
        "warnings": [warning.to_dict() for warning in result.warnings],
    }
    if result.warnings:
        body["msg"] = f"{msg}, but failed to update some students"
    return jsonify(body), status


@groups_bp.route("", methods=["GET"])
@jwt_required()
def list_groups():
    coach_id = request.args.get("coach_id", type=int)
    return jsonify(groups_schema.dump(_visible_groups(coach_id)))


@groups_bp.route("/<int:group_id>", methods=["GET"])
@jwt_required()
def get_group_details(group_id):
    group = get_group(group_id)
    body = group_schema.dump(group)
    body["form"] = form_state(
        group,
        default_start=current_app.config["DEFAULT_GROUP_START"],
        default_duration=current_app.config["DEFAULT_GROUP_DURATION"],
    )
    return jsonify(body)


@groups_bp.route("", methods=["POST"])
@jwt_required()
def create_group():
    edit = group_form_schema.load(request.get_json() or {})
    result = save_group(edit)
    return _saved_response(result, "Group created successfully", 201)


@groups_bp.route("/<int:group_id>", methods=["PUT"])
@jwt_required()
def update_group(group_id):
    group = get_group(group_id)
    edit = group_form_schema.load(request.get_json() or {})
    result = save_group(edit, group)
    return _saved_response(result, "Group updated successfully", 200)


@groups_bp.route("/<int:group_id>", methods=["DELETE"])
@jwt_required()
def remove_group(group_id):
    detached = delete_group(group_id)
    return jsonify({"msg": "Group deleted", "success": True, "detached_ids": detached}), 200


@groups_bp.route("/day/<day>", methods=["GET"])
@jwt_required()
def groups_for_day(day):
    """Calendar view: groups training on ``day`` with that day's slot."""
    try:
        code = normalize_day_code(day)
    except ValueError:
        raise ScheduleValidationError(f"Invalid day: {day}")

    coach_id = request.args.get("coach_id", type=int)
    events = []
    for group in _visible_groups(coach_id):
        if not key_has_day(group.schedule_key, code):
            continue
        event = group_schema.dump(group)
        event["slot"] = slot_for_day(group.schedule_key, code)
        events.append(event)
    events.sort(key=lambda e: ((e["slot"] or {}).get("start") or "", e["name"]))
    return jsonify(events)


@groups_bp.route("/sync", methods=["POST"])
@jwt_required()
def sync_groups():
    """Re-point every student at the group matching its coach and schedule."""
    result = sync_all_students_to_groups()
    if not result.success:
        current_app.logger.error(f"Group sync failed: {result.error}")
        return jsonify({"msg": "Group sync failed", **result.to_dict()}), 500
    return jsonify({"msg": f"Synced {result.count} students", **result.to_dict()}), 200
