from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from academy.extensions import db
from academy.models import Coach, TrainingGroup, TrainingSession
from academy.realtime import notify_change
from academy.schemas import CoachSchema, CoachFormSchema, TrainingGroupSchema, TrainingSessionSchema
from academy.scheduling.days import day_code_from_name, week_index

coaches_bp = Blueprint("coaches", __name__)

coach_schema = CoachSchema()
coaches_schema = CoachSchema(many=True)
coach_form_schema = CoachFormSchema()
sessions_schema = TrainingSessionSchema(many=True)
groups_schema = TrainingGroupSchema(many=True)


@coaches_bp.route("", methods=["GET"])
@jwt_required()
def list_coaches():
    coaches = Coach.query.order_by(Coach.full_name).all()
    return jsonify(coaches_schema.dump(coaches))


@coaches_bp.route("", methods=["POST"])
@jwt_required()
def create_coach():
    data = coach_form_schema.load(request.get_json() or {})
    coach = Coach(**data)
    db.session.add(coach)
    db.session.commit()
    current_app.logger.info(f"Coach {coach.id} created")
    notify_change("coaches", "insert", coach.id)
    return jsonify({"msg": "Coach created", "success": True, "coach": coach_schema.dump(coach)}), 201


@coaches_bp.route("/<int:coach_id>", methods=["GET"])
@jwt_required()
def get_coach(coach_id):
    coach = db.get_or_404(Coach, coach_id)
    return jsonify(coach_schema.dump(coach))


@coaches_bp.route("/<int:coach_id>/sessions", methods=["GET"])
@jwt_required()
def coach_sessions(coach_id):
    """The coach's recurring weekly classes."""
    db.get_or_404(Coach, coach_id)
    sessions = TrainingSession.query.filter_by(coach_id=coach_id).all()
    # academy week order
    sessions.sort(key=lambda s: (week_index(day_code_from_name(s.day_of_week)), s.start_time))
    return jsonify(sessions_schema.dump(sessions))


@coaches_bp.route("/<int:coach_id>/groups", methods=["GET"])
@jwt_required()
def coach_groups(coach_id):
    db.get_or_404(Coach, coach_id)
    groups = TrainingGroup.query.filter_by(coach_id=coach_id).order_by(TrainingGroup.name).all()
    return jsonify(groups_schema.dump(groups))
