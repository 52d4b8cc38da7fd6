from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required

from academy.models import Student, StudentTrainingSchedule
from academy.schemas import StudentSchema, StudentFormSchema, ScheduleRowSchema
from academy.services.student_service import delete_student, get_student, save_student

students_bp = Blueprint("students", __name__)

student_schema = StudentSchema()
students_schema = StudentSchema(many=True)
student_form_schema = StudentFormSchema()
schedule_rows_schema = ScheduleRowSchema(many=True)


def _saved_response(student, projection, msg, status):
    body = {
        "msg": msg,
        "success": True,
        "student": student_schema.dump(student),
        "projection": projection.to_dict(),
        "warnings": [warning.to_dict() for warning in projection.warnings],
    }
    if projection.warnings:
        body["msg"] = f"{msg}, but some schedule updates failed and may need a retry"
    return jsonify(body), status


@students_bp.route("", methods=["GET"])
@jwt_required()
def list_students():
    query = Student.query
    coach_id = request.args.get("coach_id", type=int)
    group_id = request.args.get("group_id", type=int)
    if coach_id is not None:
        query = query.filter_by(coach_id=coach_id)
    if group_id is not None:
        query = query.filter_by(training_group_id=group_id)
    return jsonify(students_schema.dump(query.order_by(Student.full_name).all()))


@students_bp.route("", methods=["POST"])
@jwt_required()
def create_student():
    form = student_form_schema.load(request.get_json() or {})
    student, projection = save_student(form)
    current_app.logger.info(f"Student {student.id} created with key {projection.schedule_key!r}")
    return _saved_response(student, projection, "Gymnast added successfully", 201)


@students_bp.route("/<int:student_id>", methods=["GET"])
@jwt_required()
def get_student_details(student_id):
    return jsonify(student_schema.dump(get_student(student_id)))


@students_bp.route("/<int:student_id>", methods=["PUT"])
@jwt_required()
def update_student(student_id):
    student = get_student(student_id)
    form = student_form_schema.load(request.get_json() or {})
    student, projection = save_student(form, student)
    return _saved_response(student, projection, "Gymnast updated successfully", 200)


@students_bp.route("/<int:student_id>", methods=["DELETE"])
@jwt_required()
def remove_student(student_id):
    delete_student(student_id)
    return jsonify({"msg": "Gymnast deleted", "success": True}), 200


@students_bp.route("/<int:student_id>/schedule", methods=["GET"])
@jwt_required()
def student_schedule_rows(student_id):
    get_student(student_id)
    rows = StudentTrainingSchedule.query.filter_by(student_id=student_id).order_by(StudentTrainingSchedule.id).all()
    return jsonify(schedule_rows_schema.dump(rows))
