from flask import current_app
from marshmallow import ValidationError, fields, post_load, pre_load, validate
from pydantic import ValidationError as PydanticValidationError

from academy.extensions import ma
from academy.scheduling.codec import decode_schedule_key
from academy.scheduling.types import GroupEdit

from .base import blank_to_none, pydantic_messages


class DayOverrideSchema(ma.Schema):
    start = fields.String(allow_none=True, load_default=None)
    duration = fields.Integer(allow_none=True, load_default=None, validate=validate.Range(min=1, max=1440))


class GroupFormSchema(ma.Schema):
    """Group create/edit form, loads into a GroupEdit."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    coach_id = fields.Integer(required=True)
    days = fields.List(fields.String(), required=True, validate=validate.Length(min=1))
    start_time = fields.String(allow_none=True, load_default=None)
    duration = fields.Integer(allow_none=True, load_default=None, validate=validate.Range(min=1, max=1440))
    day_overrides = fields.Dict(keys=fields.String(), values=fields.Nested(DayOverrideSchema), load_default=dict)
    student_ids = fields.List(fields.Integer(), load_default=list)

    @pre_load
    def clear_blanks(self, data, **kwargs):
        return blank_to_none(data, "start_time", "duration")

    @post_load
    def build_edit(self, data, **kwargs):
        if data.get("start_time") is None:
            data["start_time"] = current_app.config["DEFAULT_GROUP_START"]
        if data.get("duration") is None:
            data["duration"] = current_app.config["DEFAULT_GROUP_DURATION"]
        try:
            return GroupEdit(**data)
        except PydanticValidationError as exc:
            raise_form_error(exc)


def raise_form_error(exc):
    errors = {}
    for error, message in zip(exc.errors(), pydantic_messages(exc)):
        loc = error.get("loc") or ("_schema",)
        errors.setdefault(str(loc[0]), []).append(message)
    raise ValidationError(errors) from exc


class GroupMemberSchema(ma.Schema):
    id = fields.Integer()
    full_name = fields.String()


class TrainingGroupSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    name = fields.String()
    coach_id = fields.Integer()
    schedule_key = fields.String()
    coach_name = fields.Function(lambda group: group.coach.full_name if group.coach else None)
    slots = fields.Method("get_slots")
    student_count = fields.Function(lambda group: len(group.students))
    students = fields.List(fields.Nested(GroupMemberSchema))
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)

    def get_slots(self, group):
        return decode_schedule_key(group.schedule_key)
