from marshmallow import fields, post_load, pre_load, validate
from pydantic import ValidationError as PydanticValidationError

from academy.extensions import ma
from academy.scheduling.types import WeeklySchedule

from .base import blank_to_none, raise_for_field


class ScheduleEntrySchema(ma.Schema):
    day = fields.String(required=True)
    start = fields.String(required=True)
    end = fields.String(required=True)


class StudentFormSchema(ma.Schema):
    """Student create/edit form. ``training_schedule`` loads as a WeeklySchedule."""

    full_name = fields.String(required=True, validate=validate.Length(min=2, max=150))
    contact_number = fields.String(allow_none=True, load_default=None)
    notes = fields.String(allow_none=True, load_default=None)
    coach_id = fields.Integer(allow_none=True, load_default=None)
    training_schedule = fields.List(fields.Nested(ScheduleEntrySchema), load_default=list)

    @pre_load
    def clear_blank_coach(self, data, **kwargs):
        return blank_to_none(data, "coach_id")

    @post_load
    def build_schedule(self, data, **kwargs):
        try:
            data["training_schedule"] = WeeklySchedule.from_entries(data["training_schedule"])
        except PydanticValidationError as exc:
            raise_for_field("training_schedule", exc)
        return data


class StudentSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    full_name = fields.String()
    contact_number = fields.String(allow_none=True)
    notes = fields.String(allow_none=True)
    coach_id = fields.Integer(allow_none=True)
    training_days = fields.List(fields.String())
    training_schedule = fields.List(fields.Dict())
    training_group_id = fields.Integer(allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class ScheduleRowSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    student_id = fields.Integer()
    day_of_week = fields.String()
    start_time = fields.String()
    end_time = fields.String()
