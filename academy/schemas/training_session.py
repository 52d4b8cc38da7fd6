from marshmallow import fields

from academy.extensions import ma


class TrainingSessionSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    coach_id = fields.Integer()
    day_of_week = fields.String()
    start_time = fields.String()
    end_time = fields.String()
    title = fields.String()
    capacity = fields.Integer()
