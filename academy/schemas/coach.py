from marshmallow import fields, validate

from academy.extensions import ma


class CoachSchema(ma.Schema):
    id = fields.Integer(dump_only=True)
    full_name = fields.String()
    role = fields.String()
    created_at = fields.DateTime(dump_only=True)


class CoachFormSchema(ma.Schema):
    full_name = fields.String(required=True, validate=validate.Length(min=2, max=150))
    role = fields.String(
        load_default="coach",
        validate=validate.OneOf(["coach", "head_coach", "reception", "cleaner"]),
    )
