from datetime import datetime
from academy.extensions import db


class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(150), nullable=False)
    contact_number = db.Column(db.String(30), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    coach_id = db.Column(
        db.Integer,
        db.ForeignKey("coaches.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # redundant with training_schedule, kept for day filters
    training_days = db.Column(db.JSON, nullable=False, default=list)
    # [{"day": "sat", "start": "16:00", "end": "18:00"}, ...]
    training_schedule = db.Column(db.JSON, nullable=False, default=list)
    training_group_id = db.Column(
        db.Integer,
        db.ForeignKey("training_groups.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    coach = db.relationship("Coach", back_populates="students")
    training_group = db.relationship("TrainingGroup", back_populates="students")
    schedule_rows = db.relationship(
        "StudentTrainingSchedule",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="StudentTrainingSchedule.id",
    )

    def __repr__(self):
        return f"<Student {self.id} {self.full_name}>"
