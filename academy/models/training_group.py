from datetime import datetime
from academy.extensions import db


class TrainingGroup(db.Model):
    __tablename__ = "training_groups"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id"), nullable=False)
    # see academy.scheduling.codec
    schedule_key = db.Column(db.String(255), nullable=False, default="")
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    coach = db.relationship("Coach", back_populates="training_groups")
    students = db.relationship("Student", back_populates="training_group", lazy="select")

    __table_args__ = (
        db.UniqueConstraint("coach_id", "schedule_key", name="uq_training_groups_coach_schedule"),
        db.Index("idx_training_groups_coach_id", "coach_id"),
    )

    def __repr__(self):
        return f"<TrainingGroup {self.id} {self.name!r} {self.schedule_key!r}>"
