from datetime import datetime
from academy.extensions import db


class TrainingSession(db.Model):
    """A coach's recurring weekly class slot."""

    __tablename__ = "training_sessions"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id"), nullable=False, index=True)
    day_of_week = db.Column(
        db.String(10),
        db.CheckConstraint(
            "day_of_week IN ('Saturday','Sunday','Monday','Tuesday','Wednesday','Thursday','Friday')"
        ),
        nullable=False,
    )
    start_time = db.Column(db.String(5), nullable=False)
    end_time = db.Column(db.String(5), nullable=False)
    title = db.Column(db.String(150), nullable=False)
    capacity = db.Column(db.Integer, nullable=False, default=20)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    coach = db.relationship("Coach", back_populates="training_sessions")

    __table_args__ = (
        db.Index("idx_training_sessions_slot", "coach_id", "day_of_week", "start_time", "end_time"),
    )
