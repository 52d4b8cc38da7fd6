from academy.extensions import db


class StudentTrainingSchedule(db.Model):
    """One row per day a student trains, mirrors ``Student.training_schedule``."""

    __tablename__ = "student_training_schedule"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day_of_week = db.Column(db.String(3), nullable=False)  # sat..fri
    start_time = db.Column(db.String(5), nullable=False)
    end_time = db.Column(db.String(5), nullable=False)

    student = db.relationship("Student", back_populates="schedule_rows")

    __table_args__ = (
        db.Index("idx_student_training_schedule_day", "day_of_week"),
    )
