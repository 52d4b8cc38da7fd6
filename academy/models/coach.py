from datetime import datetime
from academy.extensions import db

COACHES_TABLE = "coaches"

# staff roles that never run a training group
NON_COACHING_ROLES = ("reception", "receptionist", "cleaner")


class Coach(db.Model):
    __tablename__ = COACHES_TABLE

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(150), nullable=False)
    role = db.Column(
        db.String(20),
        db.CheckConstraint("role IN ('coach','head_coach','reception','cleaner')"),
        nullable=False,
        default="coach",
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    students = db.relationship("Student", back_populates="coach", lazy="dynamic")
    training_groups = db.relationship("TrainingGroup", back_populates="coach", lazy="dynamic")
    training_sessions = db.relationship(
        "TrainingSession",
        back_populates="coach",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    @property
    def runs_groups(self):
        return (self.role or "").lower().strip() not in NON_COACHING_ROLES

    def __repr__(self):
        return f"<Coach {self.id} {self.full_name}>"
