from .coach import Coach
from .student import Student
from .training_group import TrainingGroup
from .student_training_schedule import StudentTrainingSchedule
from .training_session import TrainingSession

__all__ = [
    "Coach",
    "Student",
    "TrainingGroup",
    "StudentTrainingSchedule",
    "TrainingSession",
]
