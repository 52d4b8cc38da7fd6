from .coach import CoachSchema, CoachFormSchema
from .student import StudentSchema, StudentFormSchema, ScheduleRowSchema
from .training_group import TrainingGroupSchema, GroupFormSchema
from .training_session import TrainingSessionSchema

__all__ = [
    "CoachSchema", "CoachFormSchema",
    "StudentSchema", "StudentFormSchema", "ScheduleRowSchema",
    "TrainingGroupSchema", "GroupFormSchema",
    "TrainingSessionSchema",
]
