"""Training schedule synchronization between students, groups and coach sessions."""

from .codec import (
    decode_schedule_key,
    duration_minutes,
    encode_schedule_key,
    end_time_after,
    key_has_day,
    slot_for_day,
)
from .days import DAY_CODES, DAY_NAMES, full_day_name, normalize_day_code
from .group_editor import save_group
from .groups import delete_group, resolve_or_create, update_group
from .naming import generate_group_name
from .projector import project_student_schedule
from .reconciler import reconcile_student, sync_all_students_to_groups
from .types import GroupEdit, ScheduleSlot, WeeklySchedule
