from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .codec import encode_schedule_key, end_time_after, normalize_time
from .days import normalize_day_code, week_index


class ScheduleSlot(BaseModel):
    """One weekly training slot: a day code with start and end times."""

    model_config = ConfigDict(frozen=True)

    day: str
    start: str
    end: str

    @field_validator("day", mode="before")
    @classmethod
    def _day_code(cls, value):
        return normalize_day_code(value)

    @field_validator("start", "end", mode="before")
    @classmethod
    def _padded_time(cls, value):
        return normalize_time(value)

    def as_dict(self) -> Dict[str, str]:
        return {"day": self.day, "start": self.start, "end": self.end}


class WeeklySchedule(BaseModel):
    """A set of slots with at most one per day, kept in week order.

    Equality and hashing are by value, so two schedules built from the same
    slots in any order compare equal. ``key`` is the persisted form.
    """

    model_config = ConfigDict(frozen=True)

    slots: Tuple[ScheduleSlot, ...] = ()

    @field_validator("slots", mode="after")
    @classmethod
    def _one_slot_per_day(cls, slots):
        days = [slot.day for slot in slots]
        duplicates = sorted({day for day in days if days.count(day) > 1})
        if duplicates:
            raise ValueError(f"Only one slot per day is allowed: {', '.join(duplicates)}")
        return tuple(sorted(slots, key=lambda slot: week_index(slot.day)))

    @classmethod
    def from_entries(cls, entries) -> "WeeklySchedule":
        slots = []
        for entry in entries or []:
            if isinstance(entry, ScheduleSlot):
                slots.append(entry)
            else:
                slots.append(ScheduleSlot(day=entry["day"], start=entry["start"], end=entry["end"]))
        return cls(slots=tuple(slots))

    @property
    def key(self) -> str:
        return encode_schedule_key(self.slots)

    @property
    def days(self) -> List[str]:
        return [slot.day for slot in self.slots]

    def as_training_schedule(self) -> List[Dict[str, str]]:
        return [slot.as_dict() for slot in self.slots]

    def __len__(self):
        return len(self.slots)

    def __bool__(self):
        return bool(self.slots)


class DayOverride(BaseModel):
    start: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0, le=1440)

    @field_validator("start", mode="before")
    @classmethod
    def _padded_time(cls, value):
        return None if value is None else normalize_time(value)


class GroupEdit(BaseModel):
    """Validated contents of the group form."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    coach_id: int
    days: Tuple[str, ...] = Field(min_length=1)
    start_time: str = "16:00"
    duration: int = Field(default=60, gt=0, le=1440)
    day_overrides: Dict[str, DayOverride] = Field(default_factory=dict)
    student_ids: Tuple[int, ...] = ()

    @field_validator("days", mode="before")
    @classmethod
    def _day_codes(cls, value):
        codes = []
        for day in value or ():
            code = normalize_day_code(day)
            if code not in codes:
                codes.append(code)
        return tuple(sorted(codes, key=week_index))

    @field_validator("start_time", mode="before")
    @classmethod
    def _padded_time(cls, value):
        return normalize_time(value)

    @field_validator("day_overrides", mode="before")
    @classmethod
    def _override_codes(cls, value):
        return {normalize_day_code(day): override for day, override in (value or {}).items()}

    @field_validator("student_ids", mode="before")
    @classmethod
    def _unique_ids(cls, value):
        return tuple(dict.fromkeys(value or ()))

    def slots(self) -> Tuple[ScheduleSlot, ...]:
        """One slot per selected day, end time wrapping past midnight."""
        slots = []
        for day in self.days:
            override = self.day_overrides.get(day)
            start = (override and override.start) or self.start_time
            duration = (override and override.duration) or self.duration
            slots.append(ScheduleSlot(day=day, start=start, end=end_time_after(start, duration)))
        return tuple(slots)

    def schedule(self) -> WeeklySchedule:
        return WeeklySchedule(slots=self.slots())
