"""Schedule key encoding.

A schedule key is the canonical string form of a weekly schedule::

    mon:16:00:18:00|sat:16:00:18:00

One ``day:start:end`` segment per training day, segments sorted
lexicographically and joined with ``|``. Two schedules are equal iff their
keys are equal.
"""

from .days import normalize_day_code

MINUTES_PER_DAY = 24 * 60
SEGMENT_SEPARATOR = "|"


def time_to_minutes(value):
    """Minute of day for an ``HH:MM`` string. Raises ``ValueError`` on bad input."""
    if not isinstance(value, str):
        raise ValueError(f"Invalid time: {value!r}")
    hours, sep, minutes = value.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit() or len(minutes) != 2:
        raise ValueError(f"Invalid time: {value!r}")
    hours, minutes = int(hours), int(minutes)
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time: {value!r}")
    return hours * 60 + minutes


def minutes_to_time(total):
    total %= MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def normalize_time(value):
    """Zero-padded 24-hour ``HH:MM``; ``"9:05"`` becomes ``"09:05"``."""
    return minutes_to_time(time_to_minutes(value))


def duration_minutes(start, end):
    """Length of a slot in minutes. A non-positive span is treated as crossing midnight."""
    duration = time_to_minutes(end) - time_to_minutes(start)
    if duration <= 0:
        duration += MINUTES_PER_DAY
    return duration


def end_time_after(start, duration):
    return minutes_to_time(time_to_minutes(start) + int(duration))


def _field(entry, name):
    if isinstance(entry, dict):
        return entry[name]
    return getattr(entry, name)


def _segment(entry):
    day = str(_field(entry, "day")).strip().lower()[:3]
    start, end = _field(entry, "start"), _field(entry, "end")
    # encoding never rejects legacy values, it only pads what it can parse
    try:
        start = normalize_time(start)
    except ValueError:
        pass
    try:
        end = normalize_time(end)
    except ValueError:
        pass
    return f"{day}:{start}:{end}"


def encode_schedule_key(entries):
    """Encode ``{day, start, end}`` entries (dicts or slots) into a schedule key."""
    if not entries:
        return ""
    return SEGMENT_SEPARATOR.join(sorted(_segment(entry) for entry in entries))


def decode_schedule_key(key):
    """Decode a schedule key back into ``{day, start, end}`` dicts.

    Never raises: segments that do not split into exactly five
    colon-delimited parts are skipped.
    """
    if not key or not isinstance(key, str):
        return []

    entries = []
    for part in key.split(SEGMENT_SEPARATOR):
        pieces = part.strip().split(":")
        if len(pieces) != 5 or not pieces[0]:
            continue
        day, start_h, start_m, end_h, end_m = pieces
        entries.append({
            "day": day.lower(),
            "start": f"{start_h}:{start_m}",
            "end": f"{end_h}:{end_m}",
        })
    return entries


def key_has_day(key, day):
    """True when a segment of ``key`` starts with the code of ``day``.

    Membership test for calendar views, no full decode.
    """
    if not key or not isinstance(key, str):
        return False
    try:
        code = normalize_day_code(day)
    except ValueError:
        return False
    return any(part.strip().lower().startswith(code) for part in key.split(SEGMENT_SEPARATOR))


def slot_for_day(key, day):
    """The decoded entry for ``day`` in ``key``, or ``None``."""
    try:
        code = normalize_day_code(day)
    except ValueError:
        return None
    for entry in decode_schedule_key(key):
        if entry["day"] == code:
            return entry
    return None
