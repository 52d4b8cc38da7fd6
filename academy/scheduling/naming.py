from datetime import datetime


def _hour_label(time_start):
    """``"16:00"`` or ``"2000-01-01T16:00:00"`` -> ``"4 PM"``."""
    value = time_start.strip()
    if "T" in value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        parsed = datetime.strptime(value[:5], "%H:%M")
    hour = parsed.hour % 12 or 12
    return f"{hour} {'AM' if parsed.hour < 12 else 'PM'}"


def generate_group_name(days, time_start):
    """Advisory label for an auto-created group, e.g. ``"SAT/MON 4 PM"``.

    Unparseable start times are used verbatim.
    """
    day_label = "/".join(day[:3].upper() for day in (days or []))

    time_label = ""
    if time_start:
        try:
            time_label = _hour_label(time_start)
        except ValueError:
            time_label = time_start

    return f"{day_label} {time_label}".strip()
