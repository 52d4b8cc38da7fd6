"""Day vocabulary shared by schedule keys, schedule rows and coach sessions.

Schedule keys and ``student_training_schedule`` rows store 3-letter lowercase
codes, ``training_sessions`` stores the full English day name. All crossings
between the two go through this table.
"""

# Academy week starts on Saturday
DAY_CODES = ("sat", "sun", "mon", "tue", "wed", "thu", "fri")

DAY_NAMES = {
    "sat": "Saturday",
    "sun": "Sunday",
    "mon": "Monday",
    "tue": "Tuesday",
    "wed": "Wednesday",
    "thu": "Thursday",
    "fri": "Friday",
}

DAY_CODES_BY_NAME = {name: code for code, name in DAY_NAMES.items()}


def normalize_day_code(value):
    """Return the 3-letter code for ``sat``, ``Sat``, ``saturday`` or ``Saturday``."""
    if not isinstance(value, str):
        raise ValueError(f"Invalid day: {value!r}")
    code = value.strip().lower()[:3]
    if code not in DAY_NAMES:
        raise ValueError(f"Invalid day: {value!r}")
    return code


def full_day_name(value):
    return DAY_NAMES[normalize_day_code(value)]


def day_code_from_name(name):
    try:
        return DAY_CODES_BY_NAME[name]
    except KeyError:
        raise ValueError(f"Invalid day name: {name!r}") from None


def week_index(code):
    return DAY_CODES.index(code)
