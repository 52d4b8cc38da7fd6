from marshmallow import ValidationError


def pydantic_messages(exc):
    """Flatten a pydantic ValidationError into marshmallow-style messages."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "__root__")
        message = error.get("msg", "Invalid value.")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def raise_for_field(field_name, exc):
    raise ValidationError({field_name: pydantic_messages(exc)}) from exc


def blank_to_none(data, *names):
    """Form selects send "" for "nothing selected"."""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for name in names:
        if data.get(name) == "":
            data[name] = None
    return data
