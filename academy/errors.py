class AcademyError(Exception):
    """Base class for errors reported back to the caller."""

    status_code = 400

    def __init__(self, msg, payload=None):
        super().__init__(msg)
        self.msg = msg
        self.payload = payload or {}

    def to_dict(self):
        return {"msg": self.msg, "success": False, **self.payload}


class ScheduleValidationError(AcademyError):
    status_code = 400


class GroupConflictError(AcademyError):
    """Another group of the same coach already owns the schedule key."""

    status_code = 409


class CascadeWarning:
    """A secondary step of a save that failed after the primary write committed."""

    def __init__(self, step, msg):
        self.step = step
        self.msg = msg

    def to_dict(self):
        return {"step": self.step, "msg": self.msg}

    def __repr__(self):
        return f"CascadeWarning({self.step!r}, {self.msg!r})"


class NotFoundError(AcademyError):
    status_code = 404
