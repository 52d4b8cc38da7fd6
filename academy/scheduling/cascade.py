import logging

from sqlalchemy.exc import SQLAlchemyError

from academy.errors import CascadeWarning
from academy.extensions import db

logger = logging.getLogger(__name__)


class CascadeResult:
    """Outcome of a multi-step save: the primary write succeeded, secondary steps may not have."""

    def __init__(self):
        self.warnings = []

    @property
    def complete(self):
        return not self.warnings

    def run_step(self, step, func, *args, **kwargs):
        """Run one secondary step. A database failure is rolled back and kept as a warning."""
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning("Step %s failed, earlier steps kept: %s", step, exc)
            self.warnings.append(CascadeWarning(step, str(exc)))
            return None
