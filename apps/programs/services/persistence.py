"""
Conversion of database failures into domain errors.

Every read or write against the store can fail independently (timeout,
lost connection, constraint violation). Services wrap each call so that a
failure surfaces once, as ``PersistenceError``, with the underlying cause
in the message. Nothing is retried.
"""

from contextlib import contextmanager
from typing import Optional

from django.db import DatabaseError, IntegrityError

from config.logging_setup import get_logger

from .exceptions import PersistenceError, ProgramsServiceError

logger = get_logger(__name__)


@contextmanager
def persistence_guard(action: str, *, on_conflict: Optional[ProgramsServiceError] = None, **context):
    """
    Re-raise database errors from the wrapped block as domain errors.

    Args:
        action: What was being attempted, e.g. ``"check registration"``
        on_conflict: Raised instead when the store reports a uniqueness
            violation (``IntegrityError``)
        **context: Extra key/values for the log event
    """
    try:
        yield
    except IntegrityError as exc:
        if on_conflict is not None:
            logger.info("persistence_conflict", action=action, **context)
            raise on_conflict from exc
        logger.exception("persistence_failed", action=action, **context)
        raise PersistenceError(f"Failed to {action}: {exc}") from exc
    except DatabaseError as exc:
        logger.exception("persistence_failed", action=action, **context)
        raise PersistenceError(f"Failed to {action}: {exc}") from exc
