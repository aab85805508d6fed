"""
Error taxonomy shared by repositories, services and API handlers.

Every error carries the HTTP status it maps to, so handlers can turn any
``AppError`` into the ``{"error": {"message": ...}}`` envelope without a
lookup table.
"""
import logging

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# SQLSTATE codes reported by PostgreSQL drivers
UNIQUE_VIOLATION = '23505'
FOREIGN_KEY_VIOLATION = '23503'


class AppError(Exception):
    status_code = 500
    kind = 'internal'
    default_message = 'An unexpected error occurred'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(AppError):
    status_code = 400
    kind = 'validation'
    default_message = 'Invalid input'


class ConflictError(AppError):
    # Surfaced to clients like a validation failure
    status_code = 400
    kind = 'conflict'
    default_message = 'Record already exists'


class ReferentialError(ConflictError):
    default_message = 'Referenced record does not exist'


class NotFoundError(AppError):
    status_code = 404
    kind = 'not_found'

    def __init__(self, resource='Resource'):
        super().__init__(f'{resource} not found')


class Unauthenticated(AppError):
    status_code = 401
    kind = 'unauthenticated'
    default_message = 'Authentication required'


class PermissionDenied(AppError):
    status_code = 403
    kind = 'forbidden'
    default_message = 'Permission denied'


def _sqlstate(exc):
    orig = getattr(exc, 'orig', None)
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, 'pgcode', None) or getattr(orig, 'sqlstate', None)


def translate_integrity_error(exc: IntegrityError) -> AppError:
    """Map a store constraint violation onto the error taxonomy."""
    code = _sqlstate(exc)
    text = str(getattr(exc, 'orig', exc)).upper()

    if code == UNIQUE_VIOLATION or 'UNIQUE CONSTRAINT' in text:
        return ConflictError()
    if code == FOREIGN_KEY_VIOLATION or 'FOREIGN KEY CONSTRAINT' in text:
        return ReferentialError()

    logger.warning(f"Unclassified integrity error: {exc}")
    return ConflictError('Operation violates a data constraint')
