"""
Shared service behaviour: validate, normalize, delegate, report.

Services never let expected failures escape as exceptions. Validation and
constraint problems come back as a failed :class:`ServiceResult` carrying the
first violated rule's message; unexpected store errors are logged here and
reported with a fixed "Failed to <action> <entity>" message.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from repositories.base import Repository
from utils.errors import AppError
from utils.normalize import blank_to_null

logger = logging.getLogger(__name__)


@dataclass
class ServiceResult:
    success: bool
    data: Any = None
    error: Optional[str] = None
    kind: Optional[str] = None

    @classmethod
    def ok(cls, data=None):
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error, kind='validation'):
        return cls(success=False, error=error, kind=kind)

    @classmethod
    def from_error(cls, exc: AppError):
        return cls(success=False, error=exc.message, kind=exc.kind)


class EntityService:
    """
    CRUD service over one :class:`Repository`.

    Subclasses only name their config, input schema and entity label.
    """
    config = None
    input_schema = None
    entity_name = 'record'

    def __init__(self, session):
        self.session = session
        self.repository = Repository(session, self.config)

    # Reads pass straight through
    def list(self, params):
        return self.repository.find_all_paginated(params)

    def get(self, id):
        return self.repository.find_by_id(id)

    def get_with_relations(self, id):
        return self.repository.find_by_id_with_relations(id)

    # Writes
    def create(self, payload):
        values, error = self.validate(payload)
        if error:
            return error
        return self._write('create', lambda: self.repository.create(values))

    def update(self, id, payload):
        values, error = self.validate(payload, partial=True)
        if error:
            return error
        return self._write('update', lambda: self.repository.update(id, values))

    def delete(self, id):
        return self._write('delete', lambda: self.repository.soft_delete(id))

    def validate(self, payload, partial=False):
        return load_input(self.input_schema, payload, partial=partial, label=self.entity_name)

    def _write(self, action, operation):
        return run_write(f'{action} {self.entity_name}', operation)


def load_input(schema_cls, payload, partial=False, label='record'):
    """Return ``(values, None)`` or ``(None, failed result)``."""
    if not isinstance(payload, dict):
        return None, ServiceResult.fail('Invalid request body')

    schema = schema_cls()
    data = blank_to_null(payload, keep=schema.required_fields())
    try:
        return schema.load(data, partial=partial), None
    except ValidationError as err:
        message = schema.first_error(err.messages)
        logger.info(f"{label} validation failed: {message}")
        return None, ServiceResult.fail(message)


def run_write(description, operation):
    """
    Run a repository write and fold its outcome into a result. Typed errors
    keep their message; anything else from the store becomes
    "Failed to <description>".
    """
    try:
        return ServiceResult.ok(operation())
    except AppError as exc:
        return ServiceResult.from_error(exc)
    except SQLAlchemyError as exc:
        logger.error(f"Error during {description}: {exc}")
        return ServiceResult.fail(f'Failed to {description}', kind='internal')
