"""
Generic table access.

A repository is one :class:`Repository` instance composed with an
:class:`EntityConfig` describing the table: which columns the free-text search
looks at, which query-string filters map to which columns, how to sort by
default and which parent rows must exist before a row may point at them.
Nothing here reads request state; the session is handed in by the caller.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import sqlalchemy as sa
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from models.base import utcnow
from utils.errors import NotFoundError, ReferentialError, ValidationFailed, translate_integrity_error
from utils.pagination import ListParams, Page, SORT_ASC, paginate

logger = logging.getLogger(__name__)

TRUE_VALUES = {'true', '1', 'yes'}
FALSE_VALUES = {'false', '0', 'no'}


@dataclass(frozen=True)
class EntityConfig:
    model: type
    resource: str
    search_fields: tuple = ()
    # query-string name -> column attribute
    filters: dict = field(default_factory=dict)
    default_sort: str = 'created_at'
    # foreign-key column -> (parent model, label used in messages)
    references: dict = field(default_factory=dict)
    # (session, entity) -> dict of derived attributes
    relations: Optional[Callable] = None


class Repository:
    def __init__(self, session, config: EntityConfig):
        self.session = session
        self.config = config

    @property
    def model(self):
        return self.config.model

    def query(self, include_deleted=False):
        query = self.session.query(self.model)
        if not include_deleted:
            query = query.filter(self.model.deleted_at.is_(None))
        return query

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def find_all_paginated(self, params: ListParams) -> Page:
        query = self.query()
        query = self._apply_search(query, params.search)
        query = self._apply_filters(query, params.filters)
        query = query.order_by(self._sort_clause(params.sort_by, params.sort_order))
        return paginate(query, params)

    def find_by_id(self, id, include_deleted=False):
        if not id:
            return None
        return self.query(include_deleted).filter(self.model.id == str(id)).first()

    def find_by_id_with_relations(self, id):
        entity = self.find_by_id(id)
        if entity is None:
            return None
        extras = self.config.relations(self.session, entity) if self.config.relations else {}
        return entity, extras

    def find_one_by(self, **criteria):
        return self.query().filter_by(**criteria).first()

    def search(self, term, limit=10):
        """
        Quick lookup over the same columns the list search uses, oldest
        first. For clients that is name, email and company name.
        """
        query = self._apply_search(self.query(), term)
        return query.order_by(self._sort_clause(None, SORT_ASC)).limit(limit).all()

    def count(self, *criteria):
        return self.query().filter(*criteria).order_by(None).count()

    def distinct_values(self, column_name):
        column = getattr(self.model, column_name)
        rows = (
            self.session.query(column)
            .filter(self.model.deleted_at.is_(None), column.isnot(None))
            .distinct()
            .order_by(column)
            .all()
        )
        return [row[0] for row in rows]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, values):
        self._check_references(values)
        entity = self.model(**values)
        self.session.add(entity)
        self._commit()
        return entity

    def update(self, id, values):
        entity = self.find_by_id(id)
        if entity is None:
            raise NotFoundError(self.config.resource)

        self._check_references(values)
        for key, value in values.items():
            if hasattr(self.model, key):
                setattr(entity, key, value)

        self._commit()
        return entity

    def soft_delete(self, id):
        entity = self.find_by_id(id)
        if entity is None:
            raise NotFoundError(self.config.resource)
        entity.deleted_at = utcnow()
        self._commit()

    def restore(self, id):
        entity = self.find_by_id(id, include_deleted=True)
        if entity is None:
            raise NotFoundError(self.config.resource)
        entity.deleted_at = None
        self._commit()
        return entity

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _apply_search(self, query, term):
        if not term or not self.config.search_fields:
            return query
        clauses = [
            getattr(self.model, name).icontains(term, autoescape=True)
            for name in self.config.search_fields
        ]
        return query.filter(or_(*clauses))

    def _apply_filters(self, query, filters):
        for name, raw in (filters or {}).items():
            column_name = self.config.filters.get(name)
            if column_name is None:
                continue
            column = getattr(self.model, column_name)
            query = query.filter(column == self._coerce_filter(name, column, raw))
        return query

    def _coerce_filter(self, name, column, raw):
        column_type = column.type
        if isinstance(column_type, sa.Enum) and column_type.enum_class is not None:
            try:
                return column_type.enum_class(raw)
            except ValueError:
                raise ValidationFailed(f'Invalid {name} filter: {raw}')
        if isinstance(column_type, sa.Boolean):
            if isinstance(raw, bool):
                return raw
            lowered = str(raw).lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise ValidationFailed(f'Invalid {name} filter: {raw}')
        return raw

    def _sort_clause(self, sort_by, sort_order):
        sortable = set(self.model.__table__.columns.keys()) - {'deleted_at'}
        if sort_by not in sortable:
            sort_by = self.config.default_sort
        column = getattr(self.model, sort_by)
        return column.asc() if sort_order == SORT_ASC else column.desc()

    def _check_references(self, values):
        for column_name, (parent_model, label) in self.config.references.items():
            parent_id = values.get(column_name)
            if parent_id is None:
                continue
            exists = (
                self.session.query(parent_model.id)
                .filter(parent_model.id == str(parent_id), parent_model.deleted_at.is_(None))
                .first()
            )
            if exists is None:
                raise ReferentialError(f'Referenced {label} does not exist')

    def _commit(self):
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise translate_integrity_error(exc) from exc
        except SQLAlchemyError:
            self.session.rollback()
            raise


@dataclass(frozen=True)
class JoinConfig:
    model: type
    parent_field: str
    resource: str


class JoinRepository:
    """Access to an employee assignment table keyed by (parent, employee)."""

    def __init__(self, session, config: JoinConfig):
        self.session = session
        self.config = config

    @property
    def model(self):
        return self.config.model

    @property
    def parent_column(self):
        return getattr(self.model, self.config.parent_field)

    def _pair(self, parent_id, employee_id):
        return self.session.query(self.model).filter(
            self.parent_column == parent_id,
            self.model.employee_id == employee_id,
        )

    def find_by_parent(self, parent_id):
        return (
            self.session.query(self.model)
            .options(joinedload(self.model.employee))
            .filter(self.parent_column == parent_id)
            .order_by(self.model.assigned_at.desc())
            .all()
        )

    def find(self, parent_id, employee_id):
        return self._pair(parent_id, employee_id).first()

    def add(self, values):
        row = self.model(**values)
        self.session.add(row)
        self._commit()
        return row

    def update(self, parent_id, employee_id, values):
        row = self.find(parent_id, employee_id)
        if row is None:
            raise NotFoundError(self.config.resource)
        for key, value in values.items():
            setattr(row, key, value)
        self._commit()
        return row

    def remove(self, parent_id, employee_id):
        deleted = self._pair(parent_id, employee_id).delete(synchronize_session=False)
        self._commit()
        return deleted > 0

    def _commit(self):
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise translate_integrity_error(exc) from exc
        except SQLAlchemyError:
            self.session.rollback()
            raise
