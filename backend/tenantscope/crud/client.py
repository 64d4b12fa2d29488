"""
Generic ORM-style data-access client over a SQLAlchemy session.

Operations take Prisma-shaped arguments: ``where`` is a mapping of column
to value (equality only), ``data`` is a mapping of column to value, and
``order_by`` maps a column to ``"asc"`` or ``"desc"``. The tenant-scoping
wrapper in ``tenantscope.tenancy.scoping`` decorates exactly this surface.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tenantscope.crud.errors import RecordNotFound
from tenantscope.models.posts import Post
from tenantscope.models.tenants import Tenant

Where = Mapping[str, Any]
Data = Mapping[str, Any]
OrderBy = Mapping[str, str]


class ModelClient:
    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def has_column(self, name: str) -> bool:
        return name in self._column_names()

    def _column_names(self) -> set[str]:
        return {attr.key for attr in sa_inspect(self.model).column_attrs}

    def _check_fields(self, fields: Iterable[str]) -> None:
        unknown = sorted(set(fields) - self._column_names())
        if unknown:
            raise ValueError(f"{self.model_name} has no column(s): {', '.join(unknown)}")

    def _query(self, where: Optional[Where]):
        criteria = dict(where or {})
        self._check_fields(criteria)
        return self.db.query(self.model).filter_by(**criteria)

    def _ordered(self, query, order_by: Optional[OrderBy]):
        if not order_by:
            return query
        self._check_fields(order_by)
        for field, direction in order_by.items():
            column = getattr(self.model, field)
            direction = str(direction).lower()
            if direction == "asc":
                query = query.order_by(column.asc())
            elif direction == "desc":
                query = query.order_by(column.desc())
            else:
                raise ValueError(f"order_by direction must be 'asc' or 'desc', got {direction!r}")
        return query

    @contextmanager
    def _writing(self):
        try:
            yield
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def find_many(
        self,
        where: Optional[Where] = None,
        *,
        order_by: Optional[OrderBy] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> list:
        query = self._ordered(self._query(where), order_by)
        if skip:
            query = query.offset(skip)
        if take is not None:
            query = query.limit(take)
        return query.all()

    def find_first(self, where: Optional[Where] = None, *, order_by: Optional[OrderBy] = None):
        return self._ordered(self._query(where), order_by).first()

    def find_first_or_throw(self, where: Optional[Where] = None, *, order_by: Optional[OrderBy] = None):
        record = self.find_first(where, order_by=order_by)
        if record is None:
            raise RecordNotFound(self.model_name, where)
        return record

    def find_unique(self, where: Where):
        """Return the single row matching ``where`` or None.

        More than one match raises ``MultipleResultsFound``.
        """
        if not where:
            raise ValueError("find_unique requires a where clause")
        return self._query(where).one_or_none()

    def find_unique_or_throw(self, where: Where):
        record = self.find_unique(where)
        if record is None:
            raise RecordNotFound(self.model_name, where)
        return record

    def update_many(self, where: Optional[Where], data: Data) -> int:
        self._check_fields(data)
        query = self._query(where)
        with self._writing():
            count = query.update(dict(data), synchronize_session=False)
        return count

    def delete_many(self, where: Optional[Where] = None) -> int:
        query = self._query(where)
        with self._writing():
            count = query.delete(synchronize_session=False)
        return count

    def create(self, data: Data):
        self._check_fields(data)
        record = self.model(**dict(data))
        with self._writing():
            self.db.add(record)
        self.db.refresh(record)
        return record

    def create_many(self, data: Union[Data, Sequence[Data]]) -> int:
        rows = [data] if isinstance(data, Mapping) else list(data)
        for row in rows:
            self._check_fields(row)
        with self._writing():
            self.db.add_all([self.model(**dict(row)) for row in rows])
        return len(rows)

    def upsert(self, where: Where, create: Data, update: Data):
        self._check_fields(create)
        self._check_fields(update)
        existing = self.find_unique(where)
        if existing is None:
            return self.create(create)
        with self._writing():
            for key, value in update.items():
                setattr(existing, key, value)
        self.db.refresh(existing)
        return existing


class DataClient:
    """Entry point handing out one ModelClient per mapped model."""

    def __init__(self, db: Session):
        self.db = db
        self.tenant = ModelClient(db, Tenant)
        self.post = ModelClient(db, Post)

    def model(self, model) -> ModelClient:
        return ModelClient(self.db, model)
