"""
Base Repository implementation.

Each repository is one document collection reached through a generic query
interface: find by filter with sort/skip/limit, find-one, insert,
update-in-place and delete. Unique-index conflicts surface as
SQLAlchemy ``IntegrityError`` and are classified by the error responder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, Sequence, TypeVar

from pydantic.alias_generators import to_camel
from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session

from shared.infrastructure.db import safe_commit

from ..models.base import is_valid_id

ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class SortSpec:
    """``field:asc|desc`` with ``field`` in wire form."""

    field: str
    descending: bool = False


DEFAULT_SORT = SortSpec("createdAt", descending=True)


@dataclass
class ListQuery:
    """
    Uniform list parameters.

    Attributes:
        fields: Projection (``-`` prefix excludes); applied at serialization.
        limit: Maximum number of records; None or 0 means no limit.
        skip: Number of records to skip.
        sort: Ordering, None for store order.
        filters: Equality filters keyed by wire field name.
    """

    fields: list[str] | None = None
    limit: int | None = None
    skip: int | None = None
    sort: SortSpec | None = DEFAULT_SORT
    filters: dict[str, Any] = field(default_factory=dict)


class DocumentRepository(Generic[ModelT]):
    """
    Generic collection access.

    Subclasses set ``model``.
    """

    model: ClassVar[type]

    def __init__(self, db: Session):
        self._db = db

    @classmethod
    def wire_columns(cls) -> dict[str, Any]:
        """Map of wire field name -> mapped column attribute."""
        columns = {to_camel(attr.key): getattr(cls.model, attr.key) for attr in inspect(cls.model).column_attrs}
        columns["_id"] = cls.model.id
        return columns

    def find(self, query: ListQuery | None = None) -> Sequence[ModelT]:
        """
        Find records matching ``query.filters``.

        Filters and sort keys naming unknown fields are ignored.
        """
        query = query or ListQuery()
        columns = self.wire_columns()
        stmt = select(self.model)

        for name, value in query.filters.items():
            column = columns.get(name)
            if column is not None:
                stmt = stmt.where(column == value)

        if query.sort is not None:
            column = columns.get(query.sort.field)
            if column is not None:
                stmt = stmt.order_by(column.desc() if query.sort.descending else column.asc())

        if query.skip:
            stmt = stmt.offset(query.skip)
        if query.limit:
            stmt = stmt.limit(query.limit)

        return self._db.execute(stmt).scalars().all()

    def find_one(self, **criteria: Any) -> ModelT | None:
        """Find the first record whose attributes equal ``criteria``."""
        stmt = select(self.model).filter_by(**criteria).limit(1)
        return self._db.scalar(stmt)

    def find_by_id(self, document_id: Any) -> ModelT | None:
        """Find by id; syntactically invalid ids never match."""
        if not is_valid_id(document_id):
            return None
        return self._db.get(self.model, document_id)

    def find_by_ids(self, document_ids: Sequence[Any]) -> dict[str, ModelT]:
        """Batch lookup, keyed by id. Invalid and unknown ids are absent."""
        ids = {i for i in document_ids if is_valid_id(i)}
        if not ids:
            return {}
        stmt = select(self.model).where(self.model.id.in_(ids))
        return {record.id: record for record in self._db.execute(stmt).scalars().all()}

    def count(self) -> int:
        return self._db.scalar(select(func.count()).select_from(self.model)) or 0

    def insert(self, record: ModelT) -> ModelT:
        self._db.add(record)
        safe_commit(self._db)
        self._db.refresh(record)
        return record

    def save(self, record: ModelT) -> ModelT:
        """Persist in-place changes; ``updated_at`` is bumped by the mapper."""
        self._db.add(record)
        safe_commit(self._db)
        self._db.refresh(record)
        return record

    def delete(self, record: ModelT) -> None:
        self._db.delete(record)
        safe_commit(self._db)
