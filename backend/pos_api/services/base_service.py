"""
Base Service for document resources.

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Every resource operation runs the same pipeline:
- list: role check, resource filters, row-level scoping, find, projection, hydration
- get: role check, id syntax, existence
- create: role check, schema validation, aggregate checks, insert
- update: role check, id syntax, mutable-field whitelist, existence, validation
  of the merged document, persist
- delete: role check, id syntax, existence, delete

Usage:
    class TableService(ResourceService[Table]):
        resource = Resource.TABLE
        repository_class = TableRepository
        create_schema = TableCreate
        output_schema = TableOutput
        mutable_fields = frozenset({"name"})
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Sequence, TypeVar

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from shared.utils.exceptions import (
    NotFoundError,
    ValidationError,
    field_label,
    validation_error_from_pydantic,
)

from ..models.base import is_valid_id
from ..repositories import DocumentRepository, ListQuery
from ..schemas import DocumentInput, DocumentOutput
from .permissions import Action, PermissionContext, Resource

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class Reference:
    """
    A field holding the id of a document in another collection.

    On serialization the id is replaced by ``{"_id", *projection}`` of the
    referenced document, or None when it no longer exists.
    """

    field: str
    repository_class: type[DocumentRepository]
    projection: tuple[str, ...]


def project(document: dict[str, Any], fields: Sequence[str] | None) -> dict[str, Any]:
    """
    Apply a field projection to a serialized document.

    Plain names select fields (``_id`` is always kept unless excluded), names
    with a ``-`` prefix drop them. Unknown names are ignored.
    """
    if not fields:
        return document

    excluded = {name[1:] for name in fields if name.startswith("-")}
    included = [name for name in fields if not name.startswith("-")]

    if included:
        keep = ({"_id"} | set(included)) - excluded
        return {key: value for key, value in document.items() if key in keep}
    return {key: value for key, value in document.items() if key not in excluded}


class ResourceService(Generic[ModelT]):
    """
    Generic CRUD service for one resource collection.

    Subclasses declare the resource, its repository and schemas, the wire
    names of mutable fields, list filters and references, and may override
    the ``_check_document`` / ``_to_columns`` / ``_prepare_create`` hooks.
    """

    resource: ClassVar[Resource]
    repository_class: ClassVar[type[DocumentRepository]]
    create_schema: ClassVar[type[DocumentInput]]
    output_schema: ClassVar[type[DocumentOutput]]
    mutable_fields: ClassVar[frozenset[str]] = frozenset()
    list_filters: ClassVar[frozenset[str]] = frozenset()
    references: ClassVar[tuple[Reference, ...]] = ()

    def __init__(self, db: Session):
        self._db = db
        self._repo = self.repository_class(db)

    @property
    def db(self) -> Session:
        return self._db

    @property
    def repo(self) -> DocumentRepository:
        return self._repo

    @property
    def name(self) -> str:
        """Human-readable resource name for messages."""
        return self.resource.value

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_all(self, ctx: PermissionContext, query: ListQuery) -> list[dict[str, Any]]:
        """
        List documents. Filters not declared for this resource are dropped;
        row-level scoping is applied last so it cannot be overridden.
        """
        ctx.require(Action.LIST, self.resource)

        filters = {key: value for key, value in query.filters.items() if key in self.list_filters}
        query.filters = ctx.scope_filters(self.resource, filters)

        records = self._repo.find(query)
        return self.to_documents(records, query.fields)

    def get(
        self,
        ctx: PermissionContext,
        document_id: str,
        fields: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: Invalid id, no such document, or outside the
                caller's row scope.
        """
        ctx.require(Action.READ, self.resource)
        record = self.get_record(document_id)

        scoped = ctx.scope_filters(self.resource, {})
        for key, value in scoped.items():
            if getattr(record, self._repo.wire_columns()[key].key) != value:
                raise NotFoundError(self.name)

        return self.to_document(record, fields)

    def get_record(self, document_id: str) -> ModelT:
        if not is_valid_id(document_id):
            raise NotFoundError(self.name, document_id=document_id)
        record = self._repo.find_by_id(document_id)
        if record is None:
            raise NotFoundError(self.name, document_id=document_id)
        return record

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, ctx: PermissionContext, data: dict[str, Any]) -> dict[str, Any]:
        """
        Validate and insert a new document.

        Raises:
            AuthorizationError: Role may not create this resource.
            ValidationError: One message per invalid field.
            IntegrityError: Unique field conflict (classified as DuplicateKeyError).
        """
        ctx.require(Action.CREATE, self.resource)

        values = self._validate(self._prepare_create(ctx, data))
        record = self._insert(self.repository_class.model(**values))

        logger.info(f"Created {self.name}", document_id=record.id, admin_id=ctx.admin_id)
        return self.to_document(record)

    def update(
        self,
        ctx: PermissionContext,
        document_id: str,
        changes: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Partial update restricted to ``mutable_fields``.

        Any field outside the whitelist rejects the whole update before
        anything is applied.
        """
        ctx.require(Action.UPDATE, self.resource)
        if not is_valid_id(document_id):
            raise NotFoundError(self.name, document_id=document_id)
        self.check_mutable(changes)

        record = self.get_record(document_id)
        self.apply_changes(record, changes)
        record = self._repo.save(record)

        logger.info(
            f"Updated {self.name}",
            document_id=record.id,
            admin_id=ctx.admin_id,
            fields=sorted(changes),
        )
        return self.to_document(record)

    def delete(self, ctx: PermissionContext, document_id: str) -> None:
        ctx.require(Action.DELETE, self.resource)
        record = self.get_record(document_id)
        self._repo.delete(record)
        logger.info(f"Deleted {self.name}", document_id=document_id, admin_id=ctx.admin_id)

    def check_mutable(self, changes: dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: One "<Field> cannot be modified." per rejected field.
        """
        rejected = [key for key in changes if key not in self.mutable_fields]
        if rejected:
            raise ValidationError({key: f"{field_label(key)} cannot be modified." for key in rejected})

    def apply_changes(self, record: ModelT, changes: dict[str, Any]) -> None:
        """
        Validate the document as it would look after the change, then set
        only the submitted fields.
        """
        wire_names = self.create_schema.wire_names()
        current = {name: getattr(record, name) for name in self.create_schema.model_fields}
        submitted = {wire_names[key]: value for key, value in changes.items()}

        values = self._validate({**current, **submitted})
        for name in submitted:
            setattr(record, name, values[name])

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_document(self, record: ModelT, fields: Sequence[str] | None = None) -> dict[str, Any]:
        return self.to_documents([record], fields)[0]

    def to_documents(
        self,
        records: Sequence[ModelT],
        fields: Sequence[str] | None = None,
    ) -> list[dict[str, Any]]:
        documents = [
            project(
                self.output_schema.model_validate(record).model_dump(mode="json", by_alias=True),
                fields,
            )
            for record in records
        ]
        self._hydrate(documents)
        return documents

    def _hydrate(self, documents: list[dict[str, Any]]) -> None:
        """Replace reference ids with projections, one query per reference."""
        for reference in self.references:
            ids = [doc[reference.field] for doc in documents if isinstance(doc.get(reference.field), str)]
            if not ids:
                continue

            found = reference.repository_class(self._db).find_by_ids(ids)
            for doc in documents:
                if reference.field not in doc:
                    continue
                target = found.get(doc[reference.field])
                doc[reference.field] = (
                    None
                    if target is None
                    else {
                        "_id": target.id,
                        **{to_camel(attr): getattr(target, attr) for attr in reference.projection},
                    }
                )

    # =========================================================================
    # Hooks
    # =========================================================================

    def _validate(self, data: dict[str, Any]) -> dict[str, Any]:
        """Validate a full document; returns column values keyed by field name."""
        try:
            model = self.create_schema.model_validate(data)
        except PydanticValidationError as e:
            raise validation_error_from_pydantic(e.errors())

        values = model.model_dump()
        self._check_document(values)
        return self._to_columns(values)

    def _prepare_create(self, ctx: PermissionContext, data: dict[str, Any]) -> dict[str, Any]:
        return data

    def _check_document(self, values: dict[str, Any]) -> None:
        """Cross-field rules; raise ValidationError."""
        pass

    def _to_columns(self, values: dict[str, Any]) -> dict[str, Any]:
        return values

    def _insert(self, record: ModelT) -> ModelT:
        return self._repo.insert(record)
