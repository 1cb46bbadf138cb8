"""
Table Service.
"""

from __future__ import annotations

from ...models import Table
from ...repositories import TableRepository
from ...schemas import TableCreate, TableOutput
from ..base_service import ResourceService
from ..permissions import Resource


class TableService(ResourceService[Table]):
    resource = Resource.TABLE
    repository_class = TableRepository
    create_schema = TableCreate
    output_schema = TableOutput
    mutable_fields = frozenset({"name"})
