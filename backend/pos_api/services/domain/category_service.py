"""
Category Service.

Business rules:
- Category names are unique
- Only description and the active flag change after creation
"""

from __future__ import annotations

from ...models import Category
from ...repositories import CategoryRepository
from ...schemas import CategoryCreate, CategoryOutput
from ..base_service import ResourceService
from ..permissions import Resource


class CategoryService(ResourceService[Category]):
    resource = Resource.CATEGORY
    repository_class = CategoryRepository
    create_schema = CategoryCreate
    output_schema = CategoryOutput
    mutable_fields = frozenset({"description", "isActive"})
    list_filters = frozenset({"isActive"})
