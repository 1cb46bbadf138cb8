"""
Product Service.

Business rules:
- Product names are unique
- A product belongs to one category (hydrated as ``{_id, name}``)
- minimumOrdered never exceeds maximumOrdered
"""

from __future__ import annotations

from typing import Any

from shared.utils.exceptions import ValidationError

from ...models import Product
from ...repositories import CategoryRepository, ProductRepository
from ...schemas import ProductCreate, ProductOutput
from ..base_service import Reference, ResourceService
from ..permissions import Resource


class ProductService(ResourceService[Product]):
    resource = Resource.PRODUCT
    repository_class = ProductRepository
    create_schema = ProductCreate
    output_schema = ProductOutput
    mutable_fields = frozenset(
        {"description", "price", "imageUrl", "minimumOrdered", "maximumOrdered", "isActive"}
    )
    list_filters = frozenset({"isActive", "category"})
    references = (Reference("category", CategoryRepository, ("name",)),)

    def _check_document(self, values: dict[str, Any]) -> None:
        if values["minimum_ordered"] > values["maximum_ordered"]:
            raise ValidationError(
                {
                    "maximumOrdered": (
                        "Maximum ordered must be greater than or equal to minimum ordered."
                    )
                }
            )
