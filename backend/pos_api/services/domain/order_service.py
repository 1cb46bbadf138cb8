"""
Order Service.

Business rules:
- An order always holds at least one line item, checked on the whole
  document at creation and again after every update
- Each line item gets its own ``_id``, kept across updates when resubmitted
- Cashiers only ever see their own orders and cannot modify orders
- ``admin`` defaults to the creating admin
"""

from __future__ import annotations

from typing import Any

from shared.utils.exceptions import ValidationError

from ...models import Order, new_id
from ...repositories import (
    AdminRepository,
    CategoryRepository,
    OrderRepository,
    TableRepository,
)
from ...schemas import OrderCreate, OrderOutput
from ..base_service import Reference, ResourceService
from ..permissions import PermissionContext, Resource


def validate_order(values: dict[str, Any]) -> None:
    """
    Aggregate rules for an order document (keyed by field name).

    Raises:
        ValidationError: If the order has no admin or no line items.
    """
    errors: dict[str, str] = {}
    if not values.get("admin"):
        errors["admin"] = "Admin can't be blank."
    if not values.get("products"):
        errors["products"] = "Products can't be empty."
    if errors:
        raise ValidationError(errors)


class OrderService(ResourceService[Order]):
    resource = Resource.ORDER
    repository_class = OrderRepository
    create_schema = OrderCreate
    output_schema = OrderOutput
    mutable_fields = frozenset({"status", "paymentType", "products"})
    list_filters = frozenset({"category", "admin"})
    references = (
        Reference("admin", AdminRepository, ("first_name", "last_name")),
        Reference("table", TableRepository, ("name",)),
        Reference("category", CategoryRepository, ("name",)),
    )

    def _prepare_create(self, ctx: PermissionContext, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("admin") is None:
            return {**data, "admin": ctx.admin_id}
        return data

    def _check_document(self, values: dict[str, Any]) -> None:
        validate_order(values)

    def _to_columns(self, values: dict[str, Any]) -> dict[str, Any]:
        values["products"] = [
            {
                "_id": item["id"] or new_id(),
                "product": item["product"],
                "price": item["price"],
                "count": item["count"],
            }
            for item in values["products"]
        ]
        return values
