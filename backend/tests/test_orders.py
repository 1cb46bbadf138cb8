"""
Tests for orders: aggregate validation, the role matrix and cashier row scoping.
"""

import pytest

from pos_api.models import Order
from pos_api.services.domain import validate_order
from shared.config.constants import Messages, OrderStatus, PaymentType
from shared.utils.exceptions import ValidationError
from tests.helpers import ADMIN, API


@pytest.fixture
def order_body(seed_table, seed_category, seed_product):
    return {
        "table": seed_table.id,
        "category": seed_category.id,
        "status": OrderStatus.ORDERED,
        "paymentType": PaymentType.CASH,
        "products": [{"product": seed_product.id, "price": "25.50", "count": 2}],
    }


def _place_order(db_session, admin, table, category, product, status=OrderStatus.ORDERED):
    order = Order(
        admin=admin.id,
        table=table.id,
        category=category.id,
        status=status,
        products=[{"_id": "e" * 32, "product": product.id, "price": "25.50", "count": 1}],
    )
    db_session.add(order)
    db_session.commit()
    return order


class TestValidateOrder:
    def test_accepts_complete_order(self):
        validate_order({"admin": "a" * 32, "products": [{"product": "b" * 32}]})

    def test_empty_products(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_order({"admin": "a" * 32, "products": []})
        assert exc_info.value.errors == {"products": "Products can't be empty."}

    def test_missing_admin_and_products(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_order({})
        assert set(exc_info.value.errors) == {"admin", "products"}


class TestCreateOrder:
    def test_cashier_creates_order(self, client, cashier, cashier_headers, order_body, seed_table):
        response = client.post(f"{API}/orders", params=ADMIN, headers=cashier_headers, json=order_body)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "Ordered"
        assert data["paymentType"] == "Cash"
        assert data["admin"] == {"_id": cashier.id, "firstName": "Test", "lastName": "Cashier"}
        assert data["table"] == {"_id": seed_table.id, "name": "Table 1"}
        assert data["category"]["name"] == "Drinks"

        [item] = data["products"]
        assert len(item["_id"]) == 32
        assert item["price"] == "25.50"
        assert item["count"] == 2

    def test_empty_products_rejected(self, client, super_admin_headers, order_body):
        order_body["products"] = []

        response = client.post(f"{API}/orders", params=ADMIN, headers=super_admin_headers, json=order_body)

        assert response.status_code == 400
        assert response.json()["errors"] == {"products": "Products can't be empty."}

    def test_missing_products_rejected(self, client, super_admin_headers, order_body):
        del order_body["products"]

        response = client.post(f"{API}/orders", params=ADMIN, headers=super_admin_headers, json=order_body)

        assert response.status_code == 400
        assert response.json()["errors"] == {"products": "Products can't be empty."}

    def test_line_item_count_must_be_positive(self, client, super_admin_headers, order_body):
        order_body["products"][0]["count"] = 0

        response = client.post(f"{API}/orders", params=ADMIN, headers=super_admin_headers, json=order_body)

        assert response.status_code == 400
        assert "products" in response.json()["errors"]

    def test_invalid_status(self, client, super_admin_headers, order_body):
        order_body["status"] = "Shipped"

        response = client.post(f"{API}/orders", params=ADMIN, headers=super_admin_headers, json=order_body)

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "status": "Status must be one of: Ordered, Paid, Cancelled, Refunded."
        }

    def test_unknown_references_are_accepted(self, client, super_admin_headers, order_body):
        order_body["table"] = "f" * 32

        response = client.post(f"{API}/orders", params=ADMIN, headers=super_admin_headers, json=order_body)

        assert response.status_code == 201
        assert response.json()["table"] is None


class TestUpdateOrder:
    def test_manager_updates_status(
        self, client, manager_headers, db_session, cashier, seed_table, seed_category, seed_product
    ):
        order = _place_order(db_session, cashier, seed_table, seed_category, seed_product)

        response = client.patch(
            f"{API}/orders/{order.id}",
            params=ADMIN,
            headers=manager_headers,
            json={"status": OrderStatus.PAID, "paymentType": PaymentType.CARD},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Paid"
        assert response.json()["paymentType"] == "Card"

    def test_line_item_ids_survive_resubmission(
        self, client, super_admin_headers, db_session, cashier, seed_table, seed_category, seed_product
    ):
        order = _place_order(db_session, cashier, seed_table, seed_category, seed_product)
        items = [
            {"_id": "e" * 32, "product": seed_product.id, "price": "25.50", "count": 3},
            {"product": seed_product.id, "price": "20.00", "count": 1},
        ]

        response = client.patch(
            f"{API}/orders/{order.id}",
            params=ADMIN,
            headers=super_admin_headers,
            json={"products": items},
        )

        assert response.status_code == 200
        first, second = response.json()["products"]
        assert first["_id"] == "e" * 32
        assert first["count"] == 3
        assert len(second["_id"]) == 32
        assert second["_id"] != first["_id"]

    def test_update_cannot_empty_products(
        self, client, super_admin_headers, db_session, cashier, seed_table, seed_category, seed_product
    ):
        order = _place_order(db_session, cashier, seed_table, seed_category, seed_product)

        response = client.patch(
            f"{API}/orders/{order.id}",
            params=ADMIN,
            headers=super_admin_headers,
            json={"products": []},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {"products": "Products can't be empty."}

    def test_admin_is_not_mutable(
        self, client, super_admin, super_admin_headers, db_session, cashier, seed_table, seed_category, seed_product
    ):
        order = _place_order(db_session, cashier, seed_table, seed_category, seed_product)

        response = client.patch(
            f"{API}/orders/{order.id}",
            params=ADMIN,
            headers=super_admin_headers,
            json={"admin": super_admin.id, "table": seed_table.id},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "admin": "Admin cannot be modified.",
            "table": "Table cannot be modified.",
        }

    def test_cashier_cannot_update(
        self, client, cashier, cashier_headers, db_session, seed_table, seed_category, seed_product
    ):
        order = _place_order(db_session, cashier, seed_table, seed_category, seed_product)

        response = client.patch(
            f"{API}/orders/{order.id}",
            params=ADMIN,
            headers=cashier_headers,
            json={"status": OrderStatus.PAID},
        )

        assert response.status_code == 401
        assert response.json() == {"message": Messages.NOT_AUTHORIZED, "statusCode": 401}

    def test_only_super_admin_deletes(
        self, client, manager_headers, super_admin_headers, db_session, cashier, seed_table, seed_category, seed_product
    ):
        order = _place_order(db_session, cashier, seed_table, seed_category, seed_product)
        url = f"{API}/orders/{order.id}"

        assert client.delete(url, params=ADMIN, headers=manager_headers).status_code == 401
        assert client.delete(url, params=ADMIN, headers=super_admin_headers).status_code == 200
        assert client.delete(url, params=ADMIN, headers=super_admin_headers).status_code == 404


class TestOrderScoping:
    @pytest.fixture
    def orders(self, db_session, manager, cashier, seed_table, seed_category, seed_product):
        return {
            "manager": _place_order(db_session, manager, seed_table, seed_category, seed_product),
            "cashier": _place_order(db_session, cashier, seed_table, seed_category, seed_product),
        }

    def test_manager_sees_all_orders(self, client, manager_headers, orders):
        response = client.get(f"{API}/orders", params=ADMIN, headers=manager_headers)
        assert len(response.json()) == 2

    def test_manager_filters_by_admin(self, client, manager, manager_headers, orders):
        response = client.get(f"{API}/orders", params={**ADMIN, "admin": manager.id}, headers=manager_headers)

        assert [o["_id"] for o in response.json()] == [orders["manager"].id]

    def test_cashier_sees_only_own_orders(self, client, cashier_headers, orders):
        response = client.get(f"{API}/orders", params=ADMIN, headers=cashier_headers)

        assert [o["_id"] for o in response.json()] == [orders["cashier"].id]

    def test_cashier_admin_filter_is_overridden(self, client, manager, cashier_headers, orders):
        response = client.get(f"{API}/orders", params={**ADMIN, "admin": manager.id}, headers=cashier_headers)

        assert [o["_id"] for o in response.json()] == [orders["cashier"].id]

    def test_cashier_cannot_read_other_orders(self, client, cashier_headers, orders):
        other = client.get(f"{API}/orders/{orders['manager'].id}", params=ADMIN, headers=cashier_headers)
        own = client.get(f"{API}/orders/{orders['cashier'].id}", params=ADMIN, headers=cashier_headers)

        assert other.status_code == 404
        assert own.status_code == 200

    def test_filter_by_category(self, client, manager_headers, orders):
        response = client.get(
            f"{API}/orders", params={**ADMIN, "category": "0" * 32}, headers=manager_headers
        )
        assert response.json() == []
