"""
Tests for the error taxonomy and classifier.
"""

import logging

import httpx
import pytest
from fastapi.testclient import TestClient
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from pos_api.main import app
from pos_api.services.domain import TableService
from shared.config.constants import Messages
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.utils.exceptions import (
    AuthorizationError,
    ClientError,
    DuplicateKeyError,
    ErrorKind,
    FileError,
    NotFoundError,
    ServerError,
    ValidationError,
    classify,
    duplicate_fields,
    field_label,
    field_words,
    validation_error_from_pydantic,
)
from tests.helpers import ADMIN, API, bearer, login


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


class TestFieldNames:
    def test_field_words(self):
        assert field_words("phoneNumber") == "phone number"
        assert field_words("phone_number") == "phone number"
        assert field_words("_id") == "id"

    def test_field_label(self):
        assert field_label("isActive") == "Is active"
        assert field_label("name") == "Name"


class TestErrorTypes:
    def test_validation_message_singular(self):
        error = ValidationError({"name": "Name can't be blank."})
        assert error.message == "The information you've entered is invalid for the following field: name."
        assert error.status_code == 400

    def test_validation_message_plural(self):
        error = ValidationError({"name": "x", "price": "y"})
        assert error.message == (
            "The information you've entered is invalid for the following fields: name, price."
        )

    def test_duplicate_key(self):
        error = DuplicateKeyError(["phoneNumber"])
        assert error.errors == {"phoneNumber": "The phone number you've entered is already taken."}
        assert error.kind == ErrorKind.DUPLICATE_KEY

    def test_not_found_message(self):
        assert NotFoundError("order").message == "We couldn't find the order you are looking for."
        assert NotFoundError(message="custom").message == "custom"

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (ClientError(), 400),
            (FileError(), 400),
            (ValidationError({"a": "b"}), 400),
            (DuplicateKeyError(["name"]), 400),
            (AuthorizationError(), 401),
            (NotFoundError("table"), 404),
            (ServerError(), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert error.status_code == status_code


class TestClassify:
    def test_known_error_keeps_message_and_detail(self):
        result = classify(ValidationError({"products": "Products can't be empty."}))

        assert result.status_code == 400
        assert result.kind == ErrorKind.VALIDATION
        assert result.errors == {"products": "Products can't be empty."}
        assert result.log_level == logging.DEBUG
        assert result.to_payload() == {
            "message": "The information you've entered is invalid for the following field: products.",
            "statusCode": 400,
            "errors": {"products": "Products can't be empty."},
        }

    def test_admin_id_prefixes_log_only(self):
        result = classify(NotFoundError("table"), admin_id="abc123")

        assert result.log_message.startswith("[abc123] ")
        assert "abc123" not in result.message
        assert "abc123" not in str(result.to_payload())

    def test_errors_omitted_when_absent(self):
        assert classify(AuthorizationError()).to_payload() == {
            "message": Messages.NOT_AUTHORIZED,
            "statusCode": 401,
        }

    def test_unknown_error_is_redacted(self):
        result = classify(RuntimeError("connection string with password"))

        assert result.status_code == 500
        assert result.kind == ErrorKind.SERVER
        assert result.message == Messages.UNEXPECTED
        assert "password" not in str(result.to_payload())
        assert "connection string" in result.log_message
        assert result.log_level == logging.ERROR

    def test_server_error_is_redacted(self):
        result = classify(ServerError("internal detail"))
        assert result.message == Messages.UNEXPECTED

    def test_sqlite_unique_violation(self):
        error = _integrity_error("UNIQUE constraint failed: category.name")
        assert duplicate_fields(error) == ["name"]

        result = classify(error)
        assert result.kind == ErrorKind.DUPLICATE_KEY
        assert result.errors == {"name": "The name you've entered is already taken."}

    def test_postgres_unique_violation(self):
        error = _integrity_error(
            'duplicate key value violates unique constraint "admin_email_key"\n'
            "DETAIL:  Key (email)=(a@b.com) already exists."
        )
        assert duplicate_fields(error) == ["email"]

    def test_other_integrity_error_is_server_error(self):
        result = classify(_integrity_error("NOT NULL constraint failed: product.name"))
        assert result.status_code == 500

    def test_payment_gateway_error(self):
        request = httpx.Request("POST", f"{settings.payment_gateway_url}/auth/tokens")
        response = httpx.Response(502, request=request, text="gateway down")
        error = httpx.HTTPStatusError("bad gateway", request=request, response=response)

        result = classify(error)

        assert result.kind == ErrorKind.PAYMENT_GATEWAY
        assert result.status_code == 500
        assert result.message == Messages.UNEXPECTED
        assert result.log_extra["gateway_response"] == "gateway down"
        assert result.log_message.startswith("PaymobError")

    def test_other_http_error_is_server_error(self):
        request = httpx.Request("GET", "https://example.com/")
        response = httpx.Response(500, request=request)
        error = httpx.HTTPStatusError("boom", request=request, response=response)

        assert classify(error).kind == ErrorKind.SERVER

    def test_pydantic_errors(self):
        class Body(BaseModel):
            name: str
            count: int

        with pytest.raises(PydanticValidationError) as exc_info:
            Body.model_validate({"count": "many"})

        error = validation_error_from_pydantic(exc_info.value.errors())
        assert error.errors == {
            "name": "Name can't be blank.",
            "count": "The count you've entered is invalid.",
        }


class TestResponder:
    """Errors reaching the HTTP layer answer the classified payload."""

    def test_unknown_route(self, client):
        response = client.get(f"{API}/nowhere")
        assert response.status_code == 404
        assert response.json()["statusCode"] == 404

    def test_unexpected_error_answers_generic_500(self, db_session, super_admin, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("secret detail")

        monkeypatch.setattr(TableService, "list_all", explode)
        app.dependency_overrides[get_db] = lambda: db_session
        try:
            with TestClient(app, raise_server_exceptions=False) as test_client:
                token = login(test_client, super_admin.email)
                response = test_client.get(f"{API}/tables", params=ADMIN, headers=bearer(token))
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"message": Messages.UNEXPECTED, "statusCode": 500}
