"""
Pydantic schemas for the POS API.

Input schemas validate a full document (create, and the merged document on a
partial update). Output schemas serialize ORM records to the camelCase wire
format with ``_id``, ``createdAt`` and ``updatedAt``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from shared.config.constants import Gender, Limits, OrderStatus, PaymentType, Roles
from shared.config.settings import settings
from shared.security.password import MAX_PASSWORD_BYTES
from shared.utils.exceptions import field_label

from .models.base import is_valid_id


def _check_id(value: str) -> str:
    if not is_valid_id(value):
        raise ValueError("The ID you've entered is invalid.")
    return value


def _one_of(choices: tuple[str, ...], label: str):
    def check(value: str) -> str:
        if value not in choices:
            raise ValueError(f"{label} must be one of: {', '.join(choices)}.")
        return value

    return check


def _check_price(value: str) -> str:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValueError("The price you've entered is invalid.")
    if not amount.is_finite() or amount < 0:
        raise ValueError("The price you've entered is invalid.")
    return value


def _to_utc_iso(value: datetime) -> str:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


DocumentId = Annotated[str, AfterValidator(_check_id)]
Price = Annotated[str, AfterValidator(_check_price)]
UtcDatetime = Annotated[datetime, PlainSerializer(_to_utc_iso, return_type=str)]
# Secrets keep surrounding whitespace
Secret = Annotated[str, StringConstraints(strip_whitespace=False)]


# =============================================================================
# Base schemas
# =============================================================================


class DocumentInput(BaseModel):
    """Accepts camelCase keys (or field names) and ignores unknown keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _required_not_blank(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) and not value and cls.model_fields[info.field_name].is_required():
            raise ValueError(f"{field_label(info.field_name)} can't be blank.")
        return value

    @classmethod
    def wire_names(cls) -> dict[str, str]:
        """Map of wire (camelCase) key -> field name."""
        return {(info.alias or name): name for name, info in cls.model_fields.items()}


class DocumentOutput(BaseModel):
    """Reads ORM attributes, dumps camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str = Field(serialization_alias="_id")
    created_at: UtcDatetime
    updated_at: UtcDatetime


# =============================================================================
# Admin
# =============================================================================


class AdminCreate(DocumentInput):
    first_name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    last_name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    phone_number: str = Field(max_length=32)
    email: str
    password: Secret
    role: Optional[str] = None
    gender: Optional[str] = None
    birthdate: Optional[datetime] = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        if not value:
            raise ValueError("Email can't be blank.")
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("The email you've entered is invalid.")
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if len(value) < settings.password_min_length:
            raise ValueError(
                f"Your password must be at least {settings.password_min_length} characters long."
            )
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError("Your password must be at most 72 bytes long.")
        return value

    @field_validator("role")
    @classmethod
    def _role(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _one_of(Roles.ALL, "Role")(value)

    @field_validator("gender")
    @classmethod
    def _gender(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _one_of(Gender.ALL, "Gender")(value)


class AdminOutput(DocumentOutput):
    """Password hash and session tokens are never serialized."""

    first_name: str
    last_name: str
    phone_number: str
    email: str
    role: str
    gender: Optional[str] = None
    birthdate: Optional[UtcDatetime] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# =============================================================================
# Table
# =============================================================================


class TableCreate(DocumentInput):
    name: str = Field(max_length=Limits.MAX_NAME_LENGTH)


class TableOutput(DocumentOutput):
    name: str


# =============================================================================
# Category
# =============================================================================


class CategoryCreate(DocumentInput):
    name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    description: str = Field(max_length=Limits.MAX_DESCRIPTION_LENGTH)
    is_active: bool = True


class CategoryOutput(DocumentOutput):
    name: str
    description: str
    is_active: bool


# =============================================================================
# Product
# =============================================================================


class ProductCreate(DocumentInput):
    category: DocumentId
    name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    description: str = Field(max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: Price
    image_url: Optional[str] = Field(default=None, max_length=Limits.MAX_URL_LENGTH)
    minimum_ordered: int = Field(ge=0)
    maximum_ordered: int = Field(ge=0)
    is_active: bool = True


class ProductOutput(DocumentOutput):
    category: str
    name: str
    description: str
    price: str
    image_url: Optional[str] = None
    minimum_ordered: int
    maximum_ordered: int
    is_active: bool


# =============================================================================
# Order
# =============================================================================


class OrderLineItem(DocumentInput):
    id: Optional[str] = Field(default=None, alias="_id")
    product: DocumentId
    price: Price
    count: int = Field(ge=Limits.MIN_LINE_ITEM_COUNT)


class OrderCreate(DocumentInput):
    admin: Optional[DocumentId] = None
    table: DocumentId
    category: DocumentId
    status: str
    payment_type: Optional[str] = None
    # Emptiness is an aggregate rule, checked by the order validator
    products: list[OrderLineItem] = Field(default_factory=list)

    @field_validator("status")
    @classmethod
    def _status(cls, value: str) -> str:
        return _one_of(OrderStatus.ALL, "Status")(value)

    @field_validator("payment_type")
    @classmethod
    def _payment_type(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _one_of(PaymentType.ALL, "Payment type")(value)


class OrderLineItemOutput(BaseModel):
    id: str = Field(validation_alias="_id", serialization_alias="_id")
    product: str
    price: str
    count: int


class OrderOutput(DocumentOutput):
    admin: str
    table: str
    category: str
    status: str
    payment_type: Optional[str] = None
    products: list[OrderLineItemOutput]


__all__ = [
    "DocumentInput",
    "DocumentOutput",
    "AdminCreate",
    "AdminOutput",
    "LoginRequest",
    "TableCreate",
    "TableOutput",
    "CategoryCreate",
    "CategoryOutput",
    "ProductCreate",
    "ProductOutput",
    "OrderLineItem",
    "OrderCreate",
    "OrderOutput",
]
