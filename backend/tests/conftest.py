"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before the application (and its settings) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pos_api.main import app
from pos_api.models import Base, Category, Product, Table
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from tests.helpers import bearer, login, make_admin


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def super_admin(db_session):
    return make_admin(db_session, Roles.SUPER_ADMIN, "superadmin@shababeek.com")


@pytest.fixture
def manager(db_session):
    return make_admin(db_session, Roles.ADMIN, "admin@shababeek.com")


@pytest.fixture
def cashier(db_session):
    return make_admin(db_session, Roles.CASHIER, "cashier@shababeek.com")


@pytest.fixture
def super_admin_headers(client, super_admin):
    return bearer(login(client, super_admin.email))


@pytest.fixture
def manager_headers(client, manager):
    return bearer(login(client, manager.email))


@pytest.fixture
def cashier_headers(client, cashier):
    return bearer(login(client, cashier.email))


@pytest.fixture
def seed_table(db_session):
    table = Table(name="Table 1")
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def seed_category(db_session):
    category = Category(name="Drinks", description="Hot and cold drinks", is_active=True)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_product(db_session, seed_category):
    product = Product(
        category=seed_category.id,
        name="Espresso",
        description="Single shot",
        price="25.50",
        minimum_ordered=1,
        maximum_ordered=10,
        is_active=True,
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product
