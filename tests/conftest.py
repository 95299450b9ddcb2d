"""
Pytest configuration and shared fixtures for BileMo API tests.
"""

import os
import tempfile
import uuid
from contextlib import asynccontextmanager
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from bilemo import i18n
from bilemo.auth.auth_handler import sign_jwt
from bilemo.main import app
from bilemo.persistence.db import Base, enter_test_mode, exit_test_mode
from bilemo.persistence.models import Customer, CustomerUser, Employee, Image, Product, User
from bilemo.services.cache_service import tag_aware_cache
from bilemo.utils.password_hash import hash_password

TEST_PAGINATION = {"default_page": 1, "default_limit": 2, "max_limit": 100}


@pytest.fixture(scope="function")
def engine():
    """Create test database engine with fresh schema for each test."""
    test_db_fd, test_db_file = tempfile.mkstemp(suffix=f"_{uuid.uuid4().hex}.db")
    os.close(test_db_fd)
    test_engine = create_engine(
        f"sqlite:///{test_db_file}", connect_args={"check_same_thread": False}
    )

    # Enter test mode to prevent production database access
    enter_test_mode(test_engine)

    from bilemo.persistence import models  # noqa: F401

    Base.metadata.create_all(bind=test_engine)

    yield test_engine

    test_engine.dispose()
    exit_test_mode()
    try:
        os.unlink(test_db_file)
    except OSError:
        pass


@pytest.fixture(scope="function")
def session(engine):
    """Create a test database session."""
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db_session = testing_session_local()
    try:
        yield db_session
    finally:
        db_session.rollback()
        db_session.close()


@pytest.fixture(autouse=True)
def clean_state():
    """Empty page cache, English messages and fixed pagination settings."""
    tag_aware_cache.clear()
    i18n.set_language("en")
    with patch(
        "bilemo.config.config.get_pagination_config", return_value=TEST_PAGINATION
    ), patch("bilemo.config.config.is_cache_enabled", return_value=True):
        yield
    tag_aware_cache.clear()
    i18n.set_language("en")


@pytest.fixture
def client(engine):
    """Create a FastAPI test client."""

    # Mock the FastAPI app lifespan; the engine fixture already built the schema
    @asynccontextmanager
    async def mock_lifespan(_app):
        yield

    original_lifespan = app.router.lifespan_context
    app.router.lifespan_context = mock_lifespan
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.router.lifespan_context = original_lifespan


def make_customer(session, number: int, company: str = None) -> Customer:
    """Persist a customer with its client login account."""
    customer = Customer(
        company=company or f"Company {number}",
        last_name="Durand",
        first_name="Alice",
        postal_code="75008",
        address="10 rue de la Paix",
        city="Paris",
        country="France",
        phone="0102030405",
    )
    customer.user = User(
        email=f"customer{number}@gmail.com",
        hashed_password=hash_password(f"password{number}"),
        roles=["ROLE_CLIENT"],
    )
    session.add(customer)
    session.commit()
    session.refresh(customer)
    return customer


def make_customer_user(session, customer: Customer, last_name: str = "Martin") -> CustomerUser:
    """Persist a customer user under customer."""
    customer_user = CustomerUser(
        last_name=last_name,
        first_name="Louis",
        email=f"{last_name.lower()}@example.com",
        postal_code="69002",
        address="3 avenue Victor Hugo",
        city="Lyon",
        country="France",
        phone="0607080910",
        customer_id=customer.id,
    )
    session.add(customer_user)
    session.commit()
    session.refresh(customer_user)
    return customer_user


def make_employee(session, email: str, password: str, role: str) -> Employee:
    """Persist an employee holding role."""
    employee = Employee(last_name="Leroy", first_name="Hugo", phone="0102030405")
    employee.user = User(email=email, hashed_password=hash_password(password), roles=[role])
    session.add(employee)
    session.commit()
    session.refresh(employee)
    return employee


def make_product(session, reference: str, name: str = None, images: int = 0) -> Product:
    """Persist a product with images named img<reference>_<n>.jpg."""
    product = Product(
        reference=reference,
        series="A1000",
        name=name or f"Phone {reference}",
        description="A phone",
        maker="Apple",
        price=500,
        color="Black",
        platform="IOS",
    )
    product.images = [Image(name=f"img{reference}_{n}.jpg") for n in range(images)]
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


def bearer(email: str) -> dict:
    """Authorization header for the account with email."""
    return {"Authorization": f"Bearer {sign_jwt(email)}"}


@pytest.fixture
def super_admin(session):
    """Super admin employee account."""
    return make_employee(session, "bilemo@bilemo.com", "bilemo", "ROLE_SUPER_ADMIN")


@pytest.fixture
def admin(session):
    """Admin employee account."""
    return make_employee(session, "employee@bilemo.com", "password", "ROLE_ADMIN")


@pytest.fixture
def customer1(session):
    """First customer, login customer1@gmail.com / password1."""
    return make_customer(session, 1)


@pytest.fixture
def customer2(session):
    """Second customer, login customer2@gmail.com / password2."""
    return make_customer(session, 2)


@pytest.fixture
def super_admin_headers(super_admin):
    """Authorization headers of the super admin."""
    return bearer(super_admin.user.email)


@pytest.fixture
def admin_headers(admin):
    """Authorization headers of the admin."""
    return bearer(admin.user.email)


@pytest.fixture
def client1_headers(customer1):
    """Authorization headers of the first customer."""
    return bearer(customer1.user.email)


@pytest.fixture
def client2_headers(customer2):
    """Authorization headers of the second customer."""
    return bearer(customer2.user.email)


@pytest.fixture
def create_product(session):
    """Factory fixture: create_product(reference, name=None, images=0)."""
    return lambda reference, name=None, images=0: make_product(
        session, reference, name, images
    )


@pytest.fixture
def create_customer(session):
    """Factory fixture: create_customer(number, company=None)."""
    return lambda number, company=None: make_customer(session, number, company)


@pytest.fixture
def create_customer_user(session):
    """Factory fixture: create_customer_user(customer, last_name="Martin")."""
    return lambda customer, last_name="Martin": make_customer_user(
        session, customer, last_name
    )
