"""Pytest fixtures for the marketplace API tests."""

from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from core.config import TestConfig
from core.extensions import db
from main import create_app
from models.userModel import Role, Users, VerificationStatus, Vendors
from models.vendorModels import Products
from schemas.orderSchemas import CreateOrderRequest
from services.identity import hash_password


@pytest.fixture
def app(tmp_path):
    """App bound to a fresh in-memory database and a temporary upload folder."""

    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


def _make_user(session, student_number, full_name, role):
    user = Users(
        student_number=student_number,
        full_name=full_name,
        password_hash=hash_password("password123"),
        role=role.value,
    )
    session.add(user)
    return user


def _make_vendor(session, shop_name):
    user = _make_user(session, shop_name, shop_name, Role.VENDOR)
    user.vendor = Vendors(
        shop_name=shop_name,
        course_section="BSIT 2A",
        is_open=True,
        verification_status=VerificationStatus.PENDING.value,
    )
    session.commit()
    return user.vendor


@pytest.fixture
def buyer(session):
    user = _make_user(session, "23-0001", "Juan Dela Cruz", Role.BUYER)
    session.commit()
    return user


@pytest.fixture
def vendor(session):
    return _make_vendor(session, "Truffle Kings")


@pytest.fixture
def other_vendor(session):
    return _make_vendor(session, "Siomai House")


@pytest.fixture
def products(session, vendor):
    """Two products of ``vendor``: 50.00 (stock 10) and 120.00 (stock 5)."""
    fries = Products(vendor_id=vendor.id, name="Truffle Fries", price=Decimal("50.00"),
                     stock_quantity=10, category="Food", image_url="")
    burger = Products(vendor_id=vendor.id, name="Truffle Burger", price=Decimal("120.00"),
                      stock_quantity=5, category="Food", image_url="")
    session.add_all([fries, burger])
    session.commit()
    return fries, burger


@pytest.fixture
def admin_headers(session):
    admin = _make_user(session, "admin", "Marketplace Admin", Role.ADMIN)
    session.commit()
    token = create_access_token(identity=str(admin.id), additional_claims={"role": Role.ADMIN.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def buyer_headers(buyer):
    token = create_access_token(identity=str(buyer.id), additional_claims={"role": Role.BUYER.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_cart():
    """Build a validated checkout payload from ``(product_id, quantity)`` pairs."""

    def _make(customer_id, vendor_id, items, **extra):
        payload = {
            "customerId": customer_id,
            "vendorId": vendor_id,
            "deliveryLocation": "Room 305",
            "paymentMethod": "GCASH",
            "items": [{"productId": product_id, "quantity": quantity} for product_id, quantity in items],
        }
        payload.update(extra)
        return CreateOrderRequest.model_validate(payload)

    return _make
