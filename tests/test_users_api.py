"""Tests for registration, login and shop profiles."""

import io

from flask_jwt_extended import decode_token
from sqlalchemy import func, select

from models.userModel import Users, Vendors


def register_buyer(client, student_number="23-0042", with_id=True):
    data = {
        "fullName": "Maria Clara",
        "studentNumber": student_number,
        "password": "secret123",
        "role": "BUYER",
    }
    if with_id:
        data["idCardImage"] = (io.BytesIO(b"id card"), "id.jpg")
    return client.post("/api/users/register", data=data, content_type="multipart/form-data")


class TestRegister:
    def test_buyer_with_id_card(self, client, session):
        response = register_buyer(client)

        assert response.status_code == 201
        user = session.get(Users, response.get_json()["userId"])
        assert user.role == "BUYER"
        assert user.id_card_image.endswith("_id.jpg")
        assert user.password_hash != "secret123"
        assert user.password_hash.startswith("$2")

    def test_buyer_without_id_card(self, client, session):
        response = register_buyer(client, with_id=False)
        assert response.status_code == 400
        assert "School ID" in response.get_json()["error"]
        assert session.scalar(select(func.count(Users.id))) == 0

    def test_duplicate_student_number(self, client, session, buyer):
        response = register_buyer(client, student_number="23-0001")

        assert response.status_code == 400
        assert response.get_json()["kind"] == "conflict"
        assert session.scalar(select(func.count(Users.id)).where(Users.student_number == "23-0001")) == 1

    def test_vendor_gets_pending_shop(self, client, session):
        response = client.post("/api/users/register", json={
            "password": "secret123",
            "role": "vendor",
            "shopName": "Kakanin Corner",
        })

        assert response.status_code == 201
        user = session.get(Users, response.get_json()["userId"])
        assert user.student_number == "Kakanin Corner"
        assert user.vendor.shop_name == "Kakanin Corner"
        assert user.vendor.verification_status == "PENDING"
        assert user.vendor.is_open is False

    def test_duplicate_shop_name(self, client, session, vendor):
        response = client.post("/api/users/register", json={
            "studentNumber": "23-9999",
            "password": "secret123",
            "role": "VENDOR",
            "shopName": "Truffle Kings",
        })

        assert response.status_code == 400
        assert response.get_json()["kind"] == "conflict"
        assert session.scalar(select(func.count(Vendors.id))) == 1
        assert session.scalar(select(func.count(Users.id))) == 1

    def test_vendor_requires_shop_name(self, client, session):
        response = client.post("/api/users/register", json={"password": "secret123", "role": "VENDOR"})
        assert response.status_code == 400
        assert session.scalar(select(func.count(Vendors.id))) == 0

    def test_admin_cannot_self_register(self, client):
        response = client.post("/api/users/register", json={
            "fullName": "Eve", "studentNumber": "x", "password": "secret123", "role": "ADMIN",
        })
        assert response.status_code == 400


class TestLogin:
    def test_buyer_login(self, app, client, buyer):
        response = client.post("/api/users/login", json={"studentNumber": "23-0001", "password": "password123"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["fullName"] == "Juan Dela Cruz"
        assert data["vendorId"] is None
        claims = decode_token(data["accessToken"])
        assert claims["sub"] == str(buyer.id)
        assert claims["role"] == "BUYER"

    def test_vendor_login_includes_shop(self, client, vendor):
        response = client.post("/api/users/login", json={"studentNumber": "Truffle Kings", "password": "password123"})
        data = response.get_json()
        assert data["vendorId"] == vendor.id
        assert data["shopName"] == "Truffle Kings"
        assert data["vendorStatus"] == "PENDING"

    def test_wrong_password(self, client, buyer):
        response = client.post("/api/users/login", json={"studentNumber": "23-0001", "password": "nope"})
        assert response.status_code == 401
        assert response.get_json()["error"] == "Invalid Student Number or Password."

    def test_unknown_user(self, client):
        response = client.post("/api/users/login", json={"studentNumber": "99-9999", "password": "whatever"})
        assert response.status_code == 401


class TestVendorProfile:
    def test_get(self, client, vendor):
        data = client.get(f"/api/vendors/{vendor.id}").get_json()
        assert data["shopName"] == "Truffle Kings"

    def test_update_opens_shop(self, client, vendor):
        response = client.put(f"/api/vendors/{vendor.id}", json={"isOpen": True, "gcashNumber": "09171234567"})
        assert response.status_code == 200
        data = response.get_json()
        assert data["isOpen"] is True
        assert data["gcashNumber"] == "09171234567"
        assert data["shopName"] == "Truffle Kings"

    def test_clear_optional_fields(self, client, vendor):
        client.put(f"/api/vendors/{vendor.id}", json={"gcashNumber": "09171234567", "shopDescription": "Fries"})

        response = client.put(f"/api/vendors/{vendor.id}", json={"gcashNumber": None, "shopName": None})

        data = response.get_json()
        assert data["gcashNumber"] is None
        assert data["shopDescription"] == "Fries"
        assert data["shopName"] == "Truffle Kings"

    def test_missing(self, client):
        assert client.get("/api/vendors/999").status_code == 404
