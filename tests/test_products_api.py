"""Tests for the /api/products endpoints and image uploads."""

import io
import os

from sqlalchemy import func, select

from models.orderModels import OrderItem
from models.vendorModels import Products


def image(name="fries.png"):
    return (io.BytesIO(b"\x89PNG fake image bytes"), name)


class TestCreateProduct:
    def test_multipart_with_image(self, app, client, vendor):
        response = client.post(
            "/api/products",
            data={
                "vendorId": str(vendor.id),
                "name": "Truffle Fries",
                "price": "50.00",
                "stockQuantity": "25",
                "description": "Crispy",
                "imageFile": image(),
            },
            content_type="multipart/form-data",
        )

        assert response.status_code == 201
        product = response.get_json()["product"]
        assert product["price"] == "50.00"
        assert product["stockQuantity"] == 25
        assert product["category"] == "Food"

        filename = product["imageUrl"].rsplit("/", 1)[1]
        assert filename.endswith("_fries.png")
        assert os.path.exists(os.path.join(app.config["UPLOAD_FOLDER"], filename))
        assert client.get(f"/uploads/{filename}").status_code == 200

    def test_json_without_image(self, client, vendor):
        response = client.post(
            "/api/products",
            json={"vendorId": vendor.id, "name": "Iced Tea", "price": 25, "stockQuantity": 60, "category": "Drinks"},
        )
        assert response.status_code == 201
        assert response.get_json()["product"]["imageUrl"] == ""

    def test_unknown_vendor(self, client):
        response = client.post("/api/products", json={"vendorId": 42, "name": "Ghost", "price": "1.00"})
        assert response.status_code == 400
        assert "Vendor ID 42" in response.get_json()["error"]

    def test_negative_price(self, client, vendor):
        response = client.post("/api/products", json={"vendorId": vendor.id, "name": "Bad", "price": "-1"})
        assert response.status_code == 400

    def test_disallowed_extension_leaves_no_row(self, client, session, vendor):
        response = client.post(
            "/api/products",
            data={"vendorId": str(vendor.id), "name": "Script", "price": "5.00", "imageFile": image("x.exe")},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert session.scalar(select(func.count(Products.id))) == 0

    def test_failed_insert_removes_uploaded_file(self, app, client, session):
        response = client.post(
            "/api/products",
            data={"vendorId": "42", "name": "Ghost", "price": "5.00", "imageFile": image()},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        folder = app.config["UPLOAD_FOLDER"]
        assert not os.path.isdir(folder) or os.listdir(folder) == []


class TestReadProducts:
    def test_list_includes_shop_name(self, client, products):
        data = client.get("/api/products").get_json()
        assert {p["name"] for p in data} == {"Truffle Fries", "Truffle Burger"}
        assert data[0]["vendor"] == {"shopName": "Truffle Kings"}

    def test_vendor_products_newest_first(self, client, vendor, products):
        data = client.get(f"/api/products/vendor/{vendor.id}").get_json()
        assert [p["name"] for p in data] == ["Truffle Burger", "Truffle Fries"]
        assert data[0]["stockQuantity"] == 5

    def test_missing_product(self, client):
        assert client.get("/api/products/999").status_code == 404


class TestUpdateProduct:
    def test_partial_update_keeps_image(self, client, session, products):
        fries, _ = products
        fries.image_url = "http://localhost/uploads/old.png"
        session.commit()

        response = client.put(
            f"/api/products/{fries.id}",
            data={"price": "55.00", "name": ""},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        product = response.get_json()["product"]
        assert product["price"] == "55.00"
        assert product["name"] == "Truffle Fries"
        assert product["imageUrl"] == "http://localhost/uploads/old.png"

    def test_null_clears_description(self, client, session, products):
        fries, _ = products
        fries.description = "Crispy"
        session.commit()

        response = client.put(f"/api/products/{fries.id}", json={"description": None, "price": None})

        product = response.get_json()["product"]
        assert product["description"] is None
        assert product["price"] == "50.00"

    def test_image_replacement(self, client, products):
        fries, _ = products
        response = client.put(
            f"/api/products/{fries.id}",
            data={"imageFile": image("new.jpg")},
            content_type="multipart/form-data",
        )
        assert response.get_json()["product"]["imageUrl"].endswith("_new.jpg")

    def test_missing_product(self, client):
        response = client.put("/api/products/999", json={"price": "1.00"})
        assert response.status_code == 404

    def test_missing_product_discards_image(self, app, client):
        response = client.put(
            "/api/products/999",
            data={"name": "Ghost", "imageFile": image("ghost.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 404
        folder = app.config["UPLOAD_FOLDER"]
        assert not os.path.isdir(folder) or os.listdir(folder) == []


class TestDeleteProduct:
    def test_cascades_to_order_items(self, client, session, buyer, vendor, products):
        fries_id, burger_id = products[0].id, products[1].id
        client.post("/api/orders", json={
            "customerId": buyer.id,
            "vendorId": vendor.id,
            "items": [{"productId": fries_id, "quantity": 1}, {"productId": burger_id, "quantity": 1}],
        })

        response = client.delete(f"/api/products/{fries_id}")

        assert response.status_code == 200
        assert session.get(Products, fries_id) is None
        remaining = session.scalars(select(OrderItem.product_id)).all()
        assert remaining == [burger_id]

    def test_missing_product(self, client):
        assert client.delete("/api/products/999").status_code == 404
