from core.imports import Blueprint, jsonify, request, current_app, Decimal
from core.extensions import db
from core.validation import parse_body
from models.userModel import Vendors
from models.vendorModels import Products
from schemas.productSchemas import CreateProductRequest, UpdateProductRequest
from services import catalog
from services.storage import UploadStorage

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


def _form_payload():
    if request.form:
        return request.form.to_dict()
    return request.get_json(silent=True)


def _image_file():
    return request.files.get("imageFile") or request.files.get("ImageFile")


def seed_products():
    vendor = Vendors.query.filter_by(shop_name="Truffle Kings").first()
    if not vendor:
        current_app.logger.warning("No demo vendor found. Run seed_demo_vendor() first.")
        return

    sample_products = [
        {"name": "Truffle Fries", "price": Decimal("50.00"), "stock_quantity": 40, "category": "Food",
         "description": "Crispy fries with truffle oil and parmesan."},
        {"name": "Truffle Burger", "price": Decimal("120.00"), "stock_quantity": 20, "category": "Food",
         "description": "Beef patty, truffle mayo, brioche bun."},
        {"name": "Iced Tea", "price": Decimal("25.00"), "stock_quantity": 60, "category": "Drinks",
         "description": "House-brewed, lightly sweetened."},
    ]

    created = []
    for prod in sample_products:
        if Products.query.filter_by(vendor_id=vendor.id, name=prod["name"]).first():
            continue
        db.session.add(Products(vendor_id=vendor.id, image_url="", **prod))
        created.append(prod["name"])
    db.session.commit()

    if created:
        current_app.logger.info("Products created: %s", ", ".join(created))
    else:
        current_app.logger.info("Demo products already exist.")


@products_bp.route("", methods=["GET"])
def get_products():
    """
    List every product with its shop name
    ---
    tags:
      - Products
    responses:
      200:
        description: Products, newest first
    """
    products = catalog.list_products(db.session)
    return jsonify([product.to_dict(with_vendor=True) for product in products]), 200


@products_bp.route("/vendor/<int:vendor_id>", methods=["GET"])
def get_vendor_products(vendor_id):
    """
    List a vendor's products (dashboard)
    ---
    tags:
      - Products
    parameters:
      - name: vendor_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Products including stock quantity, newest first
    """
    products = catalog.list_vendor_products(db.session, vendor_id)
    return jsonify([product.to_dict() for product in products]), 200


@products_bp.route("/<int:product_id>", methods=["GET"])
def get_product(product_id):
    """
    Get one product
    ---
    tags:
      - Products
    parameters:
      - name: product_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Product
      404:
        description: Product not found
    """
    product = catalog.get_product(db.session, product_id)
    return jsonify(product.to_dict(with_vendor=True)), 200


@products_bp.route("", methods=["POST"])
def add_product():
    """
    Add a product
    ---
    tags:
      - Products
    consumes:
      - multipart/form-data
    parameters:
      - {name: vendorId, in: formData, type: integer, required: true}
      - {name: name, in: formData, type: string, required: true}
      - {name: price, in: formData, type: number, required: true}
      - {name: stockQuantity, in: formData, type: integer}
      - {name: category, in: formData, type: string, default: Food}
      - {name: description, in: formData, type: string}
      - {name: imageFile, in: formData, type: file}
    responses:
      201:
        description: Product created
      400:
        description: Missing fields, unknown vendor or unsupported image type
    """
    data = parse_body(CreateProductRequest, _form_payload())
    storage = UploadStorage.from_app()

    with storage.staged(_image_file()) as image_url:
        product = catalog.create_product(db.session, data, image_url=image_url)

    return jsonify({"message": "Product Added", "product": product.to_dict()}), 201


@products_bp.route("/<int:product_id>", methods=["PUT"])
def edit_product(product_id):
    """
    Update a product
    ---
    tags:
      - Products
    description: Only the fields sent are changed; the image is replaced only if a new file is uploaded.
    consumes:
      - multipart/form-data
    parameters:
      - {name: product_id, in: path, type: integer, required: true}
      - {name: name, in: formData, type: string}
      - {name: price, in: formData, type: number}
      - {name: stockQuantity, in: formData, type: integer}
      - {name: category, in: formData, type: string}
      - {name: description, in: formData, type: string}
      - {name: imageFile, in: formData, type: file}
    responses:
      200:
        description: Product updated
      404:
        description: Product not found
    """
    data = parse_body(UpdateProductRequest, _form_payload())
    storage = UploadStorage.from_app()

    with storage.staged(_image_file()) as image_url:
        product = catalog.update_product(db.session, product_id, data, image_url=image_url)

    return jsonify({"message": "Product Updated", "product": product.to_dict()}), 200


@products_bp.route("/<int:product_id>", methods=["DELETE"])
def remove_product(product_id):
    """
    Delete a product
    ---
    tags:
      - Products
    description: Order items that reference the product are deleted with it.
    parameters:
      - name: product_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Product deleted
      404:
        description: Product not found
    """
    catalog.delete_product(db.session, product_id)
    return jsonify({"message": "Product Deleted"}), 200
