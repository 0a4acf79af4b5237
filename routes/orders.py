from core.imports import Blueprint, jsonify, request
from core.extensions import db
from core.models import money
from core.validation import parse_body
from schemas.orderSchemas import CreateOrderRequest, StatusUpdateRequest
from services import order_workflow

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


def order_summary(order, view=None):
    data = order.to_dict()
    if view == "vendor":
        data["customer"] = {"fullName": order.customer.full_name if order.customer else None}
    elif view == "customer":
        data["shopName"] = order.vendor.shop_name if order.vendor else None
    data["items"] = [item.to_dict() for item in order.order_items]
    return data


@orders_bp.route("", methods=["POST"])
def place_order():
    """
    Place an order (checkout)
    ---
    tags:
      - Orders
    description: >
      Creates one PENDING order for a single vendor. Prices are read from the
      catalog; any price sent by the client is ignored.
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - customerId
            - vendorId
            - items
          properties:
            customerId:
              type: integer
              example: 3
            vendorId:
              type: integer
              example: 1
            deliveryLocation:
              type: string
              example: "Room 305"
            paymentMethod:
              type: string
              example: "GCASH"
            items:
              type: array
              items:
                type: object
                properties:
                  productId:
                    type: integer
                    example: 1
                  quantity:
                    type: integer
                    example: 2
    responses:
      201:
        description: Order placed
        schema:
          type: object
          properties:
            orderId:
              type: integer
              example: 10
            total:
              type: string
              example: "220.00"
      400:
        description: Empty cart, unknown product, customer or vendor
    """
    cart = parse_body(CreateOrderRequest, request.get_json(silent=True))
    order = order_workflow.place_order(db.session, cart)

    return jsonify({
        "message": "Order placed successfully!",
        "orderId": order.id,
        "total": money(order.total_amount)
    }), 201


@orders_bp.route("/<int:order_id>", methods=["GET"])
def get_order(order_id):
    """
    Get one order with its line items
    ---
    tags:
      - Orders
    parameters:
      - name: order_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Order summary
      404:
        description: Order not found
    """
    order = order_workflow.get_order(db.session, order_id)
    return jsonify(order_summary(order)), 200


@orders_bp.route("/<int:order_id>/items", methods=["GET"])
def get_order_items(order_id):
    """
    Get the line items of an order
    ---
    tags:
      - Orders
    parameters:
      - name: order_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Line items with product name, image and price at order time
      404:
        description: Order not found
    """
    items = order_workflow.get_order_items(db.session, order_id)
    return jsonify([item.to_dict() for item in items]), 200


@orders_bp.route("/vendor/<int:vendor_id>", methods=["GET"])
def get_vendor_orders(vendor_id):
    """
    List a vendor's orders, newest first
    ---
    tags:
      - Orders
    parameters:
      - name: vendor_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Orders with customer name and line items
      404:
        description: Vendor not found
    """
    orders = order_workflow.list_vendor_orders(db.session, vendor_id)
    return jsonify([order_summary(order, view="vendor") for order in orders]), 200


@orders_bp.route("/customer/<int:customer_id>", methods=["GET"])
def get_customer_orders(customer_id):
    """
    List a customer's orders, newest first
    ---
    tags:
      - Orders
    parameters:
      - name: customer_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Orders with shop name and line items
      404:
        description: Customer not found
    """
    orders = order_workflow.list_customer_orders(db.session, customer_id)
    return jsonify([order_summary(order, view="customer") for order in orders]), 200


@orders_bp.route("/<int:order_id>/status", methods=["PUT"])
def update_order_status(order_id):
    """
    Change the status of an order
    ---
    tags:
      - Orders
    description: >
      Allowed moves are PENDING to READY, COMPLETED or CANCELLED and READY to
      COMPLETED or CANCELLED. Completing an order decrements product stock once.
      Sending the current status again changes nothing.
    parameters:
      - name: order_id
        in: path
        required: true
        type: integer
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            status:
              type: string
              example: READY
    responses:
      200:
        description: Status after the request
        schema:
          type: object
          properties:
            orderId:
              type: integer
            status:
              type: string
              example: READY
            changed:
              type: boolean
      400:
        description: Unknown status
      404:
        description: Order not found
      409:
        description: Transition not allowed from the current status
    """
    payload = request.get_json(silent=True)
    if isinstance(payload, str):
        payload = {"status": payload}
    body = parse_body(StatusUpdateRequest, payload)

    change = order_workflow.change_status(db.session, order_id, body.status)
    return jsonify({
        "message": "Order status updated" if change.changed else "Order status unchanged",
        "orderId": change.order_id,
        "status": change.status.value,
        "changed": change.changed
    }), 200
