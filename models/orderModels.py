from enum import Enum

from core.extensions import db
from core.models import utcnow, money, isoformat


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    READY = "READY"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

# current status -> statuses it may move to
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.READY, OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey("vendors.id"), nullable=False, index=True)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(20), default=OrderStatus.PENDING.value, nullable=False)
    delivery_location = db.Column(db.String(255), nullable=False, default="")
    payment_method = db.Column(db.String(50), nullable=False, default="GCASH")
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    order_items = db.relationship("OrderItem", backref="order", order_by="OrderItem.id")
    customer = db.relationship("Users")
    vendor = db.relationship("Vendors")

    def to_dict(self):
        return {
            "orderId": self.id,
            "customerId": self.customer_id,
            "vendorId": self.vendor_id,
            "totalAmount": money(self.total_amount),
            "status": self.status,
            "deliveryLocation": self.delivery_location,
            "paymentMethod": self.payment_method,
            "createdAt": isoformat(self.created_at),
        }


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    price_at_order = db.Column(db.Numeric(10, 2), nullable=False)  # snapshot, never updated

    product = db.relationship("Products")

    def to_dict(self):
        product = self.product
        return {
            "orderItemId": self.id,
            "productId": self.product_id,
            "name": product.name if product else None,
            "imageUrl": product.image_url if product else None,
            "quantity": self.quantity,
            "priceAtOrder": money(self.price_at_order),
        }
