"""Checkout and fulfilment of orders.

Prices always come from the catalog at checkout time and are frozen into
each order item. Stock is only touched when an order is completed, and the
status write that moves it to COMPLETED is what guards the decrement, so a
repeated or concurrent completion can never decrement twice.
"""
from typing import NamedTuple

from sqlalchemy.orm import joinedload, selectinload

from core.errors import InvalidStateError, NotFoundError, ValidationError
from core.imports import Decimal, func, logging, select, update
from core.models import CENTS
from models.orderModels import ALLOWED_TRANSITIONS, Order, OrderItem, OrderStatus
from models.userModel import Users, Vendors
from models.vendorModels import Products
from services.transaction import unit_of_work

logger = logging.getLogger(__name__)


class StatusChange(NamedTuple):
    order_id: int
    previous: OrderStatus
    status: OrderStatus
    changed: bool


def place_order(session, cart):
    """Create a PENDING order from a validated ``CreateOrderRequest``.

    Nothing is written unless every line item resolves to a product of the
    order's vendor.
    """
    if not cart.items:
        raise ValidationError("Order must contain at least one item.")

    with unit_of_work(session):
        if session.get(Users, cart.customer_id) is None:
            raise ValidationError(f"Customer {cart.customer_id} not found.")
        if session.get(Vendors, cart.vendor_id) is None:
            raise ValidationError(f"Vendor {cart.vendor_id} not found.")

        product_ids = {item.product_id for item in cart.items}
        products = {
            product.id: product
            for product in session.scalars(select(Products).where(Products.id.in_(product_ids)))
        }

        order = Order(
            customer_id=cart.customer_id,
            vendor_id=cart.vendor_id,
            delivery_location=cart.delivery_location,
            payment_method=cart.payment_method,
            status=OrderStatus.PENDING.value,
        )
        total = Decimal("0.00")
        for item in cart.items:
            product = products.get(item.product_id)
            if product is None:
                raise ValidationError(f"Product ID {item.product_id} not found.")
            if product.vendor_id != cart.vendor_id:
                raise ValidationError(
                    f"Product ID {item.product_id} is not sold by vendor {cart.vendor_id}."
                )

            price = Decimal(product.price).quantize(CENTS)
            total += price * item.quantity
            order.order_items.append(
                OrderItem(product_id=product.id, quantity=item.quantity, price_at_order=price)
            )

        order.total_amount = total.quantize(CENTS)
        session.add(order)
        session.flush()
        order_id = order.id

    logger.info(
        "Order %s placed: customer=%s vendor=%s items=%d total=%s",
        order_id, cart.customer_id, cart.vendor_id, len(cart.items), total,
    )
    return order


def change_status(session, order_id, new_status):
    try:
        new_status = OrderStatus(new_status)
    except ValueError:
        raise ValidationError(f"Unknown order status: {new_status}") from None

    with unit_of_work(session):
        order = session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order", order_id)

        current = OrderStatus(order.status)
        if current == new_status:
            return StatusChange(order_id, current, current, False)
        if new_status not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStateError(
                f"Order {order_id} cannot move from {current.value} to {new_status.value}"
            )

        result = session.execute(
            update(Order)
            .where(Order.id == order_id, Order.status == current.value)
            .values(status=new_status.value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise InvalidStateError(f"Order {order_id} was modified concurrently")

        if new_status == OrderStatus.COMPLETED:
            _decrement_stock(session, order_id)

    logger.info("Order %s: %s -> %s", order_id, current.value, new_status.value)
    return StatusChange(order_id, current, new_status, True)


def _decrement_stock(session, order_id):
    quantities = session.execute(
        select(OrderItem.product_id, func.sum(OrderItem.quantity))
        .where(OrderItem.order_id == order_id)
        .group_by(OrderItem.product_id)
    ).all()

    for product_id, quantity in quantities:
        session.execute(
            update(Products)
            .where(Products.id == product_id)
            .values(stock_quantity=Products.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )

    oversold = session.execute(
        select(Products.id, Products.stock_quantity).where(
            Products.id.in_([product_id for product_id, _ in quantities]),
            Products.stock_quantity < 0,
        )
    ).all()
    for product_id, stock in oversold:
        logger.warning("Product %s oversold by order %s, stock now %s", product_id, order_id, stock)


def get_order(session, order_id):
    order = session.scalars(
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.order_items).joinedload(OrderItem.product))
    ).first()
    if order is None:
        raise NotFoundError("Order", order_id)
    return order


def get_order_items(session, order_id):
    if session.get(Order, order_id) is None:
        raise NotFoundError("Order", order_id)
    return session.scalars(
        select(OrderItem)
        .where(OrderItem.order_id == order_id)
        .options(joinedload(OrderItem.product))
        .order_by(OrderItem.id)
    ).all()


def _newest_first(stmt):
    return stmt.options(
        selectinload(Order.order_items).joinedload(OrderItem.product)
    ).order_by(Order.created_at.desc(), Order.id.desc())


def list_vendor_orders(session, vendor_id):
    if session.get(Vendors, vendor_id) is None:
        raise NotFoundError("Vendor", vendor_id)
    stmt = select(Order).where(Order.vendor_id == vendor_id).options(joinedload(Order.customer))
    return session.scalars(_newest_first(stmt)).all()


def list_customer_orders(session, customer_id):
    if session.get(Users, customer_id) is None:
        raise NotFoundError("Customer", customer_id)
    stmt = select(Order).where(Order.customer_id == customer_id).options(joinedload(Order.vendor))
    return session.scalars(_newest_first(stmt)).all()
