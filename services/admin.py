from core.errors import NotFoundError
from core.imports import delete, func, logging, or_, select
from models.orderModels import Order, OrderItem
from models.userModel import Users, Vendors
from models.vendorModels import Products
from services.identity import get_vendor
from services.transaction import unit_of_work

logger = logging.getLogger(__name__)


def _count_by(session, column):
    return {key: count for key, count in session.execute(select(column, func.count()).group_by(column))}


def platform_stats(session):
    users_by_role = _count_by(session, Users.role)
    vendors_by_status = _count_by(session, Vendors.verification_status)
    orders_by_status = _count_by(session, Order.status)
    return {
        "users": {"total": sum(users_by_role.values()), "byRole": users_by_role},
        "vendors": {"total": sum(vendors_by_status.values()), "byStatus": vendors_by_status},
        "products": session.scalar(select(func.count(Products.id))),
        "orders": {"total": sum(orders_by_status.values()), "byStatus": orders_by_status},
    }


def list_users(session):
    return session.scalars(select(Users).order_by(Users.id)).all()


def list_vendors(session, status=None):
    stmt = select(Vendors).order_by(Vendors.id)
    if status is not None:
        stmt = stmt.where(Vendors.verification_status == status.value)
    return session.scalars(stmt).all()


def set_verification(session, vendor_id, status):
    with unit_of_work(session):
        vendor = get_vendor(session, vendor_id)
        previous = vendor.verification_status
        vendor.verification_status = status.value
    logger.info("Vendor %s verification %s -> %s", vendor_id, previous, status.value)
    return vendor


def delete_vendor(session, vendor_id):
    """Remove a vendor and everything hanging off it in one transaction.

    Order items go first, then products, orders (sold by the shop or bought
    by its owner), the vendor profile and finally the owner's account.
    """
    with unit_of_work(session):
        vendor = session.get(Vendors, vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        user_id = vendor.user_id

        product_ids = select(Products.id).where(Products.vendor_id == vendor_id)
        order_filter = or_(Order.vendor_id == vendor_id, Order.customer_id == user_id)
        order_ids = select(Order.id).where(order_filter)

        statements = [
            delete(OrderItem).where(
                or_(OrderItem.product_id.in_(product_ids), OrderItem.order_id.in_(order_ids))
            ),
            delete(Products).where(Products.vendor_id == vendor_id),
            delete(Order).where(order_filter),
            delete(Vendors).where(Vendors.id == vendor_id),
            delete(Users).where(Users.id == user_id),
        ]
        counts = [
            session.execute(stmt.execution_options(synchronize_session=False)).rowcount
            for stmt in statements
        ]

    logger.info(
        "Vendor %s deleted: %d order items, %d products, %d orders, user %s",
        vendor_id, counts[0], counts[1], counts[2], user_id,
    )
    return {"orderItems": counts[0], "products": counts[1], "orders": counts[2]}
