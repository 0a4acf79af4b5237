from sqlalchemy.orm import joinedload

from core.errors import NotFoundError, ValidationError
from core.imports import delete, logging, select
from models.orderModels import OrderItem
from models.userModel import Vendors
from models.vendorModels import Products
from services.transaction import unit_of_work

logger = logging.getLogger(__name__)

# product fields that may be cleared with an explicit null
CLEARABLE_PRODUCT_FIELDS = {"description"}


def list_products(session):
    return session.scalars(
        select(Products).options(joinedload(Products.vendor)).order_by(Products.id.desc())
    ).all()


def list_vendor_products(session, vendor_id):
    return session.scalars(
        select(Products).where(Products.vendor_id == vendor_id).order_by(Products.id.desc())
    ).all()


def get_product(session, product_id):
    product = session.get(Products, product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


def create_product(session, data, image_url=None):
    with unit_of_work(session):
        if session.get(Vendors, data.vendor_id) is None:
            raise ValidationError(f"Vendor ID {data.vendor_id} does not exist.")

        product = Products(
            vendor_id=data.vendor_id,
            name=data.name,
            price=data.price,
            stock_quantity=data.stock_quantity,
            category=data.category,
            description=data.description,
            image_url=image_url or "",
        )
        session.add(product)
        session.flush()
        product_id = product.id

    logger.info("Product %s created for vendor %s", product_id, data.vendor_id)
    return product


def update_product(session, product_id, data, image_url=None):
    """Apply the fields present in ``data``; the image is replaced only when a new one was uploaded."""
    with unit_of_work(session):
        product = get_product(session, product_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None or field in CLEARABLE_PRODUCT_FIELDS:
                setattr(product, field, value)
        if image_url:
            product.image_url = image_url

    logger.info("Product %s updated", product_id)
    return product


def delete_product(session, product_id):
    """Delete a product together with every order item that references it."""
    with unit_of_work(session):
        get_product(session, product_id)
        removed = session.execute(
            delete(OrderItem)
            .where(OrderItem.product_id == product_id)
            .execution_options(synchronize_session=False)
        ).rowcount
        session.execute(
            delete(Products)
            .where(Products.id == product_id)
            .execution_options(synchronize_session=False)
        )

    logger.info("Product %s deleted along with %d order items", product_id, removed)
