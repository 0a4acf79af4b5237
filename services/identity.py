from contextlib import nullcontext

from core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from core.extensions import bcrypt
from core.imports import logging, select
from models.userModel import Role, Users, VerificationStatus, Vendors
from services.transaction import unit_of_work

logger = logging.getLogger(__name__)

# profile fields a vendor may clear by sending null
CLEARABLE_VENDOR_FIELDS = {"course_section", "gcash_number", "shop_description"}


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode("utf-8")


def find_user(session, student_number):
    return session.scalars(select(Users).where(Users.student_number == student_number)).first()


def find_vendor_by_shop(session, shop_name):
    return session.scalars(select(Vendors).where(Vendors.shop_name == shop_name)).first()


def register_user(session, data, id_card=None, storage=None):
    """Create a user from a ``RegisterRequest``; vendors also get a PENDING shop profile."""
    if find_user(session, data.student_number) is not None or (
        data.role == Role.VENDOR and find_vendor_by_shop(session, data.shop_name) is not None
    ):
        raise ConflictError("This Student Number or Shop Name is already registered.")

    has_id_card = id_card is not None and bool(id_card.filename)
    if data.role == Role.BUYER and not has_id_card:
        raise ValidationError("Buyers must upload a School ID for verification.")

    with (storage.staged(id_card) if has_id_card else nullcontext()) as id_card_url:
        with unit_of_work(session):
            user = Users(
                student_number=data.student_number,
                full_name=data.full_name,
                password_hash=hash_password(data.password),
                role=data.role.value,
                id_card_image=id_card_url or "",
            )
            session.add(user)
            if data.role == Role.VENDOR:
                user.vendor = Vendors(
                    shop_name=data.shop_name,
                    course_section=data.course_section,
                    is_open=False,
                    verification_status=VerificationStatus.PENDING.value,
                )
            session.flush()
            user_id = user.id

    logger.info("Registered %s account %s (user %s)", data.role.value, data.student_number, user_id)
    return user


def authenticate(session, student_number, password):
    user = find_user(session, student_number)
    if user is None or not bcrypt.check_password_hash(user.password_hash, password):
        logger.info("Failed login for %s", student_number)
        raise AuthError("Invalid Student Number or Password.")
    return user


def get_vendor(session, vendor_id):
    vendor = session.get(Vendors, vendor_id)
    if vendor is None:
        raise NotFoundError("Vendor", vendor_id)
    return vendor


def update_vendor(session, vendor_id, data):
    with unit_of_work(session):
        vendor = get_vendor(session, vendor_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None or field in CLEARABLE_VENDOR_FIELDS:
                setattr(vendor, field, value)
    logger.info("Vendor %s profile updated", vendor_id)
    return vendor
