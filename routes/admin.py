from functools import wraps

from core.imports import Blueprint, jsonify, jwt_required, get_jwt, request, current_app
from core.extensions import db
from core.errors import ForbiddenError
from core.validation import parse_body
from models.userModel import Role, Users
from schemas.userSchemas import VerificationRequest
from services import admin as admin_service
from services.identity import hash_password

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def admin_required(fn):
    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        if get_jwt().get("role") != Role.ADMIN.value:
            raise ForbiddenError("Admin access required")
        return fn(*args, **kwargs)
    return wrapper


def seed_admin_account():
    """
    Create the default admin account from ADMIN_STUDENT_NUMBER / ADMIN_PASSWORD.
    Does nothing when no password is configured or the account exists.
    """
    student_number = current_app.config["ADMIN_STUDENT_NUMBER"]
    password = current_app.config.get("ADMIN_PASSWORD")
    if not password:
        current_app.logger.warning("ADMIN_PASSWORD not set, skipping admin seed")
        return None

    admin = Users.query.filter_by(student_number=student_number).first()
    if not admin:
        admin = Users(
            student_number=student_number,
            full_name="Marketplace Admin",
            password_hash=hash_password(password),
            role=Role.ADMIN.value,
        )
        db.session.add(admin)
        db.session.commit()
        current_app.logger.info("Admin account %s seeded", student_number)
    return admin


@admin_bp.route("/stats", methods=["GET"])
@admin_required
def get_admin_stats():
    """
    Admin: platform statistics
    ---
    tags:
      - Admin
    security:
      - Bearer: []
    parameters:
      - name: Authorization
        in: header
        description: 'JWT token in format: Bearer <your_token>'
        required: true
        type: string
        default: "Bearer "
    responses:
      200:
        description: Counts of users, vendors, products and orders
      403:
        description: Forbidden (not an admin)
    """
    return jsonify(admin_service.platform_stats(db.session)), 200


@admin_bp.route("/users", methods=["GET"])
@admin_required
def get_users():
    """
    Admin: list all accounts
    ---
    tags:
      - Admin
    security:
      - Bearer: []
    responses:
      200:
        description: All users
      403:
        description: Forbidden (not an admin)
    """
    users = admin_service.list_users(db.session)
    return jsonify({"users": [user.to_dict() for user in users], "count": len(users)}), 200


@admin_bp.route("/vendors", methods=["GET"])
@admin_required
def get_vendors():
    """
    Admin: list vendors, optionally by verification status
    ---
    tags:
      - Admin
    security:
      - Bearer: []
    parameters:
      - name: status
        in: query
        type: string
        enum: [PENDING, VERIFIED, REJECTED]
    responses:
      200:
        description: Vendors
      400:
        description: Unknown status filter
      403:
        description: Forbidden (not an admin)
    """
    status = None
    if request.args.get("status"):
        status = parse_body(VerificationRequest, {"status": request.args["status"]}).status

    vendors = admin_service.list_vendors(db.session, status)
    return jsonify({"vendors": [vendor.to_dict() for vendor in vendors], "count": len(vendors)}), 200


@admin_bp.route("/vendors/<int:vendor_id>/verification", methods=["PUT"])
@admin_required
def verify_vendor(vendor_id):
    """
    Admin: verify or reject a vendor
    ---
    tags:
      - Admin
    security:
      - Bearer: []
    parameters:
      - name: vendor_id
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
              enum: [PENDING, VERIFIED, REJECTED]
              example: VERIFIED
    responses:
      200:
        description: Updated vendor
      404:
        description: Vendor not found
    """
    body = parse_body(VerificationRequest, request.get_json(silent=True))
    vendor = admin_service.set_verification(db.session, vendor_id, body.status)
    return jsonify({"message": f"Vendor {body.status.value.lower()}", "vendor": vendor.to_dict()}), 200


@admin_bp.route("/vendors/<int:vendor_id>", methods=["DELETE"])
@admin_required
def delete_vendor(vendor_id):
    """
    Admin: delete a vendor and all of its data
    ---
    tags:
      - Admin
    security:
      - Bearer: []
    description: >
      Removes, in one transaction, the vendor's order items, products and
      orders, the vendor profile and its user account.
    parameters:
      - name: vendor_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Vendor deleted, with counts of removed rows
      404:
        description: Vendor not found
    """
    removed = admin_service.delete_vendor(db.session, vendor_id)
    return jsonify({"message": "Vendor deleted", "removed": removed}), 200
