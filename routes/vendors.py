from core.imports import Blueprint, jsonify, request
from core.extensions import db
from core.validation import parse_body
from schemas.userSchemas import UpdateVendorRequest
from services import identity

vendors_bp = Blueprint("vendors", __name__, url_prefix="/api/vendors")


@vendors_bp.route("/<int:vendor_id>", methods=["GET"])
def get_vendor(vendor_id):
    """
    Get a shop profile
    ---
    tags:
      - Vendors
    parameters:
      - name: vendor_id
        in: path
        required: true
        type: integer
    responses:
      200:
        description: Shop profile
      404:
        description: Vendor not found
    """
    vendor = identity.get_vendor(db.session, vendor_id)
    return jsonify(vendor.to_dict()), 200


@vendors_bp.route("/<int:vendor_id>", methods=["PUT"])
def update_vendor(vendor_id):
    """
    Update a shop profile
    ---
    tags:
      - Vendors
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
            shopName: {type: string}
            courseSection: {type: string}
            isOpen: {type: boolean}
            gcashNumber: {type: string}
            shopDescription: {type: string}
    responses:
      200:
        description: Updated profile
      404:
        description: Vendor not found
    """
    data = parse_body(UpdateVendorRequest, request.get_json(silent=True))
    vendor = identity.update_vendor(db.session, vendor_id, data)
    return jsonify(vendor.to_dict()), 200
