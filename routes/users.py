from core.imports import Blueprint, jsonify, request, create_access_token, current_app
from core.extensions import db
from core.validation import parse_body
from models.userModel import Role, Users, Vendors, VerificationStatus
from schemas.userSchemas import LoginRequest, RegisterRequest
from services import identity
from services.storage import UploadStorage

users_bp = Blueprint("users", __name__, url_prefix="/api/users")


def seed_demo_vendor():
    user = Users.query.filter_by(student_number="Truffle Kings").first()
    if not user:
        raw_password = "password123"  # demo login password
        user = Users(
            student_number="Truffle Kings",
            full_name="Truffle Kings",
            password_hash=identity.hash_password(raw_password),
            role=Role.VENDOR.value,
        )
        user.vendor = Vendors(
            shop_name="Truffle Kings",
            course_section="BSIT 2A",
            is_open=True,
            verification_status=VerificationStatus.VERIFIED.value,
        )
        db.session.add(user)
        db.session.commit()
        current_app.logger.info("Demo vendor created (studentNumber=Truffle Kings, password=%s)", raw_password)
    else:
        current_app.logger.info("Demo vendor already exists.")
    return user


def seed_demo_buyer():
    user = Users.query.filter_by(student_number="23-0001").first()
    if not user:
        raw_password = "password123"
        user = Users(
            student_number="23-0001",
            full_name="Juan Dela Cruz",
            password_hash=identity.hash_password(raw_password),
            role=Role.BUYER.value,
        )
        db.session.add(user)
        db.session.commit()
        current_app.logger.info("Demo buyer created (studentNumber=23-0001, password=%s)", raw_password)
    else:
        current_app.logger.info("Demo buyer already exists.")
    return user


@users_bp.route("/register", methods=["POST"])
def register():
    """
    Register a buyer or vendor account
    ---
    tags:
      - Users
    consumes:
      - multipart/form-data
    description: >
      Buyers must upload a school ID image. Vendors must give a shop name,
      which doubles as their login id when no student number is sent; their
      shop starts out PENDING verification.
    parameters:
      - {name: fullName, in: formData, type: string}
      - {name: studentNumber, in: formData, type: string}
      - {name: password, in: formData, type: string, required: true}
      - {name: role, in: formData, type: string, enum: [BUYER, VENDOR], default: BUYER}
      - {name: shopName, in: formData, type: string}
      - {name: courseSection, in: formData, type: string}
      - {name: idCardImage, in: formData, type: file}
    responses:
      201:
        description: User registered
      400:
        description: Missing fields, missing ID image, or student number or shop name already registered
    """
    payload = request.form.to_dict() if request.form else request.get_json(silent=True)
    data = parse_body(RegisterRequest, payload)

    user = identity.register_user(
        db.session,
        data,
        id_card=request.files.get("idCardImage"),
        storage=UploadStorage.from_app(),
    )
    return jsonify({"message": "User registered", "userId": user.id}), 201


@users_bp.route("/login", methods=["POST"])
def login():
    """
    Log in with student number (or shop name) and password
    ---
    tags:
      - Users
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - studentNumber
            - password
          properties:
            studentNumber:
              type: string
              example: "23-0001"
            password:
              type: string
              example: "password123"
    responses:
      200:
        description: Access token and the profile the dashboard needs
      401:
        description: Invalid credentials
    """
    body = parse_body(LoginRequest, request.get_json(silent=True))
    user = identity.authenticate(db.session, body.student_number, body.password)
    vendor = user.vendor

    access_token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    return jsonify({
        "accessToken": access_token,
        "userId": user.id,
        "fullName": user.full_name,
        "studentNumber": user.student_number,
        "role": user.role,
        "vendorId": vendor.id if vendor else None,
        "shopName": vendor.shop_name if vendor else None,
        "vendorStatus": vendor.verification_status if vendor else None
    }), 200
