from enum import Enum

from core.extensions import db
from core.models import utcnow, isoformat


class Role(str, Enum):
    BUYER = "BUYER"
    VENDOR = "VENDOR"
    ADMIN = "ADMIN"


class VerificationStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class Users(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    student_number = db.Column(db.String(100), unique=True, nullable=False, index=True)
    full_name = db.Column(db.String(150), nullable=False)
    password_hash = db.Column(db.String(200), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.BUYER.value)  # BUYER, VENDOR, ADMIN
    id_card_image = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    vendor = db.relationship("Vendors", back_populates="user", uselist=False)

    def to_dict(self):
        return {
            "userId": self.id,
            "studentNumber": self.student_number,
            "fullName": self.full_name,
            "role": self.role,
            "idCardImage": self.id_card_image,
            "createdAt": isoformat(self.created_at),
        }


class Vendors(db.Model):
    __tablename__ = "vendors"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    shop_name = db.Column(db.String(150), unique=True, nullable=False)
    course_section = db.Column(db.String(100), nullable=True)
    is_open = db.Column(db.Boolean, default=False, nullable=False)
    gcash_number = db.Column(db.String(20), nullable=True)
    shop_description = db.Column(db.Text, nullable=True)
    verification_status = db.Column(
        db.String(20), default=VerificationStatus.PENDING.value, nullable=False
    )  # PENDING, VERIFIED, REJECTED

    user = db.relationship("Users", back_populates="vendor")

    def to_dict(self):
        return {
            "vendorId": self.id,
            "userId": self.user_id,
            "shopName": self.shop_name,
            "courseSection": self.course_section,
            "isOpen": self.is_open,
            "gcashNumber": self.gcash_number,
            "shopDescription": self.shop_description,
            "verificationStatus": self.verification_status,
        }
