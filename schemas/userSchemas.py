from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.userModel import Role, VerificationStatus


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    full_name: Optional[str] = Field(default=None, alias="fullName", max_length=150)
    student_number: Optional[str] = Field(default=None, alias="studentNumber", max_length=100)
    password: str = Field(min_length=6, max_length=128)
    role: Role = Role.BUYER
    shop_name: Optional[str] = Field(default=None, alias="shopName", max_length=150)
    course_section: Optional[str] = Field(default=None, alias="courseSection", max_length=100)

    @field_validator("role", mode="before")
    @classmethod
    def normalise_role(cls, value):
        if isinstance(value, str):
            value = value.strip().upper() or Role.BUYER.value
        if value == Role.ADMIN.value:
            raise ValueError("ADMIN accounts cannot self-register")
        return value

    @field_validator("full_name", "student_number", "shop_name", "course_section", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def check_role_fields(self):
        if self.role == Role.VENDOR:
            if not self.shop_name:
                raise ValueError("Enterprise Name is required.")
            # vendors sign in with their shop name unless they give a student number
            self.full_name = self.full_name or self.shop_name
            self.student_number = self.student_number or self.shop_name
            self.course_section = self.course_section or "N/A"
        elif not self.full_name or not self.student_number:
            raise ValueError("fullName and studentNumber are required")
        return self


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    student_number: str = Field(alias="studentNumber", min_length=1)
    password: str = Field(min_length=1)


class UpdateVendorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    shop_name: Optional[str] = Field(default=None, alias="shopName", min_length=1, max_length=150)
    course_section: Optional[str] = Field(default=None, alias="courseSection", max_length=100)
    is_open: Optional[bool] = Field(default=None, alias="isOpen")
    gcash_number: Optional[str] = Field(default=None, alias="gcashNumber", max_length=20)
    shop_description: Optional[str] = Field(default=None, alias="shopDescription")


class VerificationRequest(BaseModel):
    status: VerificationStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalise(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value
