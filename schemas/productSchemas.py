from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ProductFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        # multipart forms send empty strings for untouched inputs
        if isinstance(value, str) and value.strip() == "":
            return None
        return value


class CreateProductRequest(_ProductFields):
    vendor_id: int = Field(alias="vendorId", gt=0)
    name: str = Field(min_length=1, max_length=150)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(default=0, alias="stockQuantity", ge=0)
    category: Optional[str] = Field(default="Food", max_length=100)
    description: Optional[str] = None

    @field_validator("stock_quantity", "category", mode="after")
    @classmethod
    def fill_default(cls, value, info):
        if value is None:
            return 0 if info.field_name == "stock_quantity" else "Food"
        return value


class UpdateProductRequest(_ProductFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(default=None, alias="stockQuantity", ge=0)
    category: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
