from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from models.orderModels import OrderStatus


class CartItemRequest(BaseModel):
    # any client-sent price is dropped here
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_id: int = Field(alias="productId", gt=0)
    quantity: int = Field(gt=0)


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: int = Field(validation_alias=AliasChoices("customerId", "customerUserId", "customer_id"))
    vendor_id: int = Field(alias="vendorId")
    delivery_location: str = Field(default="", alias="deliveryLocation", max_length=255)
    payment_method: str = Field(default="GCASH", alias="paymentMethod", min_length=1, max_length=50)
    items: List[CartItemRequest] = Field(min_length=1)


class StatusUpdateRequest(BaseModel):
    status: OrderStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalise(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value
