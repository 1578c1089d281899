# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Dict, List, Optional
from decimal import Decimal
from datetime import datetime


def _id_to_str(value):
    # klienci wysyłają id jako liczby albo stringi
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


class LineIn(BaseModel):
    """Schema dla pozycji (produkt + ilość) w żądaniu."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1, description="ID produktu z katalogu")
    quantity: int = Field(..., description="Ilość produktu")

    @field_validator("product_id", mode="before")
    @classmethod
    def coerce_product_id(cls, value):
        return _id_to_str(value)


class CartAddIn(BaseModel):
    products: List[LineIn] = Field(default_factory=list)


class CartRemoveIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_ids: List[str] = Field(default_factory=list, alias="productIds")

    @field_validator("product_ids", mode="before")
    @classmethod
    def coerce_product_ids(cls, value):
        if isinstance(value, list):
            return [_id_to_str(v) for v in value]
        return value


class QuantityIn(BaseModel):
    quantity: int


class OrderIn(BaseModel):
    """Schema dla tworzenia i edycji zamówienia."""

    model_config = ConfigDict(populate_by_name=True)

    products: List[LineIn] = Field(default_factory=list)
    coupon_id: Optional[str] = Field(None, alias="couponId")
    shipping_id: Optional[str] = Field(None, alias="shippingId")

    @field_validator("coupon_id", "shipping_id", mode="before")
    @classmethod
    def coerce_ids(cls, value):
        return _id_to_str(value)


class CartItemOut(BaseModel):
    product_id: str
    name: str
    image_urls: List[str]
    price: Decimal
    category: Optional[str] = None
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    products: List[CartItemOut]
    total: Decimal


class CartUpdatedOut(BaseModel):
    message: str
    cart: CartOut


class OrderItemOut(CartItemOut):
    pass


class CouponOut(BaseModel):
    code: str
    discount: Decimal


class ReviewOut(BaseModel):
    comment: str
    rating: Optional[int]
    image_urls: List[str]


class OrderOut(BaseModel):
    id: str
    products: List[OrderItemOut]
    shipping_method: Optional[str]
    shipping_fee: Optional[Decimal]
    coupon: Optional[CouponOut]
    total_amount: Decimal
    created_at: datetime
    review: Optional[ReviewOut] = None


class OrderCreatedOut(BaseModel):
    message: str
    order_id: str


class OrderUpdatedOut(BaseModel):
    message: str
    order: OrderOut


class UserProfileOut(BaseModel):
    id: int
    subject_id: str
    email: Optional[str]
    orders: List[OrderOut]
    cart: List[CartItemOut]


class MessageOut(BaseModel):
    message: str


class ShippingOptionOut(BaseModel):
    shipping_method: str
    shipping_fee: Decimal


ShippingOptionsOut = Dict[str, ShippingOptionOut]
CouponsOut = Dict[str, CouponOut]
