# storefront/domain/values.py
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductSnapshot(BaseModel):
    """Wpis katalogu, kopiowany do koszyka i zamówień."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    image_urls: List[str] = Field(default_factory=list)
    price: Decimal
    category: Optional[str] = None


class CouponSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    discount: Decimal


class ShippingOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    shipping_method: str
    shipping_fee: Decimal


class LineRequest(BaseModel):
    """Para (productId, quantity) z żądania klienta."""

    product_id: str
    quantity: int


class QuotedLine(BaseModel):
    product: ProductSnapshot
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class PriceQuote(BaseModel):
    """Wynik wyceny, nie jest zapisywany."""

    lines: List[QuotedLine]
    shipping_method: Optional[str]
    shipping_fee: Decimal
    coupon: Optional[CouponSnapshot] = None
    total: Decimal

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0.00"))
