# storefront/services/pricing_service.py
from decimal import Decimal
from typing import Iterable, Optional

from storefront.domain.errors import InvalidInput, InvalidProduct, InvalidQuantity
from storefront.domain.values import LineRequest, PriceQuote, QuotedLine
from storefront.services.catalog_service import CatalogCache
from storefront.services.promotion_service import PromotionService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def validate_quantity(quantity) -> int:
    # bool to podklasa int, odrzucamy
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity()
    return quantity


class PricingService:
    """
    Wycena zamówienia. Ten sam algorytm dla tworzenia i edycji:
    1. dostawa musi istnieć
    2. każdy produkt musi być w katalogu (pierwszy brak przerywa)
    3. suma cena * ilość
    4. + opłata za dostawę
    5. - rabat kuponu (bez zaokrąglania do zera, total może być ujemny)
    """

    def __init__(self, catalog: CatalogCache, promotions: PromotionService):
        self.catalog = catalog
        self.promotions = promotions

    def resolve_lines(self, lines: Iterable[LineRequest]) -> list[QuotedLine]:
        quoted = []
        for line in lines:
            validate_quantity(line.quantity)
            product = self.catalog.resolve(line.product_id)
            if product is None:
                raise InvalidProduct(line.product_id)
            quoted.append(QuotedLine(product=product, quantity=line.quantity))
        return quoted

    def price_order(
        self,
        lines: list[LineRequest],
        coupon_id: Optional[str] = None,
        shipping_id: Optional[str] = None,
    ) -> PriceQuote:
        shipping = self.promotions.resolve_shipping(shipping_id)

        if not lines:
            raise InvalidInput("Products required")

        quoted = self.resolve_lines(lines)

        total = sum((q.line_total for q in quoted), Decimal("0.00"))
        total += shipping.shipping_fee

        coupon = self.promotions.resolve_coupon(coupon_id)
        if coupon is not None:
            total -= coupon.discount

        # pusta etykieta dostawy zapisywana jako brak wartości
        method = shipping.shipping_method.strip() or None

        logger.info(
            f"Priced {len(quoted)} line(s): shipping={shipping_id} coupon={coupon_id if coupon else None} "
            f"total={total}"
        )

        return PriceQuote(
            lines=quoted,
            shipping_method=method,
            shipping_fee=shipping.shipping_fee,
            coupon=coupon,
            total=total,
        )
