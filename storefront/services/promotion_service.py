# storefront/services/promotion_service.py
from decimal import Decimal
from typing import Dict, Mapping, Optional

from storefront.data.promotions import COUPONS, SHIPPING_OPTIONS
from storefront.domain.errors import InvalidShipping
from storefront.domain.values import CouponSnapshot, ShippingOption


class PromotionService:
    """
    Odczyt kuponów i metod dostawy.
    Nieznany kupon = brak rabatu, nieznana dostawa = błąd walidacji.
    """

    def __init__(
        self,
        coupons: Mapping[str, dict] | None = None,
        shipping_options: Mapping[str, dict] | None = None,
    ):
        self._coupons = {
            str(cid): CouponSnapshot(code=c["code"], discount=Decimal(str(c["discount"])))
            for cid, c in (COUPONS if coupons is None else coupons).items()
        }
        self._shipping = {
            str(sid): ShippingOption(
                shipping_method=s["shipping_method"],
                shipping_fee=Decimal(str(s["shipping_fee"])),
            )
            for sid, s in (SHIPPING_OPTIONS if shipping_options is None else shipping_options).items()
        }

    def resolve_coupon(self, coupon_id: Optional[str]) -> CouponSnapshot | None:
        if coupon_id is None:
            return None
        return self._coupons.get(str(coupon_id))

    def resolve_shipping(self, shipping_id: Optional[str]) -> ShippingOption:
        option = self._shipping.get(str(shipping_id)) if shipping_id is not None else None
        if option is None:
            raise InvalidShipping(shipping_id)
        return option

    def coupons(self) -> Dict[str, CouponSnapshot]:
        return dict(self._coupons)

    def shipping_options(self) -> Dict[str, ShippingOption]:
        return dict(self._shipping)
