# storefront/api/routers/promotions.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_promotions
from storefront.domain.schemas import CouponOut, CouponsOut, ShippingOptionOut, ShippingOptionsOut
from storefront.services.promotion_service import PromotionService

router = APIRouter(tags=["promotions"])


@router.get("/shipping-options", response_model=ShippingOptionsOut)
def shipping_options(promotions: PromotionService = Depends(get_promotions)):
    return {
        sid: ShippingOptionOut(shipping_method=o.shipping_method, shipping_fee=o.shipping_fee)
        for sid, o in promotions.shipping_options().items()
    }


@router.get("/coupons", response_model=CouponsOut)
def coupons(promotions: PromotionService = Depends(get_promotions)):
    return {
        cid: CouponOut(code=c.code, discount=c.discount)
        for cid, c in promotions.coupons().items()
    }
