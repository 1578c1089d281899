# storefront/api/presenters.py
from fastapi import Request

from storefront.data.models.cart import CartModel
from storefront.data.models.order import OrderModel
from storefront.domain.schemas import (
    CartItemOut,
    CartOut,
    CouponOut,
    OrderItemOut,
    OrderOut,
    ReviewOut,
)
from storefront.services.cart_service import cart_total


def cart_out(cart: CartModel) -> CartOut:
    return CartOut(
        products=[CartItemOut.model_validate(i) for i in cart.items],
        total=cart_total(cart),
    )


def order_out(order: OrderModel, request: Request) -> OrderOut:
    review = None
    if order.review is not None:
        # obrazki jako adresy URL, nie surowe bajty
        review = ReviewOut(
            comment=order.review.comment or "",
            rating=order.review.rating,
            image_urls=[
                str(request.url_for("get_review_image", order_id=order.id, index=str(idx)))
                for idx in range(len(order.review.images))
            ],
        )

    coupon = None
    if order.coupon_code is not None:
        coupon = CouponOut(code=order.coupon_code, discount=order.coupon_discount)

    return OrderOut(
        id=order.id,
        products=[OrderItemOut.model_validate(i) for i in order.items],
        shipping_method=order.shipping_method,
        shipping_fee=order.shipping_fee,
        coupon=coupon,
        total_amount=order.total_amount,
        created_at=order.created_at,
        review=review,
    )
