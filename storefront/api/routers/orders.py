# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, Request

from storefront.api.deps import get_current_user, get_order_service
from storefront.api.presenters import order_out
from storefront.data.models.user import UserModel
from storefront.domain.schemas import MessageOut, OrderCreatedOut, OrderIn, OrderUpdatedOut
from storefront.domain.values import LineRequest
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/order", tags=["orders"])


def _lines(payload: OrderIn) -> list[LineRequest]:
    return [LineRequest(product_id=p.product_id, quantity=p.quantity) for p in payload.products]


@router.post("", response_model=OrderCreatedOut)
def create_order(
    payload: OrderIn,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    """
    Tworzy zamówienie i usuwa zamówione produkty z koszyka.
    """
    order_id = svc.create(
        user,
        _lines(payload),
        coupon_id=payload.coupon_id,
        shipping_id=payload.shipping_id,
    )
    return OrderCreatedOut(message="Order created", order_id=order_id)


@router.put("/{order_id}", response_model=OrderUpdatedOut)
def edit_order(
    order_id: str,
    payload: OrderIn,
    request: Request,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    order = svc.edit(
        user,
        order_id,
        _lines(payload),
        coupon_id=payload.coupon_id,
        shipping_id=payload.shipping_id,
    )
    return OrderUpdatedOut(message="Order updated", order=order_out(order, request))


@router.delete("/{order_id}", response_model=MessageOut)
def delete_order(
    order_id: str,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    svc.delete(user, order_id)
    return MessageOut(message="Order deleted")
