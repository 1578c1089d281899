#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_cart_service, get_current_user
from storefront.api.presenters import cart_out
from storefront.data.models.user import UserModel
from storefront.domain.schemas import (
    CartAddIn,
    CartOut,
    CartRemoveIn,
    CartUpdatedOut,
    MessageOut,
    QuantityIn,
)
from storefront.domain.values import LineRequest
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    return cart_out(svc.get_cart(user))


@router.post("", response_model=CartUpdatedOut)
def add_to_cart(
    payload: CartAddIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    """Dodaje produkty, ten sam productId zwiększa ilość."""
    lines = [LineRequest(product_id=p.product_id, quantity=p.quantity) for p in payload.products]
    cart = svc.add_or_merge(user, lines)
    return CartUpdatedOut(message="Add to cart successfully", cart=cart_out(cart))


@router.delete("", response_model=MessageOut)
def remove_from_cart(
    payload: CartRemoveIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    removed = svc.remove(user, payload.product_ids)
    return MessageOut(message=f"Deleted {removed} product(s) from cart")


@router.put("/{product_id}", response_model=MessageOut)
def update_quantity(
    product_id: str,
    payload: QuantityIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    svc.set_quantity(user, product_id, payload.quantity)
    return MessageOut(message="Cart updated successfully")
