from fastapi import APIRouter, Depends, Request

from storefront.api.deps import get_cart_service, get_current_user, get_order_service
from storefront.api.presenters import cart_out, order_out
from storefront.data.models.user import UserModel
from storefront.domain.schemas import UserProfileOut
from storefront.services.cart_service import CartService
from storefront.services.order_service import OrderService

router = APIRouter(tags=["users"])


@router.get("/me", response_model=UserProfileOut)
def me(
    request: Request,
    user: UserModel = Depends(get_current_user),
    carts: CartService = Depends(get_cart_service),
    orders: OrderService = Depends(get_order_service),
):
    """Profil użytkownika z zamówieniami i koszykiem."""
    cart = carts.get_cart(user)
    return UserProfileOut(
        id=user.id,
        subject_id=user.subject_id,
        email=user.email,
        orders=[order_out(o, request) for o in orders.list_orders(user)],
        cart=cart_out(cart).products,
    )
