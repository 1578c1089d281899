# storefront/services/order_service.py
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, new_order_id
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import ConcurrentUpdate, NotFound
from storefront.domain.values import LineRequest, PriceQuote
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartService
from storefront.services.pricing_service import PricingService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _order_items(quote: PriceQuote) -> List[OrderItemModel]:
    return [
        OrderItemModel(
            position=idx,
            product_id=line.product.product_id,
            name=line.product.name,
            image_urls=list(line.product.image_urls),
            price=line.product.price,
            category=line.product.category,
            quantity=line.quantity,
        )
        for idx, line in enumerate(quote.lines)
    ]


class OrderService:
    """
    Zamówienia użytkownika.
    Pozycje są kopią katalogu z chwili wyceny, późniejsze zmiany cen
    nie zmieniają zapisanych zamówień.
    """

    def __init__(self, db: Session, pricing: PricingService, cart_service: CartService):
        self.db = db
        self.repo = OrderRepo(db)
        self.pricing = pricing
        self.cart_service = cart_service

    def list_orders(self, user: UserModel) -> List[OrderModel]:
        return self.repo.list_user_orders(user.id)

    def find_order(self, user: UserModel, order_id: str) -> Optional[OrderModel]:
        return self.repo.get_user_order(user.id, order_id)

    def get_order(self, user: UserModel, order_id: str) -> OrderModel:
        order = self.find_order(user, order_id)
        if not order:
            raise NotFound("Order not found")
        return order

    def create(
        self,
        user: UserModel,
        lines: List[LineRequest],
        coupon_id: Optional[str] = None,
        shipping_id: Optional[str] = None,
    ) -> str:
        """
        Use Case: utworzenie zamówienia.

        1. Wycena (dostawa, produkty, kupon)
        2. Zapis zamówienia na końcu listy użytkownika
        3. Usunięcie zamówionych produktów z koszyka (całe pozycje)
        Wszystko w jednej transakcji.
        """
        quote = self.pricing.price_order(lines, coupon_id=coupon_id, shipping_id=shipping_id)

        cart = self.cart_service.get_cart(user)

        order = OrderModel(
            id=new_order_id(),
            user_id=user.id,
            position=self.repo.next_position(user.id),
            items=_order_items(quote),
            shipping_method=quote.shipping_method,
            shipping_fee=quote.shipping_fee,
            coupon_code=quote.coupon.code if quote.coupon else None,
            coupon_discount=quote.coupon.discount if quote.coupon else None,
            total_amount=quote.total,
            created_at=datetime.now(timezone.utc),
            version=1,
        )
        self.repo.add_order(order)
        try:
            self.db.flush()
        except IntegrityError as e:
            # równoległe utworzenie zajęło tę samą pozycję
            self.repo.rollback()
            logger.warning(f"Order position {order.position} taken for user {user.id}")
            raise ConcurrentUpdate() from e

        removed = self.cart_service.remove_exact(cart, [line.product_id for line in lines])
        if removed:
            self.cart_service.bump_version(cart)

        order_id = order.id
        self.repo.commit()

        logger.info(f"Order {order_id} created for user {user.id}, total {quote.total}")
        return order_id

    def edit(
        self,
        user: UserModel,
        order_id: str,
        lines: List[LineRequest],
        coupon_id: Optional[str] = None,
        shipping_id: Optional[str] = None,
    ) -> OrderModel:
        """
        Use Case: edycja zamówienia - wycena od nowa, nadpisanie pól.
        Brak/nieprawidłowy kupon czyści kupon, recenzja zostaje.
        """
        order = self.get_order(user, order_id)
        quote = self.pricing.price_order(lines, coupon_id=coupon_id, shipping_id=shipping_id)

        order.items = _order_items(quote)
        order.shipping_method = quote.shipping_method
        order.shipping_fee = quote.shipping_fee
        order.coupon_code = quote.coupon.code if quote.coupon else None
        order.coupon_discount = quote.coupon.discount if quote.coupon else None
        order.total_amount = quote.total
        order.created_at = datetime.now(timezone.utc)

        self.commit_order(order)

        logger.info(f"Order {order_id} updated for user {user.id}, total {quote.total}")
        return self.get_order(user, order_id)

    def delete(self, user: UserModel, order_id: str) -> None:
        order = self.get_order(user, order_id)
        self.repo.delete_order(order)
        self.repo.commit()
        logger.info(f"Order {order_id} deleted for user {user.id}")

    def commit_order(self, order: OrderModel) -> None:
        rowcount = self.repo.update_order_version(
            order_id=order.id,
            old_version=order.version,
            new_data={"version": order.version + 1},
        )
        if rowcount == 0:
            self.repo.rollback()
            raise ConcurrentUpdate("Order was modified by another request")
        self.repo.commit()
