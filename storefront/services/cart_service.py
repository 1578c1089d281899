# storefront/services/cart_service.py
from decimal import Decimal
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import ConcurrentUpdate, InvalidInput, InvalidProduct, NotFound
from storefront.domain.values import LineRequest, ProductSnapshot
from storefront.repos.cart_repo import CartRepo
from storefront.services.catalog_service import CatalogCache
from storefront.services.pricing_service import validate_quantity
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_total(cart: CartModel) -> Decimal:
    return sum((i.price * i.quantity for i in cart.items), Decimal("0.00"))


class CartService:
    """
    Koszyk użytkownika (jeden na użytkownika, jedna pozycja na produkt).
    Każda zmiana podbija wersję koszyka warunkowym UPDATE (optimistic locking),
    więc dwa równoległe żądania tego samego użytkownika nie gubią zmian.
    """

    def __init__(self, db: Session, catalog: CatalogCache):
        self.repo = CartRepo(db)
        self.catalog = catalog

    #query
    def get_cart(self, user: UserModel) -> CartModel:
        cart = self.repo.get_cart_by_user(user.id)
        if cart is None:
            cart = self.repo.create_cart(CartModel(user_id=user.id, version=1))
            self.repo.commit()
        return cart

    #commands
    def add_or_merge(self, user: UserModel, lines: List[LineRequest]) -> CartModel:
        if not lines:
            raise InvalidInput("Products required")

        # najpierw walidacja wszystkich pozycji, potem zmiany
        resolved: List[tuple[ProductSnapshot, int]] = []
        for line in lines:
            validate_quantity(line.quantity)
            product = self.catalog.resolve(line.product_id)
            if product is None:
                raise InvalidProduct(line.product_id)
            resolved.append((product, line.quantity))

        cart = self.get_cart(user)
        by_product: Dict[str, CartItemModel] = {i.product_id: i for i in cart.items}

        for product, quantity in resolved:
            existing = by_product.get(product.product_id)
            if existing:
                logger.info(
                    f"Product {product.product_id} already in cart {cart.id}, "
                    f"quantity {existing.quantity} -> {existing.quantity + quantity}"
                )
                existing.quantity += quantity
            else:
                logger.info(f"Adding product {product.product_id} to cart {cart.id}")
                item = CartItemModel(
                    product_id=product.product_id,
                    name=product.name,
                    image_urls=list(product.image_urls),
                    price=product.price,
                    category=product.category,
                    quantity=quantity,
                )
                cart.items.append(item)
                by_product[product.product_id] = item

        self._commit(cart)
        return cart

    def remove(self, user: UserModel, product_ids: Iterable[str]) -> int:
        wanted = {str(pid) for pid in product_ids}
        if not wanted:
            raise InvalidInput("productIds must be a non-empty array")

        cart = self.get_cart(user)
        removed = self.remove_exact(cart, wanted)

        if removed == 0:
            raise NotFound("No matching products found in cart")

        self._commit(cart)
        logger.info(f"Deleted {removed} product(s) from cart {cart.id}")
        return removed

    def set_quantity(self, user: UserModel, product_id: str, quantity) -> CartItemModel:
        validate_quantity(quantity)

        cart = self.get_cart(user)
        item = next((i for i in cart.items if i.product_id == str(product_id)), None)
        if item is None:
            raise NotFound("Product not in cart")

        item.quantity = quantity
        self._commit(cart)
        return item

    def remove_exact(self, cart: CartModel, product_ids: Iterable[str]) -> int:
        """
        Usuwa całe pozycje o podanych productId, bez commita.
        Używane też przy tworzeniu zamówienia (w jego transakcji).
        """
        wanted = {str(pid) for pid in product_ids}
        doomed = [i for i in cart.items if i.product_id in wanted]
        for item in doomed:
            cart.items.remove(item)
        return len(doomed)

    def bump_version(self, cart: CartModel) -> None:
        # UPDATE ... WHERE version = stara wersja, 0 wierszy = ktos nas wyprzedzil
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"version": cart.version + 1},
        )
        if rowcount == 0:
            self.repo.rollback()
            raise ConcurrentUpdate("Cart was modified by another request")

    def _commit(self, cart: CartModel) -> None:
        self.bump_version(cart)
        self.repo.commit()
