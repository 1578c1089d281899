# storefront/api/deps.py
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.services.auth_service import Identity, TokenVerifier, bearer_token
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogCache
from storefront.services.order_service import OrderService
from storefront.services.pricing_service import PricingService
from storefront.services.promotion_service import PromotionService
from storefront.services.review_service import ReviewService
from storefront.services.user_service import UserService


# obiekty współdzielone trzyma app.state (tworzone w create_app)
def get_catalog(request: Request) -> CatalogCache:
    return request.app.state.catalog


def get_promotions(request: Request) -> PromotionService:
    return request.app.state.promotions


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def get_identity(
    authorization: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    return verifier.verify(bearer_token(authorization))


def get_current_user(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> UserModel:
    return UserService(db).resolve(identity.subject_id, identity.email)


def get_cart_service(
    db: Session = Depends(get_db),
    catalog: CatalogCache = Depends(get_catalog),
) -> CartService:
    return CartService(db=db, catalog=catalog)


def get_order_service(
    db: Session = Depends(get_db),
    catalog: CatalogCache = Depends(get_catalog),
    promotions: PromotionService = Depends(get_promotions),
) -> OrderService:
    return OrderService(
        db=db,
        pricing=PricingService(catalog, promotions),
        cart_service=CartService(db=db, catalog=catalog),
    )


def get_review_service(
    db: Session = Depends(get_db),
    orders: OrderService = Depends(get_order_service),
) -> ReviewService:
    return ReviewService(db=db, orders=orders)
