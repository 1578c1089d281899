"""
Shared pytest fixtures.

Baza to SQLite w pamięci (ustawiana przed importem aplikacji), tabele
tworzone od nowa dla każdego testu. Katalog jest ładowany ręcznie,
bez zewnętrznego feedu.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_SECRET_KEY"] = "test-secret"

from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from storefront.data.database import Base, SessionLocal, engine
import storefront.data.models  # noqa: F401
from storefront.domain.values import ProductSnapshot
from storefront.main import create_app
from storefront.services.auth_service import TokenVerifier
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogCache
from storefront.services.order_service import OrderService
from storefront.services.pricing_service import PricingService
from storefront.services.product_client import ProductFeedClient
from storefront.services.promotion_service import PromotionService
from storefront.services.review_service import ReviewService
from storefront.services.user_service import UserService

SECRET = "test-secret"

PRODUCTS = [
    ProductSnapshot(
        product_id="p1",
        name="Ceramic Mug",
        image_urls=["https://img.example.com/p1.jpg"],
        price=Decimal("10"),
        category="kitchen",
    ),
    ProductSnapshot(
        product_id="p2",
        name="Linen Towel",
        image_urls=["https://img.example.com/p2a.jpg", "https://img.example.com/p2b.jpg"],
        price=Decimal("25.50"),
        category="home",
    ),
    ProductSnapshot(
        product_id="p3",
        name="Sticker",
        image_urls=[],
        price=Decimal("5"),
        category=None,
    ),
]


def make_token(subject_id: str, email: str | None = None, secret: str = SECRET) -> str:
    claims = {"sub": subject_id}
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog() -> CatalogCache:
    cache = CatalogCache(client=Mock(spec=ProductFeedClient))
    cache.replace(PRODUCTS)
    return cache


@pytest.fixture
def promotions() -> PromotionService:
    return PromotionService()


@pytest.fixture
def pricing(catalog, promotions) -> PricingService:
    return PricingService(catalog, promotions)


@pytest.fixture
def user(db):
    return UserService(db).resolve("uid-1", "alice@example.com")


@pytest.fixture
def other_user(db):
    return UserService(db).resolve("uid-2", "bob@example.com")


@pytest.fixture
def cart_service(db, catalog) -> CartService:
    return CartService(db=db, catalog=catalog)


@pytest.fixture
def order_service(db, pricing, cart_service) -> OrderService:
    return OrderService(db=db, pricing=pricing, cart_service=cart_service)


@pytest.fixture
def review_service(db, order_service) -> ReviewService:
    return ReviewService(db=db, orders=order_service)


@pytest.fixture
def app(catalog, promotions):
    return create_app(
        catalog=catalog,
        promotions=promotions,
        token_verifier=TokenVerifier(secret_key=SECRET, algorithms=["HS256"]),
    )


@pytest.fixture
def client(app):
    # bez context managera: lifespan (feed katalogu) nie jest uruchamiany
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token('uid-1', 'alice@example.com')}"}


@pytest.fixture
def other_headers():
    return {"Authorization": f"Bearer {make_token('uid-2', 'bob@example.com')}"}


@pytest.fixture
def token_factory():
    return make_token
