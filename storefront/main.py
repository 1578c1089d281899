# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from storefront.api.errors import register_exception_handlers
from storefront.api.routers import carts, health, orders, reviews, users
from storefront.api.routers import promotions as promotions_router
from storefront.data.database import init_db
from storefront.services.auth_service import TokenVerifier
from storefront.services.catalog_service import CatalogCache
from storefront.services.promotion_service import PromotionService
from storefront.utils.settings import CORS_ORIGINS, PORT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
        logger.info("Database tables created")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    # jednorazowe ładowanie katalogu, błąd => pusty katalog
    app.state.catalog.reload()
    yield


def create_app(
    catalog: CatalogCache | None = None,
    promotions: PromotionService | None = None,
    token_verifier: TokenVerifier | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.catalog = catalog or CatalogCache()
    app.state.promotions = promotions or PromotionService()
    app.state.token_verifier = token_verifier or TokenVerifier()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(promotions_router.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(reviews.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
