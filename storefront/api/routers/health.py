# storefront/api/routers/health.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_catalog
from storefront.services.catalog_service import CatalogCache

router = APIRouter(tags=["health"])


@router.get("/")
@router.get("/health")
def health(catalog: CatalogCache = Depends(get_catalog)):
    return {
        "status": "ok",
        "catalog": {
            "products": len(catalog),
            "loaded_at": catalog.loaded_at,
            "last_error": catalog.last_error,
        },
    }
