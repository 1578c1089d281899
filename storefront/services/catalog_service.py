# storefront/services/catalog_service.py
import threading
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from storefront.domain.errors import UpstreamUnavailable
from storefront.domain.values import ProductSnapshot
from storefront.services.product_client import ProductFeedClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogCache:
    """
    Katalog produktów w pamięci procesu.

    -ładowany z zewnętrznego feedu przy starcie (reload)
    -odczyty bez blokowania, podmiana całej mapy pod lockiem
    -błąd feedu => pusty katalog (fail closed), każde odwołanie do produktu
     kończy się InvalidProduct aż do udanego reload
    """

    def __init__(self, client: ProductFeedClient | None = None):
        self.client = client or ProductFeedClient()
        self._lock = threading.Lock()
        self._products: Dict[str, ProductSnapshot] = {}
        self.loaded_at: Optional[datetime] = None
        self.last_error: Optional[str] = None

    def resolve(self, product_id: str) -> ProductSnapshot | None:
        return self._products.get(str(product_id))

    def replace(self, products: Iterable[ProductSnapshot]) -> None:
        mapping = {p.product_id: p for p in products}
        with self._lock:
            self._products = mapping
            self.loaded_at = datetime.now(timezone.utc)
            self.last_error = None

    def reload(self) -> bool:
        try:
            products = self.client.fetch_products()
        except UpstreamUnavailable as e:
            logger.error(f"Catalog reload failed, falling back to empty catalog: {e}")
            with self._lock:
                self._products = {}
                self.loaded_at = None
                self.last_error = str(e)
            return False

        self.replace(products)
        logger.info(f"Catalog loaded: {len(products)} products")
        return True

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id) -> bool:
        return str(product_id) in self._products
