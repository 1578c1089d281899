# storefront/services/product_client.py
from decimal import Decimal, InvalidOperation
from typing import List

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from requests import RequestException
from pydantic import ValidationError

from storefront.domain.errors import UpstreamUnavailable
from storefront.domain.values import ProductSnapshot
from storefront.utils.settings import CATALOG_FEED_URL, CATALOG_FEED_TIMEOUT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


def parse_feed(payload) -> List[ProductSnapshot]:
    """{"products": [{id, name, imageUrl, price, category}]} -> snapshoty"""
    if not isinstance(payload, dict) or not isinstance(payload.get("products"), list):
        raise UpstreamUnavailable("Catalog feed payload has no products list")

    products = []
    for item in payload["products"]:
        try:
            image_urls = item.get("imageUrl") or []
            if isinstance(image_urls, str):
                image_urls = [image_urls]
            products.append(
                ProductSnapshot(
                    product_id=str(item["id"]),
                    name=item["name"],
                    image_urls=list(image_urls),
                    price=Decimal(str(item["price"])),
                    category=item.get("category"),
                )
            )
        except (KeyError, TypeError, AttributeError, InvalidOperation, ValidationError) as e:
            raise UpstreamUnavailable(f"Malformed catalog entry: {item!r}") from e
    return products


class ProductFeedClient:
    def __init__(self, url: str | None = None, timeout: int = CATALOG_FEED_TIMEOUT):
        self.url = url or CATALOG_FEED_URL
        self.timeout = timeout

    @http_retry()
    def _get(self) -> dict:
        logger.info(f"ProductFeedClient GET {self.url}")

        resp = requests.get(self.url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def fetch_products(self) -> List[ProductSnapshot]:
        try:
            payload = self._get()
        except (RequestException, ValueError) as e:
            raise UpstreamUnavailable(f"Catalog feed unavailable: {e}") from e
        return parse_feed(payload)
