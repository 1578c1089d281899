from decimal import Decimal
from unittest.mock import Mock

from storefront.domain.errors import UpstreamUnavailable
from storefront.domain.values import ProductSnapshot
from storefront.services.catalog_service import CatalogCache
from storefront.services.product_client import ProductFeedClient


def snapshot(product_id, price="10"):
    return ProductSnapshot(product_id=product_id, name=f"Product {product_id}", price=Decimal(price))


def test_resolve_known_and_unknown(catalog):
    assert catalog.resolve("p2").price == Decimal("25.50")
    assert catalog.resolve("nope") is None
    assert "p1" in catalog
    assert len(catalog) == 3


def test_reload_replaces_contents():
    client = Mock(spec=ProductFeedClient)
    client.fetch_products.return_value = [snapshot("a"), snapshot("b", "3.99")]
    cache = CatalogCache(client=client)

    assert cache.reload() is True

    assert len(cache) == 2
    assert cache.resolve("b").price == Decimal("3.99")
    assert cache.loaded_at is not None
    assert cache.last_error is None


def test_failed_reload_falls_back_to_empty():
    client = Mock(spec=ProductFeedClient)
    client.fetch_products.side_effect = [
        [snapshot("a")],
        UpstreamUnavailable("Catalog feed unavailable: boom"),
    ]
    cache = CatalogCache(client=client)
    cache.reload()

    assert cache.reload() is False

    assert len(cache) == 0
    assert cache.resolve("a") is None
    assert cache.loaded_at is None
    assert "boom" in cache.last_error


def test_successful_reload_after_failure_recovers():
    client = Mock(spec=ProductFeedClient)
    client.fetch_products.side_effect = [UpstreamUnavailable("down"), [snapshot("a")]]
    cache = CatalogCache(client=client)

    assert cache.reload() is False
    assert cache.reload() is True
    assert cache.resolve("a") is not None
    assert cache.last_error is None
