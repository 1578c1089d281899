from decimal import Decimal
from unittest.mock import patch

import pytest

from storefront.domain.errors import ConcurrentUpdate, InvalidProduct, InvalidShipping, NotFound
from storefront.domain.values import LineRequest, ProductSnapshot


def line(product_id, quantity):
    return LineRequest(product_id=product_id, quantity=quantity)


def test_create_stores_priced_order(order_service, user):
    order_id = order_service.create(user, [line("p1", 2)], coupon_id="123", shipping_id="456")

    order = order_service.get_order(user, order_id)
    assert order.total_amount == Decimal("100")
    assert order.shipping_method == "Home Delivery"
    assert order.shipping_fee == Decimal("100")
    assert (order.coupon_code, order.coupon_discount) == ("Discount $20", Decimal("20"))
    assert [(i.product_id, i.quantity, i.price) for i in order.items] == [("p1", 2, Decimal("10"))]
    assert order.review is None
    assert order.created_at is not None


def test_create_without_coupon_leaves_coupon_empty(order_service, user):
    order_id = order_service.create(user, [line("p2", 1)], coupon_id="bogus", shipping_id="123")

    order = order_service.get_order(user, order_id)
    assert order.coupon_code is None
    assert order.coupon_discount is None
    assert order.total_amount == Decimal("85.50")


def test_create_removes_whole_ordered_lines_from_cart(order_service, cart_service, user):
    cart_service.add_or_merge(user, [line("p1", 5), line("p2", 1)])

    order_service.create(user, [line("p1", 1)], shipping_id="789")

    cart = cart_service.get_cart(user)
    assert {i.product_id: i.quantity for i in cart.items} == {"p2": 1}


def test_failed_create_leaves_cart_and_orders_untouched(order_service, cart_service, user):
    cart_service.add_or_merge(user, [line("p1", 1)])

    with pytest.raises(InvalidShipping):
        order_service.create(user, [line("p1", 1)], shipping_id="nope")
    with pytest.raises(InvalidProduct):
        order_service.create(user, [line("p1", 1), line("ghost", 1)], shipping_id="456")

    assert [i.product_id for i in cart_service.get_cart(user).items] == ["p1"]
    assert order_service.list_orders(user) == []


def test_catalog_price_change_does_not_touch_existing_order(order_service, catalog, user):
    order_id = order_service.create(user, [line("p1", 2)], shipping_id="456")

    repriced = ProductSnapshot(product_id="p1", name="Mug", price=Decimal("999"))
    catalog.replace([repriced, catalog.resolve("p2"), catalog.resolve("p3")])

    order = order_service.get_order(user, order_id)
    assert order.total_amount == Decimal("120")
    assert order.items[0].price == Decimal("10")


def test_create_delete_create_gives_new_id_same_total(order_service, user):
    first = order_service.create(user, [line("p1", 2)], coupon_id="123", shipping_id="456")
    first_total = order_service.get_order(user, first).total_amount
    order_service.delete(user, first)

    second = order_service.create(user, [line("p1", 2)], coupon_id="123", shipping_id="456")

    assert second != first
    assert order_service.get_order(user, second).total_amount == first_total


def test_delete_unknown_order_is_not_found(order_service, user):
    order_id = order_service.create(user, [line("p1", 1)], shipping_id="456")
    order_service.delete(user, order_id)

    with pytest.raises(NotFound):
        order_service.delete(user, order_id)
    with pytest.raises(NotFound):
        order_service.delete(user, "0" * 32)


def test_edit_reprices_from_scratch(order_service, user):
    order_id = order_service.create(user, [line("p1", 2)], coupon_id="123", shipping_id="456")
    before = order_service.get_order(user, order_id).created_at

    order = order_service.edit(user, order_id, [line("p2", 2)], coupon_id=None, shipping_id="789")

    assert [(i.product_id, i.quantity) for i in order.items] == [("p2", 2)]
    assert order.total_amount == Decimal("51")
    assert order.shipping_method == "Self Pickup"
    assert order.shipping_fee == Decimal("0")
    assert order.coupon_code is None
    assert order.coupon_discount is None
    assert order.created_at >= before


def test_edit_with_invalid_coupon_clears_coupon(order_service, user):
    order_id = order_service.create(user, [line("p1", 1)], coupon_id="456", shipping_id="456")

    order = order_service.edit(user, order_id, [line("p1", 1)], coupon_id="nope", shipping_id="456")

    assert order.coupon_code is None
    assert order.total_amount == Decimal("110")


def test_edit_unknown_order_is_not_found(order_service, user):
    with pytest.raises(NotFound):
        order_service.edit(user, "missing", [line("p1", 1)], shipping_id="456")


def test_failed_edit_keeps_previous_order(order_service, user):
    order_id = order_service.create(user, [line("p1", 1)], shipping_id="456")

    with pytest.raises(InvalidProduct):
        order_service.edit(user, order_id, [line("ghost", 1)], shipping_id="456")
    with pytest.raises(InvalidShipping):
        order_service.edit(user, order_id, [line("p2", 1)], shipping_id="000")

    order = order_service.get_order(user, order_id)
    assert [i.product_id for i in order.items] == ["p1"]
    assert order.total_amount == Decimal("110")


def test_edit_keeps_review(order_service, review_service, user):
    order_id = order_service.create(user, [line("p1", 1)], shipping_id="456")
    review_service.add_review(user, order_id, comment="nice", rating=4, images=[b"img"])

    order = order_service.edit(user, order_id, [line("p3", 1)], shipping_id="789")

    assert order.review.comment == "nice"
    assert order.review.rating == 4


def test_orders_keep_creation_order_after_edit(order_service, user):
    first = order_service.create(user, [line("p1", 1)], shipping_id="456")
    second = order_service.create(user, [line("p2", 1)], shipping_id="456")

    order_service.edit(user, first, [line("p3", 1)], shipping_id="456")

    assert [o.id for o in order_service.list_orders(user)] == [first, second]


def test_orders_are_scoped_to_owner(order_service, user, other_user):
    order_id = order_service.create(user, [line("p1", 1)], shipping_id="456")

    with pytest.raises(NotFound):
        order_service.get_order(other_user, order_id)
    with pytest.raises(NotFound):
        order_service.delete(other_user, order_id)
    assert order_service.list_orders(other_user) == []


def test_order_version_increases_on_edit(order_service, user):
    order_id = order_service.create(user, [line("p1", 1)], shipping_id="456")

    order_service.edit(user, order_id, [line("p1", 2)], shipping_id="456")

    assert order_service.get_order(user, order_id).version == 2


def test_order_position_collision_is_concurrent_update(order_service, cart_service, user):
    first = order_service.create(user, [line("p1", 1)], shipping_id="456")
    cart_service.add_or_merge(user, [line("p2", 1)])

    # drugie żądanie odczytało tę samą pozycję przed zapisem pierwszego
    with patch.object(order_service.repo, "next_position", return_value=1):
        with pytest.raises(ConcurrentUpdate):
            order_service.create(user, [line("p2", 1)], shipping_id="456")

    assert [o.id for o in order_service.list_orders(user)] == [first]
    assert [i.product_id for i in cart_service.get_cart(user).items] == ["p2"]
