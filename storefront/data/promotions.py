# storefront/data/promotions.py
# Statyczne tabele kuponów i metod dostawy (konfiguracja wdrożenia).

COUPONS = {
    "123": {"code": "Discount $20", "discount": 20},
    "456": {"code": "Discount $100", "discount": 100},
    "789": {"code": "Discount $200", "discount": 200},
}

SHIPPING_OPTIONS = {
    "123": {"shipping_method": "Convenience Store Pickup", "shipping_fee": 60},
    "456": {"shipping_method": "Home Delivery", "shipping_fee": 100},
    "789": {"shipping_method": "Self Pickup", "shipping_fee": 0},
}
