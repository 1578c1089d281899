# storefront/domain/errors.py
"""
Błędy domenowe. Każda klasa niesie status HTTP, handler w api/errors.py
zamienia je na odpowiedź JSON.
"""


class StorefrontError(Exception):
    status_code = 500
    kind = "StorefrontError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(StorefrontError):
    status_code = 401
    kind = "Unauthenticated"


class InvalidToken(Unauthenticated):
    status_code = 403


class InvalidInput(StorefrontError):
    status_code = 400
    kind = "InvalidInput"


class InvalidProduct(InvalidInput):
    def __init__(self, product_id: str):
        super().__init__(f"Invalid productId: {product_id}")
        self.product_id = product_id


class InvalidShipping(InvalidInput):
    def __init__(self, shipping_id):
        super().__init__(f"Invalid shippingId: {shipping_id}")
        self.shipping_id = shipping_id


class InvalidQuantity(InvalidInput):
    def __init__(self, message: str = "Invalid quantity"):
        super().__init__(message)


class InvalidRating(InvalidInput):
    def __init__(self, message: str = "Rating must be a number from 1 to 5"):
        super().__init__(message)


class NotFound(StorefrontError):
    status_code = 404
    kind = "NotFound"


class Conflict(StorefrontError):
    status_code = 409
    kind = "Conflict"


class AlreadyReviewed(Conflict):
    def __init__(self, message: str = "Review already exists"):
        super().__init__(message)


class UpstreamUnavailable(StorefrontError):
    status_code = 503
    kind = "UpstreamUnavailable"


class StoreFailure(StorefrontError):
    status_code = 500
    kind = "StoreFailure"


class ConcurrentUpdate(StoreFailure):
    status_code = 409

    def __init__(self, message: str = "Concurrent modification, please retry"):
        super().__init__(message)
