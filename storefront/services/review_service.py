# storefront/services/review_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewImageModel, ReviewModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import AlreadyReviewed, InvalidInput, InvalidRating, NotFound
from storefront.services.order_service import OrderService
from storefront.utils.settings import MAX_REVIEW_IMAGES, MAX_REVIEW_IMAGE_BYTES
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

REVIEW_IMAGE_MEDIA_TYPE = "image/jpeg"


def parse_rating(rating) -> int:
    """Ocena 1-5, liczba całkowita (z formularza przychodzi jako string)."""
    if isinstance(rating, bool) or rating is None:
        raise InvalidRating()
    if isinstance(rating, str):
        rating = rating.strip()
        if not rating.lstrip("-").isdigit():
            raise InvalidRating()
        rating = int(rating)
    if not isinstance(rating, int) or not 1 <= rating <= 5:
        raise InvalidRating()
    return rating


class ReviewService:
    """
    Recenzja zamówienia: najwyżej jedna, z obrazkami (0-5).
    Istniejącej recenzji nie da się nadpisać, trzeba ją najpierw usunąć.
    """

    def __init__(
        self,
        db: Session,
        orders: OrderService,
        max_images: int = MAX_REVIEW_IMAGES,
        max_image_bytes: int = MAX_REVIEW_IMAGE_BYTES,
    ):
        self.db = db
        self.orders = orders
        self.max_images = max_images
        self.max_image_bytes = max_image_bytes

    def add_review(
        self,
        user: UserModel,
        order_id: str,
        comment: Optional[str],
        rating,
        images: Optional[List[bytes]] = None,
    ) -> ReviewModel:
        order = self.orders.get_order(user, order_id)
        rating = parse_rating(rating)

        existing = order.review
        if existing is not None and existing.has_content():
            raise AlreadyReviewed()

        images = list(images or [])
        if len(images) > self.max_images:
            raise InvalidInput(f"At most {self.max_images} images allowed")
        for blob in images:
            if len(blob) > self.max_image_bytes:
                raise InvalidInput(f"Image exceeds {self.max_image_bytes} bytes")

        if existing is not None:
            # pusta recenzja - usuń przed wstawieniem nowej (unikalny order_id)
            order.review = None
            self.db.flush()

        review = ReviewModel(
            comment=comment or "",
            rating=rating,
            images=[ReviewImageModel(position=idx, data=blob) for idx, blob in enumerate(images)],
        )
        order.review = review
        self.orders.commit_order(order)

        logger.info(f"Review added to order {order_id} ({len(images)} image(s))")
        return review

    def delete_review(self, user: UserModel, order_id: str) -> None:
        order = self.orders.find_order(user, order_id)
        if not order or order.review is None:
            raise NotFound("Review not found")

        order.review = None
        self.orders.commit_order(order)
        logger.info(f"Review deleted from order {order_id}")

    def get_review_image(self, user: UserModel, order_id: str, index: int) -> bytes:
        order = self.orders.find_order(user, order_id)
        if not order or order.review is None:
            raise NotFound("Review not found")

        images = order.review.images
        if index < 0 or index >= len(images):
            raise NotFound("Image not found")
        return images[index].data
