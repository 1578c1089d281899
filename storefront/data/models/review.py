from sqlalchemy import Column, Integer, ForeignKey, String, Text, LargeBinary
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ReviewModel(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    order_id = Column(String(32), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, unique=True)

    comment = Column(Text, nullable=False, default="")
    rating = Column(Integer, nullable=True)

    order = relationship("OrderModel", back_populates="review")
    images = relationship(
        "ReviewImageModel",
        back_populates="review",
        order_by="ReviewImageModel.position",
        cascade="all, delete-orphan",
    )

    def has_content(self) -> bool:
        return bool(self.comment) or self.rating is not None or bool(self.images)


class ReviewImageModel(Base):
    __tablename__ = "review_images"

    id = Column(Integer, primary_key=True)
    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    data = Column(LargeBinary, nullable=False)

    review = relationship("ReviewModel", back_populates="images")
