import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


def new_order_id() -> str:
    return uuid.uuid4().hex


class OrderModel(Base):
    __tablename__ = "orders"
    __table_args__ = (UniqueConstraint("user_id", "position", name="u_user_order_position"),)

    id = Column(String(32), primary_key=True, default=new_order_id)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # kolejność zamówień użytkownika, created_at zmienia się przy edycji
    position = Column(Integer, nullable=False)

    # None = pole wyczyszczone (np. kupon usuniety przy edycji)
    shipping_method = Column(String, nullable=True)
    shipping_fee = Column(Numeric(10, 2), nullable=True)
    coupon_code = Column(String, nullable=True)
    coupon_discount = Column(Numeric(10, 2), nullable=True)

    total_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    version = Column(Integer, nullable=False, default=1)

    user = relationship("UserModel", back_populates="orders")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        order_by="OrderItemModel.position",
        cascade="all, delete-orphan",
    )
    review = relationship(
        "ReviewModel",
        back_populates="order",
        uselist=False,
        cascade="all, delete-orphan",
    )
