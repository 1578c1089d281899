from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(String, nullable=False)

    # kopia danych produktu z chwili dodania
    name = Column(String, nullable=False)
    image_urls = Column(JSON, nullable=False, default=list)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String, nullable=True)

    quantity = Column(Integer, nullable=False)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (UniqueConstraint("cart_id", "product_id", name="u_cart_product"),)
