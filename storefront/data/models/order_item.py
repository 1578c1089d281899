from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(String(32), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    product_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    image_urls = Column(JSON, nullable=False, default=list)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False)

    order = relationship("OrderModel", back_populates="items")
