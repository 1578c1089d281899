from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    #zewnetrzny identyfikator z tokenu, klucz unikalnosci
    subject_id = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=True)

    cart = relationship(
        "CartModel",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    orders = relationship(
        "OrderModel",
        back_populates="user",
        order_by="OrderModel.position",
        cascade="all, delete-orphan",
    )
