#app/data/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.utils.settings import DEFAULT_PAYMENT_OPTION


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    # jeden koszyk na uzytkownika, unique daje atomowe "insert if absent"
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    payment_option = Column(String, nullable=False, default=DEFAULT_PAYMENT_OPTION)
    version = Column(Integer, nullable=False, default=1)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.position",
    )
