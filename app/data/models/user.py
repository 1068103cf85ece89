from sqlalchemy import Column, Integer, String, Numeric

from app.data.database import Base
from app.utils.settings import DEFAULT_ADDRESS, DEFAULT_WALLET_MONEY


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)

    wallet_money = Column(Numeric(12, 2), nullable=False, default=DEFAULT_WALLET_MONEY)
    address = Column(String, nullable=False, default=DEFAULT_ADDRESS)

    def has_set_non_default_address(self) -> bool:
        return self.address != DEFAULT_ADDRESS
