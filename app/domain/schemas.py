# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal


class Product(BaseModel):
    """Produkt z katalogu (product-service)."""

    id: str
    name: str
    cost: Decimal = Field(..., ge=0)
    category: str | None = None
    rating: int | None = None


class ItemIn(BaseModel):
    """Schema dla dodawania / zmiany ilosci produktu w koszyku."""

    product_id: str = Field(..., min_length=1, alias="productId", description="ID produktu")
    quantity: int = Field(..., gt=0, description="Ilość produktu (musi być > 0)")

    model_config = ConfigDict(populate_by_name=True)


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    product_id: str
    name: str
    cost: Decimal
    quantity: int


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    payment_option: str
    items: List[CartItemOut]
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema dla tworzenia użytkownika."""

    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1, max_length=100, description="Imię użytkownika")
    wallet_money: Decimal | None = Field(None, ge=0)
    address: str | None = Field(None, min_length=20)


class AddressIn(BaseModel):
    """Schema dla ustawienia adresu."""

    address: str = Field(..., min_length=20, max_length=256)


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    email: str
    name: str
    wallet_money: Decimal
    address: str

    model_config = ConfigDict(from_attributes=True)
