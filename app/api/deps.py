# app/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.services.cart_service import CartService
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.services.product_client import ProductClient


def get_product_client() -> ProductClient:
    return ProductClient()


def get_lock_service() -> LockService:
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_cart_service(
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> CartService:
    return CartService(
        db=db,
        product_client=product_client,
        lock_service=lock_service,
        notification_service=notification_service,
    )
