# app/services/notification_service.py
from decimal import Decimal

from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_checkout_notification(user_id: int, total: Decimal):
        send_checkout_notification_task.delay(user_id, str(total))


@celery_app.task(name="app.services.notification_service.send_checkout_notification_task")
def send_checkout_notification_task(user_id: int, total: str):
    logger.info(f"[NOTIFICATION] User {user_id}: checkout completed, charged {total}")
    return {"user_id": user_id, "total": total, "status": "sent"}
