# vibe_commerce/services/notification_service.py
from vibe_commerce.celery_worker import celery_app
from vibe_commerce.domain.schemas import Receipt
from vibe_commerce.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania potwierdzen zamowienia.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_receipt_notification(receipt: Receipt):
        send_receipt_notification_task.delay(
            receipt.order_id,
            receipt.customer_email,
            str(receipt.total),
            receipt.item_count,
        )


@celery_app.task(name="vibe_commerce.services.notification_service.send_receipt_notification_task")
def send_receipt_notification_task(order_id: str, email: str, total: str, item_count: int):
    """
    Celery task - w prawdziwym systemie wyslalby email z paragonem.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] {email}: order {order_id}, {item_count} items, total {total}")

    return {"order_id": order_id, "email": email, "status": "sent"}
