# vibe_commerce/services/checkout_service.py
import re
import time
import uuid
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vibe_commerce.domain.errors import CheckoutValidationError, EmptyCartError
from vibe_commerce.domain.schemas import Receipt
from vibe_commerce.repos.cart_repo import CartRepo
from vibe_commerce.services.cart_service import CartService
from vibe_commerce.services.lock_service import LockService
from vibe_commerce.services.notification_service import NotificationService
from vibe_commerce.utils.logging import get_logger

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_NAME_LENGTH = 2
CLEAR_FAILED_WARNING = "Checkout succeeded, but failed to clear cart"


def generate_order_id() -> str:
    # ORD-<epoch ms>-<10 znakow z uuid4>, kolizja praktycznie niemozliwa
    return f"ORD-{int(time.time() * 1000)}-{uuid.uuid4().hex[:10].upper()}"


def sanitize_name(name: str) -> str:
    return name.strip().replace("<", "").replace(">", "")


def validate_customer(name: str | None, email: str | None) -> tuple[str, str]:
    """Zwraca (name, email) po normalizacji albo rzuca CheckoutValidationError."""
    # dlugosc liczona po usunieciu < i >, to ta nazwa trafia na paragon
    name = sanitize_name(name).strip() if isinstance(name, str) else ""
    if len(name) < MIN_NAME_LENGTH:
        raise CheckoutValidationError(
            f"Name must be at least {MIN_NAME_LENGTH} characters", field="name"
        )

    email = email.strip() if isinstance(email, str) else ""
    if not email.isascii() or not EMAIL_RE.match(email):
        raise CheckoutValidationError("Please provide a valid email address", field="email")

    return name, email.lower()


class CheckoutService:
    """
    Checkout: walidacja klienta, snapshot koszyka do paragonu i wyczyszczenie koszyka.
    Snapshot i czyszczenie w tej samej sekcji krytycznej co mutacje koszyka.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.repo = CartRepo(db)
        self.cart_service = CartService(db, lock_service)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def checkout(self, user_id: str, name: str | None, email: str | None) -> Receipt:
        # walidacja przed dotknieciem koszyka
        customer_name, customer_email = validate_customer(name, email)

        with self.lock_service.cart_scope(user_id):
            cart = self.cart_service.get_cart(user_id)
            if not cart.items:
                raise EmptyCartError("Cart is empty")

            order_id = generate_order_id()
            warning = None

            try:
                removed = self.repo.clear(user_id)
                self.repo.commit()
                logger.info(f"Koszyk {user_id} wyczyszczony po zamowieniu {order_id} ({removed} linii)")
            except SQLAlchemyError as e:
                # paragon jest wazny, w koszyku moga zostac resztki
                self.repo.rollback()
                logger.error(f"Zamowienie {order_id}: nie udalo sie wyczyscic koszyka {user_id}: {e}")
                warning = CLEAR_FAILED_WARNING

        receipt = Receipt(
            order_id=order_id,
            customer_name=customer_name,
            customer_email=customer_email,
            items=cart.items,
            total=cart.total,
            order_date=datetime.now(timezone.utc),
            item_count=sum(i.qty for i in cart.items),
            warning=warning,
        )
        logger.info(f"Checkout completed: order {order_id} for {customer_name}, total {receipt.total}")

        try:
            self.notification_service.send_receipt_notification(receipt)
        except Exception as e:
            logger.warning(f"Nie udalo sie wyslac powiadomienia dla {order_id}: {e}")

        return receipt
