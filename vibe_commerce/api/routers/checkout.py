# vibe_commerce/api/routers/checkout.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vibe_commerce.api.deps import get_current_user_id, get_lock_service
from vibe_commerce.data.database import get_db
from vibe_commerce.domain.schemas import CheckoutIn, Receipt
from vibe_commerce.services.checkout_service import CheckoutService
from vibe_commerce.services.lock_service import LockService

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CheckoutService:
    return CheckoutService(db=db, lock_service=lock_service)


@router.post("", response_model=Receipt, response_model_exclude_none=True)
def checkout(
    payload: CheckoutIn,
    user_id: str = Depends(get_current_user_id),
    svc: CheckoutService = Depends(get_service),
):
    """
    Tworzy paragon z koszyka i czysci koszyk.
    Gdy czyszczenie sie nie uda paragon i tak wraca (200) z polem warning.
    """
    return svc.checkout(user_id, payload.name, payload.email)
