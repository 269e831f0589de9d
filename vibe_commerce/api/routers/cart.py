# vibe_commerce/api/routers/cart.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from vibe_commerce.api.deps import get_current_user_id, get_lock_service
from vibe_commerce.data.database import get_db
from vibe_commerce.domain.schemas import MAX_DB_ID, AddItemIn, AggregatedCart, UpdateItemIn
from vibe_commerce.services.cart_service import CartService
from vibe_commerce.services.lock_service import LockService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, lock_service=lock_service)


@router.get("", response_model=AggregatedCart)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.get_cart(user_id)


@router.post("", response_model=AggregatedCart)
def add_item(
    payload: AddItemIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.add_item(user_id, payload.product_id, payload.qty)


@router.put("/{line_id}", response_model=AggregatedCart)
def update_item(
    *,
    line_id: int = Path(..., gt=0, le=MAX_DB_ID),
    payload: UpdateItemIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.update_item(user_id, line_id, payload.qty)


@router.delete("/{line_id}", response_model=AggregatedCart)
def remove_item(
    line_id: int = Path(..., gt=0, le=MAX_DB_ID),
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return svc.remove_item(user_id, line_id)
