# vibe_commerce/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vibe_commerce.data.database import get_db
from vibe_commerce.domain.errors import StorageFailureError
from vibe_commerce.domain.schemas import ProductOut
from vibe_commerce.repos.product_repo import ProductRepo

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    try:
        return ProductRepo(db).list_products()
    except SQLAlchemyError as e:
        raise StorageFailureError("Failed to fetch products") from e
