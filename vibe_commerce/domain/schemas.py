# vibe_commerce/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictInt
from pydantic.alias_generators import to_camel

# kwoty trzymane jako Decimal, w JSON wychodza jako liczby
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# INTEGER w sqlite/postgres (bigint), wieksze id i tak nie istnieja
MAX_DB_ID = 2**63 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductOut(CamelModel):
    """Produkt z katalogu (response)."""

    id: int
    name: str
    price: Money
    image: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class AddItemIn(CamelModel):
    """Schema dla dodawania produktu do koszyka."""

    # strict: true albo "3" nie moga zamienic sie po cichu w int
    product_id: StrictInt = Field(..., gt=0, le=MAX_DB_ID, description="ID produktu (musi być > 0)")
    qty: StrictInt = Field(..., description="Ilość, zakres sprawdza CartService")


class UpdateItemIn(CamelModel):
    qty: StrictInt


class CartLineOut(CamelModel):
    id: int
    product_id: int
    name: str
    price: Money
    image: str | None = None
    qty: int
    line_total: Money


class AggregatedCart(CamelModel):
    """Zagregowany widok koszyka, liczony przy kazdym odczycie."""

    items: List[CartLineOut] = Field(default_factory=list)
    total: Money = Decimal("0.00")


class CheckoutIn(CamelModel):
    name: str | None = None
    email: str | None = None


class Receipt(CamelModel):
    """Paragon z checkoutu, zwracany raz i nie zapisywany."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    order_id: str
    customer_name: str
    customer_email: str
    items: List[CartLineOut]
    total: Money
    order_date: datetime
    item_count: int
    warning: str | None = None


class HealthOut(BaseModel):
    status: str
    timestamp: datetime
    uptime: float
    environment: str
