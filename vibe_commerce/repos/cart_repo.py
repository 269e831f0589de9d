# vibe_commerce/repos/cart_repo.py
from typing import List, Tuple

from sqlalchemy import select, update, delete, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from vibe_commerce.data.models.cart_item import CartItemModel
from vibe_commerce.data.models.product import ProductModel


class CartRepo:
    """
    Dostep do tabeli cart_items.
    Nie commituje sam z siebie (poza commit()), transakcja nalezy do serwisu.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_lines_with_products(self, user_id: str) -> List[Tuple[CartItemModel, ProductModel]]:
        rows = self.db.execute(
            select(CartItemModel, ProductModel)
            .join(ProductModel, ProductModel.id == CartItemModel.product_id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
            # upsert idzie przez Core, obiekty w identity map moga byc nieaktualne
            .execution_options(populate_existing=True)
        )
        return [(line, product) for line, product in rows]

    def get_line(self, user_id: str, line_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == line_id,
                CartItemModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def upsert_line(self, user_id: str, product_id: int, qty: int, max_qty: int) -> None:
        """
        INSERT ... ON CONFLICT (user_id, product_id) DO UPDATE
        jedna instrukcja, wiec dwa rownolegle add nie stworza dwoch linii
        przy konflikcie qty = min(stare + nowe, max_qty)
        """
        dialect = self.db.get_bind().dialect.name
        table = CartItemModel.__table__

        if dialect == "postgresql":
            stmt = postgresql.insert(table)
            clamp = func.least
        elif dialect == "sqlite":
            stmt = sqlite.insert(table)
            clamp = func.min
        else:
            raise NotImplementedError(f"Upsert nie jest wspierany dla dialektu {dialect}")

        stmt = stmt.values(user_id=user_id, product_id=product_id, qty=qty)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.user_id, table.c.product_id],
            set_={
                "qty": clamp(table.c.qty + stmt.excluded.qty, max_qty),
                "updated_at": func.now(),
            },
        )
        self.db.execute(stmt)

    def update_qty(self, user_id: str, line_id: int, qty: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.id == line_id, CartItemModel.user_id == user_id)
            .values(qty=qty, updated_at=func.now())
        )
        return result.rowcount

    def delete_line(self, user_id: str, line_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.id == line_id,
                CartItemModel.user_id == user_id,
            )
        )
        return result.rowcount

    def clear(self, user_id: str) -> int:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
