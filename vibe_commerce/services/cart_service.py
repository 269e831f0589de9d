# vibe_commerce/services/cart_service.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vibe_commerce.domain.errors import InvalidQuantityError, NotFoundError, StorageFailureError
from vibe_commerce.domain.schemas import MAX_DB_ID, AggregatedCart, CartLineOut
from vibe_commerce.repos.cart_repo import CartRepo
from vibe_commerce.repos.product_repo import ProductRepo
from vibe_commerce.services.lock_service import LockService
from vibe_commerce.utils.money import line_total, cart_total, to_decimal
from vibe_commerce.utils.settings import MAX_CART_QUANTITY
from vibe_commerce.utils.logging import get_logger

logger = get_logger(__name__)


def _storable_id(value: int) -> bool:
    # id spoza zakresu INTEGER nie istnieje, a sterownik rzucilby OverflowError
    return 0 < value <= MAX_DB_ID


@contextmanager
def storage_errors(repo: CartRepo, message: str) -> Iterator[None]:
    """Bledy bazy -> rollback + StorageFailureError, bledy domeny przechodza dalej."""
    try:
        yield
    except SQLAlchemyError as e:
        repo.rollback()
        logger.error(f"{message}: {e}")
        raise StorageFailureError(message) from e


class CartService:
    """
    Use case'y dla koszyka
    query (get_cart) tylko odczyt, agregat liczony za kazdym razem od nowa
    commands (add, update, remove) w sekcji krytycznej koszyka + jednej transakcji
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        max_qty: int = MAX_CART_QUANTITY,
    ):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service
        self.max_qty = max_qty

    #query - odczyt
    def get_cart(self, user_id: str) -> AggregatedCart:
        with storage_errors(self.repo, "Failed to fetch cart"):
            rows = self.repo.get_lines_with_products(user_id)

        items = [
            CartLineOut(
                id=line.id,
                product_id=product.id,
                name=product.name,
                price=to_decimal(product.price),
                image=product.image,
                qty=line.qty,
                line_total=line_total(product.price, line.qty),
            )
            for line, product in rows
        ]
        return AggregatedCart(items=items, total=cart_total(i.line_total for i in items))

    def validate_qty(self, qty) -> int:
        # bool to podklasa int, ale True jako ilosc to blad klienta
        if isinstance(qty, bool) or not isinstance(qty, int) or not 1 <= qty <= self.max_qty:
            raise InvalidQuantityError(f"qty must be an integer between 1 and {self.max_qty}")
        return qty

    #commands
    def add_item(self, user_id: str, product_id: int, qty: int) -> AggregatedCart:
        self.validate_qty(qty)

        with self.lock_service.cart_scope(user_id):
            with storage_errors(self.repo, "Failed to add to cart"):
                if not _storable_id(product_id) or self.products.get_product(product_id) is None:
                    raise NotFoundError("Product not found")

                # przy istniejacej linii ilosc sie sumuje i obcina do max_qty
                self.repo.upsert_line(user_id, product_id, qty, self.max_qty)
                self.repo.commit()

            logger.info(f"Dodano produkt {product_id} x{qty} do koszyka {user_id}")
            return self.get_cart(user_id)

    def update_item(self, user_id: str, line_id: int, qty: int) -> AggregatedCart:
        self.validate_qty(qty)
        if not _storable_id(line_id):
            raise NotFoundError("Cart item not found")

        with self.lock_service.cart_scope(user_id):
            with storage_errors(self.repo, "Failed to update cart item"):
                # warunek na user_id, samo id linii nie wystarczy
                if self.repo.update_qty(user_id, line_id, qty) == 0:
                    self.repo.rollback()
                    raise NotFoundError("Cart item not found")
                self.repo.commit()

            logger.info(f"Linia {line_id} w koszyku {user_id} ma teraz qty={qty}")
            return self.get_cart(user_id)

    def remove_item(self, user_id: str, line_id: int) -> AggregatedCart:
        if not _storable_id(line_id):
            raise NotFoundError("Cart item not found")

        with self.lock_service.cart_scope(user_id):
            with storage_errors(self.repo, "Failed to remove item"):
                if self.repo.delete_line(user_id, line_id) == 0:
                    self.repo.rollback()
                    raise NotFoundError("Cart item not found")
                self.repo.commit()

            logger.info(f"Usunieto linie {line_id} z koszyka {user_id}")
            return self.get_cart(user_id)
