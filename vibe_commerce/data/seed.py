# vibe_commerce/data/seed.py
from decimal import Decimal

import requests
from sqlalchemy.orm import sessionmaker

from vibe_commerce.data.models.product import ProductModel
from vibe_commerce.repos.product_repo import ProductRepo
from vibe_commerce.services.catalog_client import FakeStoreClient
from vibe_commerce.utils.settings import SEED_FROM_API
from vibe_commerce.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PRODUCTS = [
    {"id": 1, "name": "Vibe Tee", "price": Decimal("19.99"), "image": "/images/products/product-1.svg"},
    {"id": 2, "name": "Vibe Hoodie", "price": Decimal("49.99"), "image": "/images/products/product-2.svg"},
    {"id": 3, "name": "Vibe Cap", "price": Decimal("14.99"), "image": "/images/products/product-3.svg"},
    {"id": 4, "name": "Vibe Socks", "price": Decimal("9.99"), "image": "/images/products/product-4.svg"},
]


def _catalog(from_api: bool, client: FakeStoreClient | None) -> list[dict]:
    if not from_api:
        return DEFAULT_PRODUCTS
    try:
        return (client or FakeStoreClient()).fetch_products()
    except requests.RequestException as e:
        logger.warning(f"Fake Store API niedostepne, uzywam domyslnego katalogu: {e}")
        return DEFAULT_PRODUCTS


def seed_products(
    session_factory: sessionmaker,
    from_api: bool = SEED_FROM_API,
    client: FakeStoreClient | None = None,
) -> int:
    """Seeduje katalog tylko gdy tabela products jest pusta. Zwraca liczbe dodanych produktow."""
    db = session_factory()
    try:
        repo = ProductRepo(db)
        if repo.count() > 0:
            logger.info("Produkty juz istnieja, pomijam seed")
            return 0

        products = _catalog(from_api, client)
        repo.add_products(ProductModel(**p) for p in products)
        logger.info(f"Seeded {len(products)} products")
        return len(products)
    finally:
        db.close()
