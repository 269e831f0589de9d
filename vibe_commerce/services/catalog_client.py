# vibe_commerce/services/catalog_client.py
from decimal import Decimal
from typing import List

import requests

from vibe_commerce.utils.retry import http_retry
from vibe_commerce.utils.settings import FAKE_STORE_API_URL, SEED_API_LIMIT
from vibe_commerce.utils.logging import get_logger

logger = get_logger(__name__)


class FakeStoreClient:
    """Klient Fake Store API, uzywany tylko do seedowania katalogu."""

    def __init__(self, url: str | None = None, timeout: int = 5, limit: int = SEED_API_LIMIT):
        self.url = url or FAKE_STORE_API_URL
        self.timeout = timeout
        self.limit = limit

    @http_retry()
    def fetch_products(self) -> List[dict]:
        logger.info(f"FakeStoreClient GET {self.url}")

        resp = requests.get(self.url, timeout=self.timeout)
        resp.raise_for_status()

        # mapowanie na nasz schemat: title -> name
        return [
            {
                "id": int(p["id"]),
                "name": p["title"],
                "price": Decimal(str(p["price"])),
                "image": p.get("image"),
            }
            for p in resp.json()[: self.limit]
        ]
