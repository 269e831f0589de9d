# vibe_commerce/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./vibe_commerce.db")
# sqlite czeka tyle na zwolnienie blokady pliku zanim rzuci "database is locked"
DB_BUSY_TIMEOUT_SECONDS = float(os.getenv("DB_BUSY_TIMEOUT_SECONDS", 15))
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = _flag("CELERY_TASK_ALWAYS_EAGER")

MAX_CART_QUANTITY = int(os.getenv("MAX_CART_QUANTITY", 10))
MOCK_USER_ID = os.getenv("MOCK_USER_ID", "mock-user")

# local = per-process threading locks, redis = shared SET NX locks
LOCK_BACKEND = os.getenv("LOCK_BACKEND", "local")
LOCK_TIMEOUT_SECONDS = float(os.getenv("LOCK_TIMEOUT_SECONDS", 5))
# redis lock musi przezyc najdluzsze czekanie bazy wewnatrz sekcji
LOCK_TTL_SECONDS = int(os.getenv("LOCK_TTL_SECONDS", 30))

# tenacity: liczba prob i baza backoffu wykladniczego (sekundy)
HTTP_RETRY_ATTEMPTS = int(os.getenv("HTTP_RETRY_ATTEMPTS", 3))
HTTP_RETRY_BACKOFF = float(os.getenv("HTTP_RETRY_BACKOFF", 0.5))
REDIS_RETRY_ATTEMPTS = int(os.getenv("REDIS_RETRY_ATTEMPTS", 3))
REDIS_RETRY_BACKOFF = float(os.getenv("REDIS_RETRY_BACKOFF", 0.1))

SEED_FROM_API = _flag("SEED_FROM_API")
FAKE_STORE_API_URL = os.getenv("FAKE_STORE_API_URL", "https://fakestoreapi.com/products")
SEED_API_LIMIT = int(os.getenv("SEED_API_LIMIT", 6))

CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:5173")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = _flag("LOG_JSON")
PORT = int(os.getenv("PORT", 4000))
