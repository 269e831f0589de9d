# vibe_commerce/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis

from vibe_commerce.utils.settings import (
    HTTP_RETRY_ATTEMPTS,
    HTTP_RETRY_BACKOFF,
    REDIS_RETRY_ATTEMPTS,
    REDIS_RETRY_BACKOFF,
)


def _retry_on(exc_type, attempts: int, backoff: float):
    # backoff, 2*backoff, 4*backoff... ale nie dluzej niz 10*backoff na raz
    return retry(
        reraise=True,
        stop=stop_after_attempt(max(attempts, 1)),
        wait=wait_exponential(multiplier=backoff, min=backoff, max=backoff * 10),
        retry=retry_if_exception_type(exc_type),
    )


def http_retry(attempts: int = HTTP_RETRY_ATTEMPTS, backoff: float = HTTP_RETRY_BACKOFF):
    """Ponawia wywolania Fake Store API przy bledach sieci / HTTP."""
    return _retry_on(requests.RequestException, attempts, backoff)


def redis_retry(attempts: int = REDIS_RETRY_ATTEMPTS, backoff: float = REDIS_RETRY_BACKOFF):
    """Ponawia komendy lock service przy chwilowym braku polaczenia z redisem."""
    return _retry_on(redis.RedisError, attempts, backoff)
