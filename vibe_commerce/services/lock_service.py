# vibe_commerce/services/lock_service.py
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator

import redis
from tenacity import Retrying, retry_if_result, stop_after_delay, wait_fixed

from vibe_commerce.domain.errors import LockTimeoutError, StorageFailureError
from vibe_commerce.utils.retry import redis_retry
from vibe_commerce.utils.settings import (
    REDIS_URL,
    LOCK_BACKEND,
    LOCK_TIMEOUT_SECONDS,
    LOCK_TTL_SECONDS,
    DB_BUSY_TIMEOUT_SECONDS,
)
from vibe_commerce.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL, wiec tu jest get + porownanie + del wszystko naraz


def cart_lock_key(user_id: str) -> str:
    return f"cart:{user_id}:lock"


class LockService:
    """
    Sekcja krytyczna na koszyk uzytkownika.
    Wszystkie mutacje koszyka i checkout biora ten sam klucz,
    wiec zadne add/update/remove nie wejdzie miedzy snapshot a czyszczenie koszyka.
    """

    def __init__(self, timeout: float = LOCK_TIMEOUT_SECONDS):
        self.timeout = timeout

    def acquire(self, key: str, timeout: float) -> str | None:
        raise NotImplementedError

    def release(self, key: str, token: str) -> bool:
        raise NotImplementedError

    @contextmanager
    def cart_scope(self, user_id: str) -> Iterator[None]:
        key = cart_lock_key(user_id)
        token = self.acquire(key, self.timeout)
        if token is None:
            logger.warning(f"Timeout przy blokowaniu {key} po {self.timeout}s")
            raise LockTimeoutError("Cart is busy, please retry")
        try:
            yield
        finally:
            try:
                self.release(key, token)
            except redis.RedisError as e:
                # praca w sekcji juz zrobiona (np. koszyk wyczyszczony), lock wygasnie po TTL
                logger.error(f"Nie udalo sie zwolnic {key}: {e}")


class _KeyLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        # ile watkow trzyma albo czeka na ten lock
        self.users = 0


class LocalLockService(LockService):
    """
    Locki w pamieci procesu, jeden threading.Lock na klucz.
    Wpis dla klucza zyje tylko dopoki ktos go trzyma albo na niego czeka.
    """

    def __init__(self, timeout: float = LOCK_TIMEOUT_SECONDS):
        super().__init__(timeout)
        self._guard = threading.Lock()
        self._locks: Dict[str, _KeyLock] = {}

    def _checkout(self, key: str) -> _KeyLock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _KeyLock()
            entry.users += 1
            return entry

    def _checkin(self, key: str, entry: _KeyLock, unlock: bool) -> None:
        with self._guard:
            if unlock:
                entry.lock.release()
            entry.users -= 1
            if entry.users == 0:
                del self._locks[key]

    def acquire(self, key: str, timeout: float) -> str | None:
        entry = self._checkout(key)
        if entry.lock.acquire(timeout=timeout):
            return uuid.uuid4().hex
        self._checkin(key, entry, unlock=False)
        return None

    def release(self, key: str, token: str) -> bool:
        entry = self._locks[key]
        self._checkin(key, entry, unlock=True)
        return True


class RedisLockService(LockService):
    """
    -blokada koszyka przez SET NX EX (wspolna dla wielu procesow)
    -zwalnianie locka tylko przez wlasciciela (token)
    -atomowosc przy pomocy lua
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float = LOCK_TIMEOUT_SECONDS,
        client: redis.Redis | None = None,
        poll_interval: float = 0.05,
        ttl: int = LOCK_TTL_SECONDS,
    ):
        super().__init__(timeout)
        self.redis = client or redis.Redis.from_url(url or REDIS_URL, decode_responses=True)
        self.poll_interval = poll_interval
        # lock wygasa sam jesli proces padnie w trakcie operacji,
        # ale nie wczesniej niz baza moze czekac na blokade wewnatrz sekcji
        self.ttl = max(int(ttl), int(DB_BUSY_TIMEOUT_SECONDS + timeout) + 1)

    @redis_retry()
    def try_acquire(self, key: str, token: str) -> bool:
        #SET cart:mock-user:lock "<token>" NX EX 30
        return bool(self.redis.set(name=key, value=token, nx=True, ex=self.ttl))

    def acquire(self, key: str, timeout: float) -> str | None:
        token = uuid.uuid4().hex
        logger.debug(f"Acquire lock {key}")
        retryer = Retrying(
            stop=stop_after_delay(timeout),
            wait=wait_fixed(self.poll_interval),
            retry=retry_if_result(lambda acquired: not acquired),
            retry_error_callback=lambda retry_state: False,
        )
        try:
            acquired = retryer(self.try_acquire, key, token)
        except redis.RedisError as e:
            logger.error(f"Redis niedostepny przy blokowaniu {key}: {e}")
            raise StorageFailureError("Lock service unavailable") from e
        return token if acquired else None

    @redis_retry()
    def release(self, key: str, token: str) -> bool:
        logger.debug(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)


def build_lock_service(backend: str = LOCK_BACKEND) -> LockService:
    if backend == "redis":
        return RedisLockService()
    if backend == "local":
        return LocalLockService()
    raise ValueError(f"Nieznany LOCK_BACKEND: {backend}")
