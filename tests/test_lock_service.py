import threading
from unittest.mock import MagicMock

import pytest
import redis

from vibe_commerce.domain.errors import LockTimeoutError, StorageFailureError
from vibe_commerce.services.lock_service import (
    LocalLockService,
    RedisLockService,
    build_lock_service,
    cart_lock_key,
)
from vibe_commerce.utils.settings import DB_BUSY_TIMEOUT_SECONDS


class TestLocalLockService:
    def test_scope_times_out_when_held(self):
        svc = LocalLockService(timeout=0.1)

        with svc.cart_scope("u1"):
            with pytest.raises(LockTimeoutError) as exc_info:
                with svc.cart_scope("u1"):
                    pass

        assert exc_info.value.kind == "StorageFailure"
        assert exc_info.value.status_code == 503

    def test_different_users_do_not_block(self):
        svc = LocalLockService(timeout=0.1)

        with svc.cart_scope("u1"):
            with svc.cart_scope("u2"):
                pass

    def test_released_after_exception(self):
        svc = LocalLockService(timeout=0.1)

        with pytest.raises(RuntimeError):
            with svc.cart_scope("u1"):
                raise RuntimeError("boom")

        with svc.cart_scope("u1"):
            pass

    def test_other_thread_waits(self):
        svc = LocalLockService(timeout=2)
        order = []
        entered = threading.Event()

        def other():
            with svc.cart_scope("u1"):
                order.append("other")

        with svc.cart_scope("u1"):
            t = threading.Thread(target=other)
            t.start()
            entered.wait(0.1)
            order.append("main")
        t.join(timeout=5)

        assert order == ["main", "other"]


    def test_entries_do_not_outlive_their_users(self):
        svc = LocalLockService(timeout=0.05)

        for i in range(500):
            with svc.cart_scope(f"user-{i}"):
                pass

        with svc.cart_scope("u1"):
            with pytest.raises(LockTimeoutError):
                with svc.cart_scope("u1"):
                    pass
            assert list(svc._locks) == [cart_lock_key("u1")]

        assert svc._locks == {}

    def test_waiting_thread_gets_lock_then_entry_is_dropped(self):
        svc = LocalLockService(timeout=2)
        waiting = threading.Event()
        done = threading.Event()

        def other():
            waiting.set()
            with svc.cart_scope("u1"):
                pass
            done.set()

        with svc.cart_scope("u1"):
            t = threading.Thread(target=other)
            t.start()
            waiting.wait(1)
        t.join(timeout=5)

        assert done.is_set()
        assert svc._locks == {}


class TestRedisLockService:
    def test_acquire_and_release_with_token(self):
        client = MagicMock()
        client.set.return_value = True
        client.eval.return_value = 1
        svc = RedisLockService(client=client, timeout=0.2, poll_interval=0.01)

        with svc.cart_scope("u1"):
            client.eval.assert_not_called()

        kwargs = client.set.call_args.kwargs
        assert kwargs["name"] == cart_lock_key("u1")
        assert kwargs["nx"] is True
        assert kwargs["ex"] >= 1

        args = client.eval.call_args.args
        assert args[1:] == (1, cart_lock_key("u1"), kwargs["value"])

    def test_busy_lock_times_out(self):
        client = MagicMock()
        client.set.return_value = None
        svc = RedisLockService(client=client, timeout=0.1, poll_interval=0.02)

        with pytest.raises(LockTimeoutError):
            with svc.cart_scope("u1"):
                pass

        assert client.set.call_count > 1
        client.eval.assert_not_called()

    def test_acquires_after_release(self):
        client = MagicMock()
        client.set.side_effect = [None, None, True]
        client.eval.return_value = 1
        svc = RedisLockService(client=client, timeout=1, poll_interval=0.01)

        with svc.cart_scope("u1"):
            pass

        assert client.set.call_count == 3

    def test_ttl_outlives_database_busy_timeout(self):
        client = MagicMock()
        client.set.return_value = True
        svc = RedisLockService(client=client, timeout=5, ttl=10)

        with svc.cart_scope("u1"):
            pass

        assert client.set.call_args.kwargs["ex"] > DB_BUSY_TIMEOUT_SECONDS + 5

    def test_release_failure_does_not_escape_scope(self):
        client = MagicMock()
        client.set.return_value = True
        client.eval.side_effect = redis.ConnectionError("connection reset")
        svc = RedisLockService(client=client, timeout=0.2)
        done = []

        with svc.cart_scope("u1"):
            done.append("work")

        assert done == ["work"]
        assert client.eval.call_count >= 1

    def test_redis_down_on_acquire(self):
        client = MagicMock()
        client.set.side_effect = redis.ConnectionError("connection refused")
        svc = RedisLockService(client=client, timeout=0.2)

        with pytest.raises(StorageFailureError) as exc_info:
            with svc.cart_scope("u1"):
                pass

        assert not isinstance(exc_info.value, LockTimeoutError)
        assert exc_info.value.status_code == 500
        client.eval.assert_not_called()


def test_build_lock_service():
    assert isinstance(build_lock_service("local"), LocalLockService)
    with pytest.raises(ValueError):
        build_lock_service("zookeeper")
