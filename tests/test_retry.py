import pytest
import redis
import requests

from vibe_commerce.utils import retry as retry_module
from vibe_commerce.utils.retry import http_retry, redis_retry


def test_http_retry_honours_attempts():
    calls = []

    @http_retry(attempts=2, backoff=0)
    def fetch():
        calls.append(1)
        raise requests.ConnectionError("down")

    with pytest.raises(requests.ConnectionError):
        fetch()

    assert len(calls) == 2


def test_redis_retry_ignores_other_errors():
    calls = []

    @redis_retry(attempts=5, backoff=0)
    def command():
        calls.append(1)
        raise ValueError("bad argument")

    with pytest.raises(ValueError):
        command()

    assert len(calls) == 1


def test_redis_retry_recovers():
    outcomes = [redis.ConnectionError("reset"), redis.TimeoutError("slow"), "OK"]

    @redis_retry(attempts=3, backoff=0)
    def command():
        result = outcomes.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    assert command() == "OK"


def test_defaults_come_from_settings():
    assert http_retry.__defaults__ == (retry_module.HTTP_RETRY_ATTEMPTS, retry_module.HTTP_RETRY_BACKOFF)
    assert redis_retry.__defaults__ == (retry_module.REDIS_RETRY_ATTEMPTS, retry_module.REDIS_RETRY_BACKOFF)
