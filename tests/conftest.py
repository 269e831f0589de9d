import os

# taski Celery inline, bez brokera
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")

import pytest
from fastapi.testclient import TestClient

from vibe_commerce.data.database import init_db, make_engine, make_session_factory
from vibe_commerce.data.seed import seed_products
from vibe_commerce.main import create_app
from vibe_commerce.services.cart_service import CartService
from vibe_commerce.services.checkout_service import CheckoutService
from vibe_commerce.services.lock_service import LocalLockService

USER_ID = "mock-user"
OTHER_USER_ID = "someone-else"

TEE, HOODIE, CAP, SOCKS = 1, 2, 3, 4


class RecordingNotifier:
    """Zamiast Celery: zapamietuje wyslane paragony."""

    def __init__(self):
        self.sent = []

    def send_receipt_notification(self, receipt):
        self.sent.append(receipt)


@pytest.fixture
def engine(tmp_path):
    # plik, nie :memory:, zeby watki w testach wspolbieznosci mialy osobne polaczenia
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    seed_products(make_session_factory(engine), from_api=False)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def lock_service():
    return LocalLockService(timeout=5)


@pytest.fixture
def cart_service(db, lock_service):
    return CartService(db, lock_service)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def checkout_service(db, lock_service, notifier):
    return CheckoutService(db, lock_service, notification_service=notifier)


@pytest.fixture
def client(engine, lock_service):
    app = create_app(engine=engine, lock_service=lock_service)
    with TestClient(app) as test_client:
        yield test_client
