# vibe_commerce/api/deps.py
from fastapi import Header, Request

from vibe_commerce.services.lock_service import LockService
from vibe_commerce.utils.settings import MOCK_USER_ID


def get_lock_service(request: Request) -> LockService:
    # jeden lock service na aplikacje, inaczej lokalne locki nic nie blokuja
    return request.app.state.lock_service


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Tozsamosc uzytkownika. Prawdziwe uwierzytelnianie to osobna warstwa,
    tu naglowek X-User-Id albo staly mock user.
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return MOCK_USER_ID
