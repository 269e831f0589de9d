# vibe_commerce/api/routers/health.py
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from vibe_commerce.domain.schemas import HealthOut
from vibe_commerce.utils.settings import ENVIRONMENT

router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthOut)
def health():
    return HealthOut(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
        environment=ENVIRONMENT,
    )
