# vibe_commerce/celery_worker.py
from celery import Celery

from vibe_commerce.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "vibe_commerce",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "vibe_commerce.services.notification_service",
)

celery_app.conf.timezone = "UTC"
# w dev/testach taski ida synchronicznie, bez brokera
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
