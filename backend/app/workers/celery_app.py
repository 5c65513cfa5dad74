"""
Celery application factory.

Configures broker, backend, serialization and limits.
"""
from celery import Celery

from app.core.config import settings

celery_app = Celery("knx_site")

celery_app.conf.update(
    # Broker / Backend
    broker_url=settings.CELERY_BROKER_URL,
    result_backend=settings.CELERY_RESULT_BACKEND,
    # Serialization
    accept_content=["json"],
    task_serializer="json",
    result_serializer="json",
    # Timezone
    timezone="UTC",
    enable_utc=True,
    # Reliability
    broker_connection_retry_on_startup=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    # Limits
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    result_expires=3600,
)

celery_app.conf.include = [
    "app.workers.tasks.email_tasks",
]

# Every mapper must be configured before a task touches the database.
import app.models  # noqa: F401, E402
