from celery import Celery
from celery.schedules import crontab

from store_api.config import REDIS_HOST, REDIS_PORT


def _redis_url(db: int) -> str:
    return f"redis://{REDIS_HOST}:{REDIS_PORT}/{db}"


celery_app = Celery(
    "store_api",
    broker=_redis_url(0),
    backend=_redis_url(1),
    include=["store_api.tasks.cleanup"],
)

celery_app.conf.update(
    timezone="UTC",
    broker_transport_options={"visibility_timeout": 3600, "socket_keepalive": True},
    task_ignore_result=True,
)

celery_app.conf.beat_schedule = {
    "purge-activity-logs": {
        "task": "store_api.tasks.cleanup.clean_old_logs",
        "schedule": crontab(hour=0, minute=0),
    },
    # codes live for minutes, so sweep them every hour
    "purge-confirmation-codes": {
        "task": "store_api.tasks.cleanup.clean_stale_confirmation_codes",
        "schedule": crontab(minute=15),
    },
}
