"""
Celery workers module.

Scheduled housekeeping for batch history.

Dependencies: celery, batchstatus.configs
System role: Background task processing
"""

from datetime import timedelta

from celery import Celery
from batchstatus.configs import get_settings

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "batchstatus",
    broker=celery_config.broker_url,
    include=["batchstatus.workers.tasks.housekeeping"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
    task_ignore_result=True,
    beat_schedule={
        "purge-batch-history": {
            "task": "batchstatus.purge_batch_history",
            "schedule": timedelta(hours=settings.retention.interval_hours),
        },
    },
)
