"""Celery worker/beat for the periodic Sessionize and feed refreshes.

Tasks live in ``confapp.<app>.tasks`` and are registered by name
(``schedule.synchronize``, ``feed.refresh``); the beat cadence comes from
``CELERY_BEAT_SCHEDULE`` in settings.
"""

import os

from celery import Celery
from celery.signals import setup_logging

# pytest passes --ds=config.settings.test, so this default only applies to
# workers started without an explicit settings module.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.production")

app = Celery("confapp")
app.config_from_object("django.conf:settings", namespace="CELERY")


@setup_logging.connect
def config_loggers(*args, **kwargs):
    # Reuse the Django LOGGING dict instead of Celery's own handlers.
    from logging.config import dictConfig  # noqa: PLC0415

    from django.conf import settings  # noqa: PLC0415

    dictConfig(settings.LOGGING)


app.autodiscover_tasks()
