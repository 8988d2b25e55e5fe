"""Liveness endpoint for load balancers and the operator console.

Backing services decide the status; the clock section is a readout so
operators can spot a node that is still serving simulated time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import redis
from django.conf import settings
from django.db import connection
from django.http import JsonResponse

from confapp.clock import get_clock
from confapp.clock import to_epoch_millis

logger = logging.getLogger(__name__)

REDIS_TIMEOUT_SECONDS = 0.5


class MissingSettingError(RuntimeError):
    pass


def check_db() -> None:
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1;")
        cursor.fetchone()


def check_redis() -> None:
    url = getattr(settings, "REDIS_URL", None)
    if not url:
        msg = "REDIS_URL not configured"
        raise MissingSettingError(msg)
    redis.Redis.from_url(
        url,
        socket_timeout=REDIS_TIMEOUT_SECONDS,
        socket_connect_timeout=REDIS_TIMEOUT_SECONDS,
    ).ping()


BACKING_SERVICES: dict[str, Callable[[], None]] = {
    "db": check_db,
    "redis": check_redis,
}


def run_check(name: str, check: Callable[[], None]) -> dict[str, Any]:
    try:
        check()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Health check %s failed: %s", name, exc)
        return {"ok": False, "error": str(exc)}
    return {"ok": True}


def describe_clock() -> dict[str, Any]:
    clock = get_clock()
    return {
        "ok": True,
        "simulated": clock.is_simulated,
        "now": to_epoch_millis(clock.now()),
    }


def summarize(services: dict[str, dict[str, Any]]) -> str:
    healthy = [result["ok"] for result in services.values()]
    if all(healthy):
        return "ok"
    return "degraded" if any(healthy) else "down"


def health(request):
    services = {
        name: run_check(name, check) for name, check in BACKING_SERVICES.items()
    }
    status = summarize(services)
    return JsonResponse(
        {"status": status, "components": {**services, "clock": describe_clock()}},
        status=200 if status == "ok" else 503,
    )
