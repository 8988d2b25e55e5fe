"""Cached social-media feed.

The feed is fetched from ``FEED_URL`` (a JSON endpoint returning an object
with a ``statuses`` list) and kept in the Django cache, so request handling
never waits on the upstream service once the cache is warm.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

FEED_CACHE_KEY = "confapp:feed"


def empty_feed() -> dict[str, list]:
    return {"statuses": []}


def fetch_feed() -> dict[str, Any] | None:
    """Fetch the upstream feed; returns None when unset or failing."""
    url = getattr(settings, "FEED_URL", "")
    if not url:
        return None
    headers = {"Accept": "application/json"}
    bearer = getattr(settings, "FEED_BEARER_TOKEN", "")
    if bearer:
        headers["Authorization"] = f"Bearer {bearer}"
    req = urllib.request.Request(  # noqa: S310 - external URL by config
        url,
        headers=headers,
        method="GET",
    )
    timeout = float(getattr(settings, "FEED_TIMEOUT", 10.0))
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # noqa: S310 - external URL by config
            obj = json.loads(resp.read().decode("utf-8"))
    except (urllib.error.URLError, TimeoutError) as exc:
        logger.warning("Feed request failed: %s", exc)
        return None
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Feed returned invalid JSON: %s", exc)
        return None

    if not isinstance(obj, dict) or not isinstance(obj.get("statuses"), list):
        logger.warning("Feed returned an unexpected shape; ignoring")
        return None
    return {"statuses": obj["statuses"]}


def refresh_feed() -> dict[str, Any]:
    """Fetch and cache the feed. A failed fetch keeps the previous copy."""
    data = fetch_feed()
    if data is None:
        return cache.get(FEED_CACHE_KEY) or empty_feed()
    timeout = int(getattr(settings, "FEED_CACHE_SECONDS", 60))
    # Keep a stale copy around for twice the refresh interval.
    cache.set(FEED_CACHE_KEY, data, timeout=timeout * 2)
    return data


def get_feed_data() -> dict[str, Any]:
    cached = cache.get(FEED_CACHE_KEY)
    if cached is not None:
        return cached
    return refresh_feed()
