import json
import urllib.error
from http import HTTPStatus
from unittest import mock

import pytest
from django.core.cache import cache
from django.urls import reverse

from confapp.feed.services import FEED_CACHE_KEY
from confapp.feed.services import fetch_feed
from confapp.feed.services import get_feed_data
from confapp.feed.services import refresh_feed
from confapp.feed.tasks import refresh_feed_task

STATUSES = {"statuses": [{"id": 1, "text": "Keynote starting"}]}


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.delete(FEED_CACHE_KEY)
    yield
    cache.delete(FEED_CACHE_KEY)


@pytest.fixture
def feed_url(settings):
    settings.FEED_URL = "https://feed.test/statuses"
    settings.FEED_BEARER_TOKEN = "feed-token"  # noqa: S105
    return settings.FEED_URL


def _mock_urlopen(body: bytes):
    patcher = mock.patch("confapp.feed.services.urllib.request.urlopen")
    mocked = patcher.start()
    mocked.return_value.__enter__.return_value.read.return_value = body
    return patcher, mocked


def test_no_feed_url_serves_empty_feed(api_client, db):
    resp = api_client.get(reverse("api_v1:feed"))
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"statuses": []}


def test_fetch_sends_bearer_token(feed_url):
    patcher, mocked = _mock_urlopen(json.dumps(STATUSES).encode())
    try:
        assert fetch_feed() == STATUSES
    finally:
        patcher.stop()
    request = mocked.call_args.args[0]
    assert request.full_url == feed_url
    assert request.get_header("Authorization") == "Bearer feed-token"


@pytest.mark.parametrize("body", [b"not json", b"[]", b'{"statuses": {}}'])
def test_fetch_ignores_unexpected_payloads(feed_url, body):
    patcher, _ = _mock_urlopen(body)
    try:
        assert fetch_feed() is None
    finally:
        patcher.stop()


def test_refresh_caches_and_survives_outage(feed_url):
    patcher, _ = _mock_urlopen(json.dumps(STATUSES).encode())
    try:
        assert refresh_feed_task() == 1
    finally:
        patcher.stop()
    assert cache.get(FEED_CACHE_KEY) == STATUSES

    with mock.patch(
        "confapp.feed.services.urllib.request.urlopen",
        side_effect=urllib.error.URLError("down"),
    ):
        assert refresh_feed() == STATUSES


def test_get_feed_data_prefers_cache(feed_url):
    cache.set(FEED_CACHE_KEY, STATUSES)
    with mock.patch("confapp.feed.services.urllib.request.urlopen") as mocked:
        assert get_feed_data() == STATUSES
    mocked.assert_not_called()
