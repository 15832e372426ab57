"""Tests for the Algolia replica manager (HTTP mocked with httpx.MockTransport)."""

import json

import httpx
import pytest

from adapters.algolia_replica_manager import (
    DEFAULT_RANKING,
    AlgoliaReplicaManager,
    build_replica_list,
)
from adapters.http_client import build_algolia_client
from core.config import AppSettings
from core.domain.errors import (
    BadRequestError,
    ExceededRetriesError,
    ReplicaLimitExceededError,
    SearchServiceError,
)
from core.domain.models import IndexSettings, SortingAttribute

INDEX_SETTINGS = IndexSettings(
    index_name="magento2_default_products",
    sorting=[
        SortingAttribute(attribute="price", direction="asc"),
        SortingAttribute(attribute="created_at", direction="desc", virtual_replica=True),
    ],
)


def _manager(settings, handler, sleeps=None):
    client = build_algolia_client(settings, transport=httpx.MockTransport(handler))
    record = sleeps.append if sleeps is not None else (lambda _: None)
    return AlgoliaReplicaManager(settings, client=client, sleep=record)


def _published_handler(requests):
    def handler(request):
        requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"status": "published", "pendingTask": False})
        return httpx.Response(200, json={"taskID": 1, "updatedAt": "2026-01-01T00:00:00Z"})

    return handler


def test_sync_writes_primary_then_replicas(settings):
    requests = []

    with _manager(settings, _published_handler(requests)) as manager:
        manager.sync_replicas_to_algolia(1, INDEX_SETTINGS)

    assert [(r.method, r.url.path) for r in requests] == [
        ("PUT", "/1/indexes/magento2_default_products/settings"),
        ("GET", "/1/indexes/magento2_default_products/task/1"),
        ("PUT", "/1/indexes/magento2_default_products_price_asc/settings"),
        ("PUT", "/1/indexes/magento2_default_products_created_at_desc/settings"),
    ]
    assert json.loads(requests[0].content) == {
        "replicas": [
            "magento2_default_products_price_asc",
            "virtual(magento2_default_products_created_at_desc)",
        ]
    }
    assert json.loads(requests[2].content) == {"ranking": ["asc(price)", *DEFAULT_RANKING]}
    assert json.loads(requests[3].content) == {"customRanking": ["desc(created_at)"]}


def test_replicas_wait_until_primary_task_is_published(settings):
    requests = []
    statuses = iter(["notPublished", "notPublished", "published"])
    sleeps = []

    def handler(request):
        requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"status": next(statuses)})
        return httpx.Response(200, json={"taskID": 42})

    with _manager(settings, handler, sleeps) as manager:
        manager.sync_replicas_to_algolia(1, INDEX_SETTINGS)

    methods = [r.method for r in requests]
    assert methods == ["PUT", "GET", "GET", "GET", "PUT", "PUT"]
    assert requests[1].url.path == "/1/indexes/magento2_default_products/task/42"
    assert sleeps == [settings.task_poll_interval_seconds] * 2


def test_unpublished_task_gives_up_before_writing_replicas(settings):
    bounded = settings.model_copy(update={"task_poll_attempts": 3})
    requests = []
    sleeps = []

    def handler(request):
        requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"status": "notPublished"})
        return httpx.Response(200, json={"taskID": 5})

    with _manager(bounded, handler, sleeps) as manager:
        with pytest.raises(ExceededRetriesError, match="not published after 3 checks"):
            manager.sync_replicas_to_algolia(1, INDEX_SETTINGS)

    assert [r.method for r in requests] == ["PUT", "GET", "GET", "GET"]
    assert len(sleeps) == 2


def test_requests_carry_credentials(settings):
    seen = {}

    def handler(request):
        seen["app"] = request.headers["X-Algolia-Application-Id"]
        seen["key"] = request.headers["X-Algolia-API-Key"]
        return httpx.Response(200, json={})

    with _manager(settings, handler) as manager:
        manager.set_settings("idx", {"replicas": []})

    assert seen == {"app": "TESTAPP", "key": "secret"}


def test_default_host_uses_application_id(settings):
    client = build_algolia_client(settings)
    try:
        assert client.base_url.scheme == "https"
        assert client.base_url.host.lower() == "testapp.algolia.net"
    finally:
        client.close()


def test_missing_credentials():
    with pytest.raises(SearchServiceError):
        build_algolia_client(AppSettings(_env_file=None))


def test_bad_request_raises_with_service_message(settings):
    def handler(request):
        return httpx.Response(400, json={"message": "schema mismatch", "status": 400})

    with _manager(settings, handler) as manager:
        with pytest.raises(BadRequestError, match="schema mismatch"):
            manager.sync_replicas_to_algolia(1, INDEX_SETTINGS)


def test_client_errors_are_not_retried(settings):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(403, json={"message": "Invalid Application-ID or API key"})

    with _manager(settings, handler) as manager:
        with pytest.raises(SearchServiceError) as excinfo:
            manager.set_settings("idx", {})

    assert excinfo.value.status_code == 403
    assert not isinstance(excinfo.value, BadRequestError)
    assert len(calls) == 1


def test_server_errors_exhaust_retries(settings):
    calls = []
    sleeps = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, text="unavailable")

    with _manager(settings, handler, sleeps) as manager:
        with pytest.raises(ExceededRetriesError):
            manager.set_settings("idx", {})

    assert len(calls) == settings.max_retries + 1
    assert len(sleeps) == settings.max_retries


def test_rate_limit_honours_retry_after(settings):
    responses = iter(
        [
            httpx.Response(429, headers={"Retry-After": "2"}, json={"message": "slow down"}),
            httpx.Response(200, json={"taskID": 7}),
        ]
    )
    sleeps = []

    with _manager(settings, lambda request: next(responses), sleeps) as manager:
        assert manager.set_settings("idx", {}) == {"taskID": 7}

    assert len(sleeps) == 1
    assert 2.0 <= sleeps[0] <= 2.35


def test_transport_errors_are_retried(settings):
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={})

    with _manager(settings, handler) as manager:
        assert manager.set_settings("idx", {}) == {}
    assert len(attempts) == 2


def test_virtual_replica_limit(settings):
    limited = settings.model_copy(update={"max_virtual_replicas": 1})
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    index_settings = IndexSettings(
        index_name="idx",
        sorting=[
            SortingAttribute(attribute="price", virtual_replica=True),
            SortingAttribute(attribute="name", virtual_replica=True),
        ],
    )
    with _manager(limited, handler) as manager:
        with pytest.raises(ReplicaLimitExceededError, match="limit is 1"):
            manager.sync_replicas_to_algolia(4, index_settings)
    assert calls == []


def test_replica_list_without_sorting():
    assert build_replica_list(IndexSettings(index_name="idx")) == []
