"""Pytest configuration for fastly-api tests."""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from fastly_api.client import FastlyAPIClient
from fastly_api.settings import FastlyAPISettings, reset_settings

# Test constants
TEST_API_KEY = "test-fastly-key-secret"
TEST_API_URL = "https://api.fastly.com"
TEST_SERVICE_ID = "7i6HN3TK9wS159v2gPAZ8A"
TEST_USER_ID = "4tKBSuFhNEiIpNDxmmVydt"
TEST_WAF_ID = "3Kdf9Ve1pWWg4D2HgVbsgY"


@pytest.fixture(autouse=True)
def reset_settings_after_test():
    """Reset settings singleton after each test."""
    yield
    reset_settings()


@pytest.fixture
def mock_env_vars():
    """Set required environment variables for testing."""
    with patch.dict(
        os.environ,
        {
            "FASTLY_API_KEY": TEST_API_KEY,
        },
    ):
        yield


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(mock_env_vars, recorded_requests):
    """Build a client whose HTTP calls are answered by a handler function."""
    clients: list[FastlyAPIClient] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        settings: FastlyAPISettings | None = None,
    ) -> FastlyAPIClient:
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        client = FastlyAPIClient(
            settings=settings or FastlyAPISettings(),
            transport=httpx.MockTransport(_record),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def sa_resource() -> Callable[..., dict[str, Any]]:
    """Factory for service authorization resource objects."""

    def _resource(
        resource_id: str,
        permission: str = "full",
        service_id: str = TEST_SERVICE_ID,
        user_id: str = TEST_USER_ID,
    ) -> dict[str, Any]:
        return {
            "id": resource_id,
            "type": "service_authorization",
            "attributes": {
                "permission": permission,
                "created_at": "2020-04-09T18:14:30Z",
                "updated_at": "2020-04-09T18:14:30Z",
                "deleted_at": None,
            },
            "relationships": {
                "service": {"data": {"id": service_id, "type": "service"}},
                "user": {"data": {"id": user_id, "type": "user"}},
            },
        }

    return _resource


def _page_link(page: int, size: int) -> str:
    return (
        f"{TEST_API_URL}/service-authorizations"
        f"?page%5Bnumber%5D={page}&page%5Bsize%5D={size}"
    )


@pytest.fixture
def sa_page(sa_resource) -> Callable[..., dict[str, Any]]:
    """Factory for one page of a service authorization listing.

    Each page holds ``per_page`` authorizations named ``sa-<page>-<n>``.
    The ``next`` link is omitted on the last page, as Fastly does.
    """

    def _page(page: int, last: int, per_page: int = 2) -> dict[str, Any]:
        links = {
            "first": _page_link(1, per_page),
            "last": _page_link(last, per_page),
        }
        if page < last:
            links["next"] = _page_link(page + 1, per_page)
        return {
            "data": [sa_resource(f"sa-{page}-{n}") for n in range(per_page)],
            "links": links,
            "meta": {"current_page": page, "per_page": per_page, "total_pages": last},
        }

    return _page


@pytest.fixture
def paged_handler(sa_page):
    """Handler serving the page requested through page[number]."""

    def _handler(last: int, per_page: int = 2):
        def _serve(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params.get("page[number]", "1"))
            return httpx.Response(200, json=sa_page(page, last, per_page))

        return _serve

    return _handler


@pytest.fixture
def sample_waf_document() -> dict[str, Any]:
    """Single WAF document as returned by Fastly."""
    return {
        "data": {
            "id": TEST_WAF_ID,
            "type": "waf",
            "attributes": {
                "last_push": None,
                "prefetch_condition": "WAF_Prefetch",
                "response": "WAF_Response",
                "version": 1,
            },
            "relationships": {
                "configuration_set": {
                    "data": {"id": "7YCnicdpjTvxR2JdzNAKCq", "type": "configuration_set"}
                }
            },
        }
    }


@pytest.fixture
def sample_gzip() -> dict[str, Any]:
    """Gzip rule as returned by Fastly."""
    return {
        "service_id": TEST_SERVICE_ID,
        "version": 3,
        "name": "test-gzip",
        "content_types": "text/html text/css",
        "extensions": "html css",
        "cache_condition": "",
        "created_at": "2016-05-23T10:03:10Z",
        "updated_at": "2016-05-23T10:03:10Z",
        "deleted_at": None,
    }
