"""Shared fixtures: canned TestRail field metadata and a fake TestRail API.

No test talks to a real TestRail instance; HTTP goes through
httpx.MockTransport.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from testrail_swagger.config import GeneratorConfig
from testrail_swagger.loader import make_client

BASE_URL = "https://example.testrail.net/index.php?/api/v2"


# ---------------------------------------------------------------------------
# Field metadata as returned by get_case_fields / get_result_fields
# ---------------------------------------------------------------------------

CASE_FIELDS: list[dict[str, Any]] = [
    {
        "id": 3,
        "system_name": "custom_steps_separated",
        "label": "Steps",
        "description": "Step by step instructions",
        "type_id": 10,
        "display_order": 3,
    },
    {
        "id": 1,
        "system_name": "custom_automation_id",
        "label": "Automation ID",
        "description": "",
        "type_id": 1,
        "display_order": 1,
    },
    {
        "id": 2,
        "system_name": "custom_components",
        "label": "Components",
        "description": None,
        "type_id": 12,
        "display_order": 2,
    },
    {
        "id": 4,
        "system_name": "custom_automated",
        "label": "Automated",
        "description": "Whether the case runs in CI",
        "type_id": 5,
        "display_order": 4,
    },
]

RESULT_FIELDS: list[dict[str, Any]] = [
    {
        "id": 7,
        "system_name": "custom_step_results",
        "label": "Step Results",
        "description": "",
        "type_id": 11,
    },
    {
        "id": 8,
        "system_name": "custom_build_date",
        "label": "Build Date",
        "type_id": 8,
    },
]


@pytest.fixture
def case_fields_payload() -> list[dict[str, Any]]:
    return json.loads(json.dumps(CASE_FIELDS))


@pytest.fixture
def result_fields_payload() -> list[dict[str, Any]]:
    return json.loads(json.dumps(RESULT_FIELDS))


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig(base_url=BASE_URL, user="alice", api_key="secret", timeout=5.0)


# ---------------------------------------------------------------------------
# Fake TestRail API
# ---------------------------------------------------------------------------

class FakeTestRail:
    """Serves a fresh canned response per API method and records requests."""

    def __init__(self, responses: dict[str, Callable[[], httpx.Response]]) -> None:
        self.responses = responses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = str(request.url).rsplit("/", 1)[-1]
        if method not in self.responses:
            return httpx.Response(400, json={"error": f"Unknown method {method}"})
        return self.responses[method]()

    @property
    def methods(self) -> list[str]:
        return [str(r.url).rsplit("/", 1)[-1] for r in self.requests]


@pytest.fixture
def fake_testrail(
    case_fields_payload, result_fields_payload,
) -> Callable[..., FakeTestRail]:
    """Factory for a fake API; defaults serve the canned field metadata."""
    def _make(
        case_fields: Any = None,
        result_fields: Any = None,
        **responses: Callable[[], httpx.Response],
    ) -> FakeTestRail:
        case_body = case_fields_payload if case_fields is None else case_fields
        result_body = result_fields_payload if result_fields is None else result_fields
        served = {
            "get_case_fields": lambda: httpx.Response(200, json=case_body),
            "get_result_fields": lambda: httpx.Response(200, json=result_body),
        }
        served.update(responses)
        return FakeTestRail(served)
    return _make


@pytest.fixture
def client_for(config) -> Callable[[FakeTestRail], httpx.Client]:
    """Build an authenticated client routed to a FakeTestRail."""
    clients: list[httpx.Client] = []

    def _client(api: FakeTestRail) -> httpx.Client:
        client = make_client(config, transport=httpx.MockTransport(api))
        clients.append(client)
        return client

    yield _client
    for client in clients:
        client.close()
