from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

import contractgen.serve.service as service_mod
from contractgen.common.config import Settings
from contractgen.serve.fastapi_app import CORS_HEADERS, GENERATE_PATH, create_app
from contractgen.serve.service import ContractPromptService

TOKEN_BODY = {"type": "token", "params": {"name": "Foo", "symbol": "FOO", "supply": "1000"}}


class _FakeResponse:
    def __init__(self, status_code: int, json_data: dict[str, Any]) -> None:
        self.status_code = status_code
        self._json = json_data

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return str(self._json)

    def json(self) -> dict[str, Any]:
        return self._json


class _FakeAsyncClient:
    calls: list[dict[str, Any]] = []

    def __init__(self, timeout: float | None = None, transport: Any = None) -> None:  # signature-compatible
        self.timeout = timeout

    async def __aenter__(self) -> "_FakeAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        return None

    async def post(self, url: str, headers: dict[str, str] | None = None, json: dict[str, Any] | None = None) -> _FakeResponse:  # noqa: A002
        self.calls.append({"url": url, "headers": headers, "json": json})
        return _FakeResponse(200, {"content": [{"type": "text", "text": "```\ncontract Foo {}\n```"}]})


def _client(handler: Any = None, api_key: str | None = "test-key") -> TestClient:
    settings = Settings(api_key=api_key)
    transport = httpx.MockTransport(handler) if handler else None
    return TestClient(create_app(settings, ContractPromptService(settings, transport=transport)))


def _assert_cors(r: httpx.Response) -> None:
    for key, value in CORS_HEADERS.items():
        assert r.headers[key] == value


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"content": [{"type": "text", "text": "```solidity\ncodeA\n```"}]})


def test_health_ok() -> None:
    r = _client().get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data.get("status") == "ok"
    assert data.get("model") == "claude-sonnet-4-20250514"


def test_generate_token_contract() -> None:
    r = _client(_ok).post(GENERATE_PATH, json=TOKEN_BODY)
    assert r.status_code == 200
    assert r.json() == {"success": True, "code": "codeA"}
    _assert_cors(r)


def test_preflight_returns_empty_body_with_cors() -> None:
    r = _client(_ok).options(GENERATE_PATH)
    assert r.status_code == 200
    assert r.content == b""
    _assert_cors(r)


def test_get_not_allowed() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return _ok(request)

    r = _client(handler).get(GENERATE_PATH)
    assert r.status_code == 405
    assert r.json() == {"error": "Method not allowed"}
    _assert_cors(r)
    assert calls == []


def test_missing_params_and_invalid_json() -> None:
    client = _client(_ok)
    r = client.post(GENERATE_PATH, json={"type": "token"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required parameters"}
    _assert_cors(r)

    r = client.post(GENERATE_PATH, content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required parameters"}


def test_api_key_not_configured() -> None:
    r = _client(_ok, api_key=None).post(GENERATE_PATH, json=TOKEN_BODY)
    assert r.status_code == 500
    assert r.json() == {"error": "API key not configured"}
    _assert_cors(r)


def test_upstream_429_passed_through() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="slow down")

    r = _client(handler).post(GENERATE_PATH, json=TOKEN_BODY)
    assert r.status_code == 429
    assert r.json() == {"error": "Failed to generate contract"}
    _assert_cors(r)


def test_generate_with_mocked_httpx(monkeypatch: pytest.MonkeyPatch) -> None:
    # Patch httpx.AsyncClient in the service module to avoid network calls
    monkeypatch.setattr(service_mod.httpx, "AsyncClient", _FakeAsyncClient)
    monkeypatch.setattr(_FakeAsyncClient, "calls", [])
    client = _client()
    r = client.post(GENERATE_PATH, json={"type": "voting", "params": {"name": "Council"}})
    assert r.status_code == 200
    assert r.json() == {"success": True, "code": "contract Foo {}"}
    assert len(_FakeAsyncClient.calls) == 1
    assert "Council" in _FakeAsyncClient.calls[0]["json"]["messages"][0]["content"]
