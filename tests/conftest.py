from __future__ import annotations

import json
from typing import Any, cast
from urllib.parse import unquote

import pytest
from yarl import URL

from secretdesk.config import Settings
from secretdesk.data.secrets import SecretRepository
from secretdesk.engine.backend_api import BackendAPI
from secretdesk.engine.cache import QueryCache


class ResponseStub:
    def __init__(self, *, status: int, body: Any = None) -> None:
        self.status = status
        if body is None:
            self._text = ""
        elif isinstance(body, str):
            self._text = body
        else:
            self._text = json.dumps(body)

    async def __aenter__(self) -> "ResponseStub":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: Any,
    ) -> None:
        return None

    async def text(self) -> str:
        return self._text


class FakeSecretsServer:
    """In-memory stand-in for the orchestration server's secrets resource.

    Acts as the aiohttp session: ``request()`` returns a response context
    manager, and every call is recorded for assertions.
    """

    def __init__(self, prefix: str = "/api") -> None:
        self.prefix = prefix
        self.store: dict[tuple[str | None, str], str] = {}
        self.workflows: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[dict[str, Any]] = []
        self.failures: list[tuple[str, ResponseStub]] = []
        self.closed = False

    async def close(self) -> None:
        self.closed = True

    def fail_next(self, method: str, status: int, body: Any = None) -> None:
        self.failures.append((method, ResponseStub(status=status, body=body)))

    def count(self, method: str) -> int:
        return sum(1 for call in self.calls if call["method"] == method)

    def request(self, method: str, url: URL, **kwargs: Any) -> ResponseStub:
        self.calls.append(
            {
                "method": method,
                "path": url.raw_path,
                "query": url.raw_query_string,
                "json": kwargs.get("json"),
            }
        )
        for i, (fail_method, response) in enumerate(self.failures):
            if fail_method == method:
                del self.failures[i]
                return response
        return self._dispatch(method, url, kwargs.get("json"))

    def _dispatch(self, method: str, url: URL, body: dict[str, Any] | None) -> ResponseStub:
        raw_path = url.raw_path
        assert raw_path.startswith(self.prefix)
        parts = [unquote(p) for p in raw_path[len(self.prefix) :].split("/") if p]
        workflow_name = url.query.get("workflowName")

        if parts == ["metadata", "workflow", "names-and-versions"]:
            return ResponseStub(status=200, body=self.workflows)

        assert parts[0] == "secrets"
        if len(parts) == 1 and method == "GET":
            names = sorted(n for (wf, n) in self.store if wf == workflow_name)
            return ResponseStub(status=200, body=names)

        name = parts[1]
        key = (workflow_name, name)
        if len(parts) == 3 and parts[2] == "exists":
            return ResponseStub(status=200, body={"exists": key in self.store})
        if method == "GET":
            if key not in self.store:
                return ResponseStub(status=404)
            return ResponseStub(status=200, body={"name": name, "value": self.store[key]})
        if method == "PUT":
            assert body is not None
            self.store[key] = body["value"]
            return ResponseStub(status=200)
        if method == "DELETE":
            self.store.pop(key, None)
            return ResponseStub(status=200)
        return ResponseStub(status=405, body={"message": "Method not allowed"})


@pytest.fixture
def settings() -> Settings:
    return Settings(url="http://test.local", api_prefix="/api", api_key="token-1")


@pytest.fixture
def server() -> FakeSecretsServer:
    return FakeSecretsServer()


@pytest.fixture
def backend(settings: Settings, server: FakeSecretsServer) -> BackendAPI:
    api = BackendAPI(settings)
    api._session = cast(Any, server)
    return api


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def repo(backend: BackendAPI, cache: QueryCache) -> SecretRepository:
    return SecretRepository(backend, cache)
