"""Shared fixtures: a fake API behind httpx.MockTransport and a client wired to it."""

import json
from typing import Any, Optional

import httpx
import pytest
import structlog

from haulbase.api.client import HaulbaseClient, TokenStore
from haulbase.core.config import ConfigManager, EnvironmentSettings

BASE_PATH = "/api"


class FakeApi:
    """
    Routes (method, path) to canned responses and records every request.

    Several responses queued for one route are served in order; the last one
    keeps being served after that.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[tuple[int, Any, Optional[bytes]]]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        body: Any = None,
        status: int = 200,
        content: Optional[bytes] = None,
        external: bool = False,
    ) -> None:
        full_path = path if external else BASE_PATH + path
        self.routes.setdefault((method, full_path), []).append((status, body, content))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(
                404, json={"error": {"message": f"No route for {request.method} {request.url.path}"}}
            )

        status, body, content = queue.pop(0) if len(queue) > 1 else queue[0]
        if content is not None:
            return httpx.Response(status, content=content)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        full_path = BASE_PATH + path
        return [r for r in self.requests if r.method == method and r.url.path == full_path]

    def json_of(self, request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configured by a CLI run so later tests don't log to a closed stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def settings() -> EnvironmentSettings:
    return EnvironmentSettings(
        _env_file=None,
        api_url="http://test.local/api",
        org_slug="acme-freight",
    )


@pytest.fixture
def client(api: FakeApi, settings: EnvironmentSettings):
    with HaulbaseClient(
        settings,
        tokens=TokenStore("access-1", "refresh-1"),
        transport=httpx.MockTransport(api.handler),
    ) as client:
        yield client


@pytest.fixture
def config(tmp_path) -> ConfigManager:
    """Config with built-in defaults only (no config.yaml)."""
    return ConfigManager(config_dir=tmp_path)
