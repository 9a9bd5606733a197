import asyncio
from typing import Any, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from devops_app.config import Settings
from devops_app.main import create_app


class FakeDatastore:
    """Stands in for the asyncpg-backed Datastore. Set `fail` to make every call raise."""

    def __init__(self, fail: Optional[BaseException] = None):
        self.fail = fail
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.closed = False

    async def _run(self, query: str, args: Tuple[Any, ...]):
        self.calls.append((query, args))
        if self.fail is not None:
            raise self.fail

    async def fetchval(self, query: str, *args: Any) -> Any:
        await self._run(query, args)
        return "2026-10-18 12:00:00+00"

    async def execute(self, query: str, *args: Any) -> str:
        await self._run(query, args)
        return "INSERT 0 1"

    async def close(self) -> None:
        self.closed = True

    def inserts(self):
        return [c for c in self.calls if c[0].startswith("INSERT")]


@pytest.fixture
def settings():
    return Settings(environment="test", hostname="test-host")


@pytest.fixture
def datastore():
    return FakeDatastore()


@pytest.fixture
def client(settings, datastore):
    # no context manager: lifespan (bootstrap, drain) is not run
    return TestClient(create_app(settings, datastore))


def run(coro):
    return asyncio.run(coro)
