"""Pytest configuration and fixtures."""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pytest
from aiohttp import web, test_utils

from shortlink.errors import StorageError, StorageReadError, StorageWriteError
from shortlink.hashing import HashGenerator
from shortlink.service import URLShortenerService
from shortlink.storage.base import StorageGatewayBase
from shortlink.storage.http_gateway import HTTPStorageGateway
from shortlink.storage.models import Opaque, StorageResponse
from shortlink.common.logging_config import setup_logging

TABLE_NAME = "url_shortener"


class InMemoryStorageGateway(StorageGatewayBase):
    """Gateway fake that keeps rows in a dict and records every call."""

    def __init__(self):
        super().__init__("memory://")
        self.tables: Dict[str, Dict[str, Any]] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self.fail_with: Optional[StorageError] = None
        self.closed = False

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def ensure_schema(self, table_name: str, columns: Sequence[Tuple[str, str]]) -> StorageResponse:
        self.calls.append(("ensure_schema", (table_name, tuple(columns))))
        self._maybe_fail()
        self.tables.setdefault(table_name, {"columns": [name for name, _ in columns], "rows": []})
        return Opaque(f"Table '{table_name}' created")

    async def insert(self, table_name: str, values: Sequence[str]) -> StorageResponse:
        self.calls.append(("insert", (table_name, tuple(values))))
        self._maybe_fail()
        if table_name not in self.tables:
            raise StorageWriteError(detail=f"no such table: {table_name}")
        table = self.tables[table_name]
        table["rows"].append(dict(zip(table["columns"], values)))
        return Opaque("Insert queued")

    async def query(self, table_name: str, filter_column: str, filter_value: str) -> List[Dict[str, Any]]:
        self.calls.append(("query", (table_name, filter_column, filter_value)))
        self._maybe_fail()
        if table_name not in self.tables:
            raise StorageReadError(detail=f"no such table: {table_name}")
        return [
            dict(row)
            for row in self.tables[table_name]["rows"]
            if row.get(filter_column) == filter_value
        ]

    async def close(self) -> None:
        self.closed = True

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


class FakeStorageBackend:
    """In-process HTTP storage service speaking the create/insert/query protocol."""

    def __init__(self):
        self.tables: Dict[str, Dict[str, Any]] = {}
        self.requests: List[Tuple[str, List[Tuple[str, str]]]] = []
        self.fail_status: Optional[int] = None
        self.fail_body: Union[str, bytes] = ""
        self.base_url = ""

        self.app = web.Application(middlewares=[self._record_and_fail])
        self.app.router.add_get("/create", self.handle_create)
        self.app.router.add_get("/insert", self.handle_insert)
        self.app.router.add_get("/query", self.handle_query)

    @web.middleware
    async def _record_and_fail(self, request: web.Request, handler):
        self.requests.append((request.path.lstrip("/"), list(request.query.items())))
        if self.fail_status is not None:
            if isinstance(self.fail_body, bytes):
                return web.Response(
                    status=self.fail_status,
                    body=self.fail_body,
                    content_type="text/plain",
                    charset="utf-8",
                )
            return web.Response(status=self.fail_status, text=self.fail_body)
        return await handler(request)

    async def handle_create(self, request: web.Request) -> web.Response:
        table = request.query.get("table", "")
        cols = request.query.getall("col", [])
        if not table or not cols:
            return web.Response(status=400, text="Missing table or columns\n")
        self.tables.setdefault(
            table,
            {"columns": [col.split(" ", 1)[0] for col in cols], "rows": []},
        )
        return web.Response(text=f"Table '{table}' created with columns: {cols}\n")

    async def handle_insert(self, request: web.Request) -> web.Response:
        table = request.query.get("table", "")
        values = request.query.getall("val", [])
        if not table or not values:
            return web.Response(status=400, text="Missing table or values\n")
        if table not in self.tables:
            return web.Response(status=500, text=f"no such table: {table}\n")
        columns = self.tables[table]["columns"]
        if len(values) != len(columns):
            return web.Response(status=400, text="Value count mismatch for insert\n")
        row = {"date": "2024-01-01 12:00:00"}
        row.update(zip(columns, values))
        self.tables[table]["rows"].append(row)
        return web.Response(text="Insert queued\n")

    async def handle_query(self, request: web.Request) -> web.Response:
        table = request.query.get("table", "")
        col = request.query.get("col", "")
        val = request.query.get("val", "")
        if not table:
            return web.Response(status=400, text="Missing table\n")
        if table not in self.tables:
            return web.Response(status=500, text=f"no such table: {table}\n")
        rows = self.tables[table]["rows"]
        if col and val:
            rows = [row for row in rows if row.get(col) == val]
        return web.json_response(rows)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def ticking_clock():
    """Clock that advances one millisecond per call."""
    start = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(milliseconds=next(counter))


@pytest.fixture
def hash_generator(ticking_clock):
    """Create hash generator with a deterministic clock."""
    return HashGenerator(clock=ticking_clock)


@pytest.fixture
def memory_gateway():
    """Create in-memory gateway."""
    return InMemoryStorageGateway()


@pytest.fixture
async def service(memory_gateway, hash_generator, logger) -> URLShortenerService:
    """Create service backed by the in-memory gateway, schema in place."""
    svc = URLShortenerService(
        gateway=memory_gateway,
        table_name=TABLE_NAME,
        redirector_path="redirect",
        hash_generator=hash_generator,
        logger=logger,
    )
    await svc.initialize()
    memory_gateway.calls.clear()
    return svc


@pytest.fixture
async def storage_backend():
    """Run a fake storage service on a local port."""
    backend = FakeStorageBackend()
    server = test_utils.TestServer(backend.app)
    await server.start_server()
    backend.base_url = f"http://{server.host}:{server.port}"

    yield backend

    await server.close()


@pytest.fixture
async def http_gateway(storage_backend, logger):
    """Create HTTP gateway pointed at the fake storage service."""
    gateway = HTTPStorageGateway(storage_url=storage_backend.base_url, logger=logger)

    yield gateway

    await gateway.close()


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "http://example.com",
        "https://github.com/user/repo",
        "example.com/page",
    ]
