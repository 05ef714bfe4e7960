import httpx
import pytest

from bookshelf.config import Settings
from bookshelf.errors import InvalidInput, Internal, NotFound
from bookshelf.main import create_app
from bookshelf.storage import BookStore


class BrokenStore(BookStore):
    def find(self):
        raise RuntimeError("store offline")


def _client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


def test_error_kinds_carry_status():
    assert InvalidInput().status == 400
    assert NotFound("Book not found").status == 404
    assert NotFound("Book not found").message == "Book not found"
    assert Internal().message == "Internal Server Error"


@pytest.mark.asyncio
async def test_unknown_route_is_not_found(client):
    res = await client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"error": "Not found", "status": 404}


@pytest.mark.asyncio
async def test_store_failure_is_internal_error(settings):
    app = create_app(store=BrokenStore(), settings=settings)
    async with _client(app) as client:
        res = await client.get("/api/books")
    assert res.status_code == 500
    assert res.json() == {"error": "store offline", "status": 500}


@pytest.mark.asyncio
async def test_malformed_json_is_bad_request(client, store):
    res = await client.post(
        "/api/books", content=b"{not json", headers={"content-type": "application/json"}
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Bad Request", "status": 400}
    assert len(store) == 5


@pytest.mark.asyncio
async def test_stack_included_in_development():
    app = create_app(store=BrokenStore(), settings=Settings(environment="development"))
    async with _client(app) as client:
        res = await client.get("/api/books")
        missing = await client.get("/api/books/1")

    body = res.json()
    assert body["status"] == 500
    assert "RuntimeError: store offline" in body["stack"]
    assert "NotFound" in missing.json()["stack"]


@pytest.mark.asyncio
async def test_stack_hidden_in_production():
    app = create_app(store=BrokenStore(), settings=Settings(environment="production"))
    async with _client(app) as client:
        res = await client.get("/api/books")
        missing = await client.get("/api/books/1")

    assert "stack" not in res.json()
    assert missing.json() == {"error": "Book not found", "status": 404}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [("PATCH", "/api/books/1"), ("POST", "/api/books/1"), ("DELETE", "/api/books")],
)
async def test_unmatched_method_is_not_found(client, store, method, path):
    before = store.find()
    res = await client.request(method, path, json={"title": "x"})
    assert res.status_code == 404
    assert res.json() == {"error": "Not found", "status": 404}
    assert store.find() == before


class UnavailableStore(BookStore):
    def find(self):
        raise Internal()


@pytest.mark.asyncio
async def test_internal_error_uses_default_message(settings):
    app = create_app(store=UnavailableStore(), settings=settings)
    async with _client(app) as client:
        res = await client.get("/api/books")
    assert res.status_code == Internal.status
    assert res.json() == {"error": "Internal Server Error", "status": 500}
