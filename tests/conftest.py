import httpx
import pytest
import pytest_asyncio

from bookshelf.config import Settings
from bookshelf.main import create_app
from bookshelf.storage import BookStore


@pytest.fixture
def settings():
    return Settings(environment="test", seed_sample_books=False)


@pytest.fixture
def store():
    """A fresh store holding the sample collection for each test."""
    return BookStore.with_sample_books()


@pytest.fixture
def app(store, settings):
    return create_app(store=store, settings=settings)


@pytest_asyncio.fixture
async def client(app):
    # Unexpected errors are re-raised by Starlette after the 500 is sent
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
