# bookshelf/main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from . import __version__
from .catalog import books_router
from .config import Settings, get_settings
from .errors import install_error_handlers
from .storage import BookStore


logger = logging.getLogger(__name__)


LANDING_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>
    body {{ font-family: sans-serif; max-width: 560px; margin: 4rem auto; text-align: center; }}
    .tagline {{ color: #666; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <p class="tagline">Manage your book collection, one chapter at a time.</p>
  <p>Browse, add, update and remove books through the <code>/api/books</code> endpoints.</p>
</body>
</html>
"""


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("bookshelf").setLevel(settings.log_level.upper())


def create_app(
    store: Optional[BookStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API around ``store``.

    Without an explicit store the application gets its own
    ``BookStore``, seeded with the sample collection unless the
    settings turn seeding off.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if store is None:
        store = BookStore.with_sample_books() if settings.seed_sample_books else BookStore()

    app = FastAPI(
        title=settings.app_title,
        description="Manage a book collection through a small JSON API.",
        version=__version__,
    )
    app.state.store = store
    app.state.settings = settings

    install_error_handlers(app, settings)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def landing_page():
        return LANDING_PAGE.format(title=settings.app_title)

    app.include_router(books_router)

    logger.info(
        "%s ready (%s mode, %d books)", settings.app_title, settings.environment, len(store)
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("bookshelf.main:app", host=_settings.host, port=_settings.port)
