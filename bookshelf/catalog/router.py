"""
Route definitions for the books API.

Endpoints under /api/books:
- GET    /             : list every stored book
- GET    /{book_id}    : get one book
- POST   /             : create a book (id assigned by the store)
- PUT    /{book_id}    : replace title/author of a book
- DELETE /{book_id}    : remove a book

Handlers validate their inputs, call the store and raise ``ApiError``
subclasses on failure; ``bookshelf.errors`` turns those into JSON.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status
from pydantic import ValidationError

from ..config import Settings
from ..errors import InvalidInput, NotFound
from ..models import Book
from ..storage import BookStore, NoMatchError, where
from .schemas import BookPayload, ErrorBody


logger = logging.getLogger(__name__)

# Leading integer, the way parseInt(value, 10) reads it: "12abc" -> 12
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")
_WHOLE_INT = re.compile(r"[0-9]+")

router = APIRouter(prefix="/api/books", tags=["books"])


def get_store(request: Request) -> BookStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_id(raw: str, strict: bool = False) -> Optional[int]:
    """Read a base-10 book id from a path segment.

    Lenient mode accepts leading whitespace, a sign and trailing junk
    after the digits. Strict mode accepts digits only. Returns ``None``
    when nothing usable is found.
    """
    if strict:
        match = _WHOLE_INT.fullmatch(raw)
        return int(match.group(0)) if match else None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def _require_id(raw: str, settings: Settings, message: str) -> int:
    book_id = parse_id(raw, strict=settings.strict_ids)
    if book_id is None:
        raise InvalidInput(message)
    return book_id


def _read_payload(body: Any, message: str) -> BookPayload:
    if body is None:
        return BookPayload()
    try:
        return BookPayload.model_validate(body)
    except ValidationError:
        raise InvalidInput(message)


def _clean_title(payload: BookPayload, message: str) -> str:
    title = (payload.title or "").strip()
    if not title:
        raise InvalidInput(message)
    return title


def _author_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


_ID_ERRORS = {
    400: {"model": ErrorBody, "description": "Id is not a number."},
    404: {"model": ErrorBody, "description": "Book not found."},
}


@router.get("/", response_model=List[Book], include_in_schema=False)
@router.get("", response_model=List[Book])
async def list_books(store: BookStore = Depends(get_store)) -> List[Book]:
    return store.find()


@router.get("/{book_id}", response_model=Book, responses=_ID_ERRORS)
async def get_book(
    book_id: str,
    store: BookStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Book:
    parsed = _require_id(book_id, settings, "Id must be a number")
    try:
        return store.find_one(where(id=parsed))
    except NoMatchError:
        raise NotFound("Book not found")


@router.post("/", response_model=Book, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post(
    "",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorBody, "description": "Title is missing."}},
)
async def create_book(
    body: Any = Body(default=None),
    store: BookStore = Depends(get_store),
) -> Book:
    payload = _read_payload(body, "Title is required")
    title = _clean_title(payload, "Title is required")

    book = Book(id=store.next_id(), title=title, author=_author_text(payload.author or ""))
    store.insert_one(book)
    logger.info("Created book %s", book.id)
    return book


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ID_ERRORS,
)
async def update_book(
    book_id: str,
    body: Any = Body(default=None),
    store: BookStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    parsed = _require_id(book_id, settings, "Input must be a number")
    payload = _read_payload(body, "Bad Request")
    title = _clean_title(payload, "Bad Request")

    # An explicit "" author is kept; only a missing/null one becomes ""
    author = _author_text(payload.author) if payload.author is not None else ""
    try:
        store.update_one(where(id=parsed), {"title": title, "author": author})
    except NoMatchError:
        raise NotFound("Book not found")
    logger.info("Updated book %s", parsed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ID_ERRORS,
)
async def delete_book(
    book_id: str,
    store: BookStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    parsed = _require_id(book_id, settings, "Id must be a number")
    try:
        store.delete_one(where(id=parsed))
    except NoMatchError:
        raise NotFound("Book not found")
    logger.info("Deleted book %s", parsed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
