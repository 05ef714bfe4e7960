# bookshelf/storage.py
"""
In-memory book store.

``BookStore`` owns its list of books; nothing here is module-level
state, so every application (and every test) can hold its own
instance. The interface mirrors a small document collection:
``find``, ``find_one``, ``insert_one``, ``update_one`` and
``delete_one``. Lookups take a predicate, usually built with
``where(id=...)``. Operations that address a single record and find
nothing raise ``NoMatchError`` so callers can tell "absent" apart from
any other failure.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from .models import Book


logger = logging.getLogger(__name__)

Predicate = Callable[[Book], bool]


SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {"id": 1, "title": "The Fellowship of the Ring", "author": "J.R.R. Tolkien"},
    {"id": 2, "title": "Harry Potter and the Philosopher's Stone", "author": "J.K. Rowling"},
    {"id": 3, "title": "The Two Towers", "author": "J.R.R. Tolkien"},
    {"id": 4, "title": "Harry Potter and the Chamber of Secrets", "author": "J.K. Rowling"},
    {"id": 5, "title": "The Return of the King", "author": "J.R.R. Tolkien"},
]


class NoMatchError(LookupError):
    """Raised when no stored book satisfies a predicate."""

    def __init__(self, message: str = "No matching item found"):
        super().__init__(message)


def where(**fields: Any) -> Predicate:
    """Build a predicate matching books whose fields equal ``fields``."""

    def _matches(book: Book) -> bool:
        return all(getattr(book, name, None) == value for name, value in fields.items())

    return _matches


class BookStore:
    def __init__(self, books: Optional[Iterable[Book]] = None):
        self._books: List[Book] = []
        self._last_id = 0
        for book in books or ():
            self.insert_one(book)

    @classmethod
    def with_sample_books(cls) -> "BookStore":
        return cls(Book(**entry) for entry in SAMPLE_BOOKS)

    def __len__(self) -> int:
        return len(self._books)

    def _index_of(self, predicate: Predicate) -> int:
        for index, book in enumerate(self._books):
            if predicate(book):
                return index
        raise NoMatchError()

    def find(self) -> List[Book]:
        return [book.model_copy() for book in self._books]

    def find_one(self, predicate: Predicate) -> Book:
        return self._books[self._index_of(predicate)].model_copy()

    def next_id(self) -> int:
        """Return the id the next created book should receive.

        One past the largest stored id, and never an id handed out
        before, even if that book has since been deleted.
        """
        highest = max((book.id for book in self._books), default=0)
        return max(highest, self._last_id) + 1

    def insert_one(self, book: Book) -> None:
        if any(existing.id == book.id for existing in self._books):
            raise ValueError(f"Book with id {book.id} already exists")
        self._books.append(book.model_copy())
        self._last_id = max(self._last_id, book.id)
        logger.debug("Inserted book %s", book.id)

    def update_one(self, predicate: Predicate, changes: Dict[str, Any]) -> None:
        if "id" in changes:
            raise ValueError("Book id cannot be changed")
        index = self._index_of(predicate)
        current = self._books[index]
        # Re-validate so a bad change never reaches the stored record
        self._books[index] = Book(**{**current.model_dump(), **changes})
        logger.debug("Updated book %s", current.id)

    def delete_one(self, predicate: Predicate) -> None:
        index = self._index_of(predicate)
        removed = self._books.pop(index)
        logger.debug("Deleted book %s", removed.id)
