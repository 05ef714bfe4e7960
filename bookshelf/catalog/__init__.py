"""
Books package for the bookshelf API.

This package holds the request schemas and route definitions of the
``/api/books`` endpoints. The routes never touch a global collection:
they resolve the ``BookStore`` attached to the running application, so
swapping the in-memory store for another implementation of the same
five operations only requires passing a different instance to
``create_app``.
"""

from .router import router as books_router  # noqa: F401
