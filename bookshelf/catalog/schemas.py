"""
Request and response bodies for the books API.

``BookPayload`` is what clients send to create or update a book. Both
fields are optional at this level; the router decides what a missing
or blank title means for each operation. Unknown keys (including a
client-supplied ``id``) are ignored. ``ErrorBody`` documents the shape
of every error response.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class BookPayload(BaseModel):
    title: Optional[str] = None
    # Not validated; the router stores it as text
    author: Any = None


class ErrorBody(BaseModel):
    error: str
    status: int
    # Only present in development mode
    stack: Optional[str] = Field(default=None)
