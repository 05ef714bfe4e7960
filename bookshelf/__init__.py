"""In-N-Out-Books: a small HTTP API over an in-memory book collection."""

__version__ = "1.0.0"
