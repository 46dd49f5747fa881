"""
messagedb-store: Message DB storage adapter.

This package provides an append-only, optimistically concurrent message store
on top of Message DB (PostgreSQL). Messages are appended to streams with an
optional expected version and read back by stream or by category.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
