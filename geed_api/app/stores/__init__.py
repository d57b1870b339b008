"""
Data access layer.

``DataStore`` (``adapter``) is the only entry point used by the rest
of the application; ``MongoStore`` and ``MemoryStore`` are its two
interchangeable backends.
"""

from .adapter import DataStore, get_store  # noqa: F401
from .base import ContactPage, Page  # noqa: F401
