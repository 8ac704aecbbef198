"""Mini README: Concrete document store backends.

New backends subclass ``DocumentStore`` and call ``REGISTRY.register``
during module import so the settings can select them by name.
"""

from .memory_backend import InMemoryDocumentStore

__all__ = ["InMemoryDocumentStore"]
