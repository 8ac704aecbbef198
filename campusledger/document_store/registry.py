"""Mini README: Backend registry for document store implementations.

Structure:
    * DocumentStoreRegistry - maps backend identifiers to ``DocumentStore``
      classes and instantiates them.

Built-in backends register on import. Third-party packages can add more by
exposing classes under the ``campusledger.stores`` entry-point group and
calling ``load_plugins``.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Type

from ..logging_utils import get_logger
from ..utils.plugin_loader import load_entry_point_plugins
from .base import DocumentStore

LOGGER = get_logger(__name__)


class DocumentStoreRegistry:
    """Simple registry for mapping backend identifiers to classes."""

    def __init__(self) -> None:
        self._backends: Dict[str, Type[DocumentStore]] = {}

    def register(self, backend: Type[DocumentStore]) -> None:
        """Register a document store class with the registry."""

        identifier = backend.backend_name.lower()
        LOGGER.debug("Registering document store backend '%s'", identifier)
        self._backends[identifier] = backend

    def available_backends(self) -> Iterable[str]:
        """Return backend identifiers in display order."""

        return sorted(self._backends.keys())

    def create(self, identifier: str, *, connection_string: Optional[str] = None) -> DocumentStore:
        """Instantiate the backend matching ``identifier``."""

        backend_cls = self._backends.get(identifier.lower())
        if not backend_cls:
            raise KeyError(f"Unknown document store backend '{identifier}'")
        LOGGER.info("Creating document store backend '%s'", identifier)
        return backend_cls(connection_string=connection_string)

    def load_plugins(self, group: str = "campusledger.stores") -> List[str]:
        """Register ``DocumentStore`` subclasses advertised through entry points."""

        registered: List[str] = []
        for plugin in load_entry_point_plugins(group):
            if isinstance(plugin, type) and issubclass(plugin, DocumentStore):
                self.register(plugin)
                registered.append(plugin.backend_name.lower())
            else:
                LOGGER.warning("Ignoring store plugin %r: not a DocumentStore subclass", plugin)
        return registered


REGISTRY = DocumentStoreRegistry()
