"""
Graph level metadata store.

Holds arbitrary key/value pairs that describe the graph itself (data source,
attribution, ...) rather than any node. Keys double as attribute names on the
graph facade, so they must be single words and must not shadow a graph
operation or start with an underscore (the graph's private namespace):

    graph.add_data("data_src", "https://www.wikipedia.org/")
    graph.data_src  # -> "https://www.wikipedia.org/"

Leading and trailing whitespace is stripped from keys before use.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from graphene.errors import (
    EmptyKeyError,
    KeyCollidesWithOperationNameError,
    KeyHasInternalSpacesError,
    KeyNotFoundError,
    KeyNotStringError,
    NullKeyError,
    NullValueError,
    UnknownAttributeError,
    ValueNonUpdatableError,
)

logger = logging.getLogger(__name__)


class GraphMetadataStore:
    """
    Key/value side table attached to a graph.

    Args:
        reserved_names: Names keys may not take (the graph's operation names)
    """

    def __init__(self, reserved_names: Optional[Iterable[str]] = None):
        self.reserved_names = frozenset(reserved_names or ())
        self._data: Dict[str, Any] = {}

    @staticmethod
    def _check_key(key: Any) -> str:
        """Validate the key type and return it trimmed."""
        if key is None:
            raise NullKeyError("Metadata key is None; provide a string key")
        if not isinstance(key, str):
            raise KeyNotStringError(
                f"Metadata key must be a string, got {type(key).__name__}"
            )
        return key.strip()

    def set(self, key: str, value: Any, no_update: bool = False) -> Any:
        """
        Store `value` under `key` and return it.

        Args:
            key: Single word string; surrounding whitespace is removed
            value: Any non-None object
            no_update: If True, refuse to overwrite an existing key

        Raises:
            NullKeyError, KeyNotStringError, KeyHasInternalSpacesError,
            EmptyKeyError, KeyCollidesWithOperationNameError, NullValueError,
            ValueNonUpdatableError
        """
        name = self._check_key(key)

        if len(name.split()) > 1:
            raise KeyHasInternalSpacesError(
                f"Metadata key '{name}' has spaces in between; "
                f"use underscores to join words",
                key=name,
            )
        if not name:
            raise EmptyKeyError("Metadata key is empty")
        if name.startswith("_") or name in self.reserved_names:
            raise KeyCollidesWithOperationNameError(
                f"Metadata key '{name}' collides with a graph operation or private name",
                key=name,
            )
        if value is None:
            raise NullValueError(f"Value for metadata key '{name}' is None", key=name)

        if no_update and name in self._data:
            raise ValueNonUpdatableError(
                f"Metadata key '{name}' already exists and no_update was requested",
                key=name,
            )

        self._data[name] = value
        logger.debug(f"Set graph metadata '{name}'")
        return self._data[name]

    def remove(self, key: str) -> Any:
        """Delete `key` and return the value it held."""
        name = self._check_key(key)
        if name not in self._data:
            raise KeyNotFoundError(
                f"Metadata key '{name}' not found; view() lists all stored keys",
                key=name,
            )
        logger.debug(f"Removed graph metadata '{name}'")
        return self._data.pop(name)

    def view(self, key: str = "") -> Any:
        """
        Return the value under `key`, or a copy of all metadata when no key
        is given.
        """
        if key == "":
            return dict(self._data)
        name = self._check_key(key)
        if name not in self._data:
            raise KeyNotFoundError(
                f"Metadata key '{name}' not found; view() lists all stored keys",
                key=name,
            )
        return self._data[name]

    def get(self, key: str, default: Any = None) -> Any:
        if not isinstance(key, str):
            return default
        return self._data.get(key.strip(), default)

    def attribute_access(self, name: str) -> Any:
        """Attribute-style lookup; raises UnknownAttributeError on a miss."""
        if name in self._data:
            return self._data[name]
        raise UnknownAttributeError(
            f"Graph has no attribute or metadata named '{name}'", key=name
        )

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
