"""
Node registry for Graphene.

Stores caller supplied values under unique string keys. A key is derived in
one of three ways, selected by the custom key passed to register():

- ""       -> HASHED: str(hash(value))
- "name"   -> LITERAL: the string itself
- ".name"  -> DELEGATED: the string returned by field/method `name` on value

Registration is all-or-nothing: the key is fully resolved and checked for
uniqueness before anything is stored.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from graphene.errors import (
    AccessorNotFoundError,
    DuplicateKeyError,
    KeyTypeError,
    NoHashCapabilityError,
    NodeNotFoundError,
    NullValueError,
    SecurityViolationError,
)
from graphene.protocol import KeyedNode
from graphene.security import DELEGATION_MARKER, AccessorPolicy

logger = logging.getLogger(__name__)


class KeyDerivation(Enum):
    HASHED = "hashed"
    LITERAL = "literal"
    DELEGATED = "delegated"


@dataclass(frozen=True)
class NodeEntry:
    """A registered node. Never modified after registration."""
    key: str
    value: Any
    derivation: KeyDerivation
    accessor: Optional[str] = None   # delegated accessor name, if any
    custom_key: str = ""             # key string as given by the caller


class NodeRegistry:
    """
    Maps derived keys to registered values.

    Responsibilities:
    - Derive a key for each value (hashed, literal or delegated)
    - Keep delegated accessors away from forbidden names
    - Enforce key uniqueness
    - Remember which accessor produced each delegated key

    Usage:
        registry = NodeRegistry()
        registry.register(5)                   # key "5"
        registry.register(user, "admin")       # key "admin"
        registry.register(user, ".username")   # key user.username
        registry.count()                       # 3
    """

    def __init__(self, policy: Optional[AccessorPolicy] = None):
        self.policy = policy or AccessorPolicy()
        # key -> NodeEntry
        self._storage: Dict[str, NodeEntry] = {}
        # delegated key -> accessor name that produced it
        self._accessor_lookup: Dict[str, str] = {}

    def register(self, value: Any, custom_key: str = "") -> None:
        """
        Register `value` as a node.

        Args:
            value: Any non-None object
            custom_key: "" for a hashed key, a plain string for a literal key,
                or ".name" to use the result of field/method `name` on value

        Raises:
            NullValueError: value is None
            KeyTypeError: custom_key is not a string, or the delegated
                accessor returned a non-string
            NoHashCapabilityError: value is unhashable (hashed keys only)
            AccessorNotFoundError: value has no accessor with that name
            SecurityViolationError: the accessor name is not permitted
            DuplicateKeyError: a node with the derived key already exists
        """
        if value is None:
            raise NullValueError("A None object cannot be registered as a node")

        if custom_key is None:
            custom_key = ""
        if not isinstance(custom_key, str):
            raise KeyTypeError(
                f"Node key must be a string, got {type(custom_key).__name__}"
            )

        accessor = None
        if custom_key == "":
            derivation = KeyDerivation.HASHED
            key = self._hashed_key(value)
        elif custom_key.startswith(DELEGATION_MARKER):
            derivation = KeyDerivation.DELEGATED
            accessor = custom_key[len(DELEGATION_MARKER):]
            key = self._delegated_key(value, accessor)
        else:
            derivation = KeyDerivation.LITERAL
            key = custom_key

        if key in self._storage:
            raise DuplicateKeyError(
                f"A node with key '{key}' is already registered", key=key
            )

        self._storage[key] = NodeEntry(
            key=key,
            value=value,
            derivation=derivation,
            accessor=accessor,
            custom_key=custom_key,
        )
        if accessor is not None:
            self._accessor_lookup[key] = accessor
        logger.debug(f"Registered node '{key}' ({derivation.value})")

    def _hashed_key(self, value: Any) -> str:
        try:
            return str(hash(value))
        except TypeError as e:
            raise NoHashCapabilityError(
                f"Object of type {type(value).__name__} is not hashable; "
                f"pass a custom key instead"
            ) from e

    def _delegated_key(self, value: Any, name: str) -> str:
        """
        Resolve a delegated key. Order matters: existence, then permission,
        then invocation. Nothing on the value runs before the permission check.
        """
        if not name:
            raise AccessorNotFoundError(
                f"Delegated key '{DELEGATION_MARKER}' names no field or method"
            )

        if isinstance(value, KeyedNode):
            # Only the fields the value chooses to expose are reachable.
            result = value.node_key_field(name)
            if result is None:
                raise AccessorNotFoundError(
                    f"{type(value).__name__} does not expose key field '{name}'"
                )
        else:
            try:
                inspect.getattr_static(value, name)
            except AttributeError:
                raise AccessorNotFoundError(
                    f"{type(value).__name__} has no field or method '{name}'"
                ) from None

            if not self.policy.permits(name):
                raise SecurityViolationError(
                    f"Accessor '{name}' may not be used to derive a node key"
                )

            try:
                attr = getattr(value, name)
            except AttributeError:
                # Declared but unset, e.g. an empty __slots__ entry
                raise AccessorNotFoundError(
                    f"{type(value).__name__} has no value for field '{name}'"
                ) from None
            result = attr() if callable(attr) else attr

        if not isinstance(result, str):
            raise KeyTypeError(
                f"Accessor '{name}' returned {type(result).__name__}, expected str"
            )
        return result

    # --- Lookup ---

    def count(self) -> int:
        """Number of registered nodes."""
        return len(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __contains__(self, key: object) -> bool:
        return key in self._storage

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def entry(self, key: str) -> NodeEntry:
        if key not in self._storage:
            raise NodeNotFoundError(f"No node registered under key '{key}'", key=key)
        return self._storage[key]

    def get(self, key: str) -> Any:
        """Return the value registered under `key`."""
        return self.entry(key).value

    def accessor_for(self, key: str) -> Optional[str]:
        """Return the accessor name that produced `key`, or None."""
        return self._accessor_lookup.get(key)

    def keys(self) -> List[str]:
        return list(self._storage)

    def entries(self) -> List[NodeEntry]:
        return list(self._storage.values())
