"""
Capability protocols for Graphene.

KeyedNode lets a value decide which of its fields can back a delegated node
key. GraphVariant is the interface every concrete graph (directed or
undirected) conforms to.
"""

from typing import Protocol, Any, Optional, runtime_checkable


@runtime_checkable
class KeyedNode(Protocol):
    """
    Protocol for values that expose their key fields explicitly.

    When a value implements this protocol, a delegated key ".name" is resolved
    by calling node_key_field("name") instead of looking the attribute up by
    reflection. Only the fields the value chooses to expose are reachable.
    """

    def node_key_field(self, name: str) -> Optional[str]:
        """
        Return the key stored under field `name`.

        Args:
            name: Field name, without the leading "."

        Returns:
            The key string, or None if the field is not exposed.
        """
        ...


@runtime_checkable
class GraphVariant(Protocol):
    """
    Protocol for concrete graph types.

    Edge and rendering operations are intentionally not part of it.
    """

    def is_directed(self) -> bool:
        ...

    def is_undirected(self) -> bool:
        ...

    def add_node(self, value: Any, key: str = "") -> None:
        ...

    def count(self) -> int:
        ...

    def add_data(self, key: str, value: Any, no_update: bool = False) -> Any:
        ...

    def remove_data(self, key: str) -> Any:
        ...

    def view_data(self, key: str = "") -> Any:
        ...

    def get_data(self, key: str, default: Any = None) -> Any:
        ...
