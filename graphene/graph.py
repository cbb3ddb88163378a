"""
Graph classes for Graphene.

Graph is the base class composing a NodeRegistry (nodes) and a
GraphMetadataStore (graph level data). Use one of its concrete variants,
UndirectedGraph or DirectedGraph; on the base class every variant specific
operation raises UnsupportedOperationError.

Edges, node removal and visual output are placeholders for now, even on the
concrete variants.
"""

import functools
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from graphene.config import get_settings
from graphene.errors import UnsupportedOperationError
from graphene.metadata_store import GraphMetadataStore
from graphene.node_registry import NodeEntry, NodeRegistry
from graphene.security import AccessorPolicy

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def operation_names(cls: type) -> FrozenSet[str]:
    """Public attribute names of a graph class; reserved for metadata keys."""
    return frozenset(name for name in dir(cls) if not name.startswith('_'))


class Graph:
    """
    Base graph: a set of uniquely keyed nodes plus graph level metadata.

    Metadata can also be read as attributes:

        graph = UndirectedGraph()
        graph.add_data("data_src", "https://www.wikipedia.org/")
        graph.data_src  # -> "https://www.wikipedia.org/"
    """

    def __init__(self, accessor_allowlist: Optional[Iterable[str]] = None):
        self._nodes = NodeRegistry(AccessorPolicy(accessor_allowlist))
        self._metadata = GraphMetadataStore(operation_names(type(self)))

    @classmethod
    def from_config(cls, path: Optional[Union[str, Path]] = None) -> "Graph":
        """Create a graph using the accessor allowlist from the config file."""
        settings = get_settings(path)
        if settings.accessor_allowlist is not None:
            logger.info(
                f"Creating {cls.__name__} with accessor allowlist "
                f"{sorted(settings.accessor_allowlist)}"
            )
        return cls(accessor_allowlist=settings.accessor_allowlist)

    def _unsupported(self, operation: str):
        if type(self) is Graph:
            hint = "Graph is a base class, use UndirectedGraph or DirectedGraph"
        else:
            hint = "not implemented yet"
        raise UnsupportedOperationError(
            f"{type(self).__name__}.{operation}() is not supported: {hint}"
        )

    # --- Nodes ---

    def add_node(self, value: Any, key: str = "") -> None:
        """
        Add `value` as a node.

        By default the key is str(hash(value)). Pass a plain string to use it
        as the key, or ".name" to use the string returned by field or method
        `name` of the value. See NodeRegistry.register for the errors raised.
        """
        self._nodes.register(value, key)

    def length(self) -> int:
        return self._nodes.count()

    def count(self) -> int:
        return self._nodes.count()

    def __len__(self) -> int:
        return len(self._nodes)

    def has_node(self, key: str) -> bool:
        return key in self._nodes

    def get_node(self, key: str) -> Any:
        return self._nodes.get(key)

    def node_entry(self, key: str) -> NodeEntry:
        return self._nodes.entry(key)

    def node_keys(self) -> List[str]:
        return self._nodes.keys()

    def node_accessor(self, key: str) -> Optional[str]:
        """Field or method name that produced a delegated key, if any."""
        return self._nodes.accessor_for(key)

    def remove_node(self, key: str):
        self._unsupported("remove_node")

    # --- Edges ---

    def add_edge(self, node_1: str, node_2: str, edge_attributes: Optional[Dict[str, Any]] = None):
        self._unsupported("add_edge")

    def remove_edge(self, node_1: str, node_2: str):
        self._unsupported("remove_edge")

    # --- Graph metadata ---

    def add_data(self, key: str, value: Any, no_update: bool = False) -> Any:
        """
        Store arbitrary data on the graph and return the stored value.
        Existing keys are overwritten unless no_update is True.
        """
        return self._metadata.set(key, value, no_update)

    def remove_data(self, key: str) -> Any:
        return self._metadata.remove(key)

    def view_data(self, key: str = "") -> Any:
        """Return all graph data as a dict, or a single value if key is given."""
        return self._metadata.view(key)

    def get_data(self, key: str, default: Any = None) -> Any:
        return self._metadata.get(key, default)

    def __getattr__(self, name: str) -> Any:
        # Only reached when regular attribute lookup fails
        if name.startswith('_'):
            raise AttributeError(name)
        metadata = self.__dict__.get('_metadata')
        if metadata is None:
            raise AttributeError(name)
        return metadata.attribute_access(name)

    # --- Variant specific ---

    def is_directed(self) -> bool:
        self._unsupported("is_directed")

    def is_undirected(self) -> bool:
        self._unsupported("is_undirected")

    def visual_output(self, output_format: str = "pdf"):
        self._unsupported("visual_output")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} nodes={len(self._nodes)} data={len(self._metadata)}>"


class UndirectedGraph(Graph):
    """Graph whose (future) edges have no direction."""

    def is_directed(self) -> bool:
        return False

    def is_undirected(self) -> bool:
        return True


class DirectedGraph(Graph):
    """Graph whose (future) edges point from one node to another."""

    def is_directed(self) -> bool:
        return True

    def is_undirected(self) -> bool:
        return False
