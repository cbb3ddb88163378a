"""
Graphene: a small in-memory graph container.

Nodes are arbitrary Python objects registered under unique keys; the graph
itself carries a key/value metadata store.
"""

__version__ = "0.1.0"

from graphene.errors import GrapheneError
from graphene.graph import Graph, UndirectedGraph, DirectedGraph
from graphene.metadata_store import GraphMetadataStore
from graphene.node_registry import NodeRegistry, NodeEntry, KeyDerivation
from graphene.protocol import KeyedNode, GraphVariant
from graphene.export import to_networkx

__all__ = [
    'GrapheneError',
    'Graph',
    'UndirectedGraph',
    'DirectedGraph',
    'GraphMetadataStore',
    'NodeRegistry',
    'NodeEntry',
    'KeyDerivation',
    'KeyedNode',
    'GraphVariant',
    'to_networkx',
]
