"""
NetworkX export for Graphene graphs.

Builds a networkx graph from the nodes registered on a Graphene graph so the
networkx algorithm library can be used on them. The graph metadata becomes
the networkx graph attribute dict.
"""

import logging
from typing import Union

import networkx as nx

from graphene.errors import UnsupportedOperationError
from graphene.graph import DirectedGraph, Graph, UndirectedGraph

logger = logging.getLogger(__name__)


def to_networkx(graph: Graph) -> Union[nx.Graph, nx.DiGraph]:
    """
    Convert a Graphene graph to networkx.

    Returns:
        nx.DiGraph for a DirectedGraph, nx.Graph for an UndirectedGraph.
        Each node is keyed by its Graphene key and carries:
          - value: the registered object
          - derivation: "hashed", "literal" or "delegated"
          - accessor: delegated accessor name or None

    Raises:
        UnsupportedOperationError: graph is a base Graph
    """
    if isinstance(graph, DirectedGraph):
        G = nx.DiGraph()
    elif isinstance(graph, UndirectedGraph):
        G = nx.Graph()
    else:
        raise UnsupportedOperationError(
            f"Cannot export {type(graph).__name__}: use UndirectedGraph or DirectedGraph"
        )

    G.graph.update(graph.view_data())
    for key in graph.node_keys():
        entry = graph.node_entry(key)
        G.add_node(
            key,
            value=entry.value,
            derivation=entry.derivation.value,
            accessor=entry.accessor,
        )

    logger.debug(f"Exported {G.number_of_nodes()} nodes to {type(G).__name__}")
    return G
