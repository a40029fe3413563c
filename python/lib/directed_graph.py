#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
directed_graph.py
-----------------

A minimal directed graph stored as ``node -> set(successors)``.

It only keeps track of nodes and edges; it is the kind of structure a
shortest-path or spanning-tree routine would walk while feeding an
:class:`indexed_min_heap.IndexedMinHeap`. No traversal is provided.

Behaviour worth knowing
~~~~~~~~~~~~~~~~~~~~~~~
* ``add_edge(src, dest)`` creates ``src`` if needed but **not** ``dest``;
  ``contains_edge`` therefore stays ``False`` until ``dest`` is added too.
* ``remove_node`` only drops the node and its outgoing edges. Use
  ``remove_node_completely`` to also drop every edge that points at it.

Typical usage
~~~~~~~~~~~~~
>>> from directed_graph import DirectedGraph
>>> g = DirectedGraph()
>>> g.add_node('a')
>>> g.add_node('b')
>>> g.add_edge('a', 'b')
>>> g.contains_edge('a', 'b')
True
>>> sorted(g.successors('a'))
['b']
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Generic, Iterator, List, Set, TypeVar

from pq_logging import init_logger

logger = init_logger(__name__)

N = TypeVar('N')                     # node type (hashable)


class DirectedGraph(Generic[N]):
    """Adjacency-set directed graph."""

    __slots__ = ("_adjacency",)

    def __init__(self) -> None:
        self._adjacency: Dict[N, Set[N]] = {}

    # ------------------------------------------------------------------
    #   Nodes
    # ------------------------------------------------------------------
    def add_node(self, node: N) -> None:
        """Add *node*; a no-op if it is already present."""
        self._adjacency.setdefault(node, set())

    def remove_node(self, node: N) -> None:
        """
        Drop *node* and its outgoing edges. Edges from other nodes to
        *node* are left in place. A no-op if *node* is absent.
        """
        self._adjacency.pop(node, None)

    def remove_node_completely(self, node: N) -> None:
        """Drop *node*, its outgoing edges and every edge pointing to it."""
        self.remove_node(node)
        dropped = 0
        for dests in self._adjacency.values():
            if node in dests:
                dests.discard(node)
                dropped += 1
        logger.debug("Removed node %r and %d incoming edge(s)", node, dropped)

    def contains_node(self, node: N) -> bool:
        return node in self._adjacency

    def nodes(self) -> List[N]:
        return list(self._adjacency)

    # ------------------------------------------------------------------
    #   Edges
    # ------------------------------------------------------------------
    def add_edge(self, src: N, dest: N) -> None:
        """Add the edge src -> dest, creating *src* if it is missing."""
        self._adjacency.setdefault(src, set()).add(dest)

    def remove_edge(self, src: N, dest: N) -> None:
        """Remove src -> dest if present."""
        dests = self._adjacency.get(src)
        if dests is not None:
            dests.discard(dest)

    def contains_edge(self, src: N, dest: N) -> bool:
        if src not in self._adjacency or dest not in self._adjacency:
            return False
        return dest in self._adjacency[src]

    def successors(self, node: N) -> FrozenSet[N]:
        """Direct successors of *node* (empty if the node is absent)."""
        return frozenset(self._adjacency.get(node, ()))

    # ------------------------------------------------------------------
    #   Python protocol support
    # ------------------------------------------------------------------
    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self) -> Iterator[N]:
        return iter(self._adjacency)

    def __repr__(self) -> str:
        edges = sum(len(dests) for dests in self._adjacency.values())
        return f"{type(self).__name__}(nodes={len(self._adjacency)}, edges={edges})"
