"""Weighted directed graph over a fixed range of integer nodes."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dagpath._errors import MissingEdgeError, NodeIndexError

from ._algorithms import shortest_path, topological_sort

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from dagpath._models import PathResult


@dataclass(slots=True)
class DiGraph:
    """A directed graph with integer nodes ``0..num_nodes-1`` and integer weights.

    The node count is fixed at construction. The graph only grows through
    :meth:`add_edge`; nodes and edges are never removed.

    At most one weight is kept per ordered pair: inserting an existing pair
    again replaces its weight. ``num_edges`` and the degree counters still
    count every insertion, so they over-count after such an overwrite.

    Attributes:
        num_nodes: Number of nodes, fixed for the lifetime of the graph.
        num_edges: Number of ``add_edge`` calls performed.

    """

    num_nodes: int
    num_edges: int = field(default=0, init=False)
    _in_degree: defaultdict[int, int] = field(default_factory=lambda: defaultdict(int), init=False, repr=False)
    _out_degree: defaultdict[int, int] = field(default_factory=lambda: defaultdict(int), init=False, repr=False)
    _adjacency: list[dict[int, int]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.num_nodes < 0:
            msg = f"Node count must be non-negative, got {self.num_nodes}"
            raise ValueError(msg)
        self._adjacency = [{} for _ in range(self.num_nodes)]

    @classmethod
    def from_edges(cls, num_nodes: int, edges: Iterable[tuple[int, int, int]]) -> DiGraph:
        """Build a graph from ``(source, target, weight)`` triples.

        Example:
            >>> graph = DiGraph.from_edges(3, [(0, 1, 1), (1, 2, 2)])
            >>> graph.neighbors(0)
            [1]

        """
        graph = cls(num_nodes)
        graph.add_edges(edges)
        return graph

    def check_node(self, node: int) -> None:
        """Raise NodeIndexError unless ``node`` is a valid id for this graph."""
        if not 0 <= node < self.num_nodes:
            raise NodeIndexError(node, self.num_nodes)

    def add_edge(self, source: int, target: int, weight: int) -> None:
        """Insert the edge ``source -> target``, replacing any previous weight.

        Raises:
            NodeIndexError: If either endpoint is outside ``[0, num_nodes)``.
            ValueError: If ``weight`` is negative.

        """
        self.check_node(source)
        self.check_node(target)
        if weight < 0:
            msg = f"Edge {source}->{target} has negative weight {weight}"
            raise ValueError(msg)

        self._out_degree[source] += 1
        self._in_degree[target] += 1
        self.num_edges += 1
        self._adjacency[source][target] = weight

    def add_edges(self, edges: Iterable[tuple[int, int, int]]) -> None:
        for source, target, weight in edges:
            self.add_edge(source, target, weight)

    def neighbors(self, node: int) -> list[int]:
        """Return the targets of the outgoing edges of ``node`` in ascending order.

        Raises:
            NodeIndexError: If ``node`` is not a node of the graph.

        """
        self.check_node(node)
        return self._successors(node)

    def get_edge(self, source: int, target: int) -> int:
        """Return the weight stored for ``source -> target``.

        Raises:
            NodeIndexError: If either endpoint is not a node of the graph.
            MissingEdgeError: If no such edge exists.

        """
        self.check_node(source)
        self.check_node(target)
        return self._weight(source, target)

    def has_edge(self, source: int, target: int) -> bool:
        self.check_node(source)
        self.check_node(target)
        return target in self._adjacency[source]

    def in_degree(self, node: int) -> int:
        self.check_node(node)
        return self._in_degree.get(node, 0)

    def out_degree(self, node: int) -> int:
        self.check_node(node)
        return self._out_degree.get(node, 0)

    # Unchecked accessors for the algorithms; callers validate node ids first.

    def _successors(self, node: int) -> list[int]:
        return sorted(self._adjacency[node])

    def _weight(self, source: int, target: int) -> int:
        try:
            return self._adjacency[source][target]
        except KeyError:
            raise MissingEdgeError(source, target) from None

    @property
    def nodes(self) -> range:
        """All node ids of the graph."""
        return range(self.num_nodes)

    def edges(self) -> Iterator[tuple[int, int, int]]:
        """Iterate over stored ``(source, target, weight)`` triples in ascending order."""
        for source in self.nodes:
            for target in self._successors(source):
                yield source, target, self._adjacency[source][target]

    def adjacency_copy(self) -> list[dict[int, int]]:
        """Return an independent copy of the adjacency structure."""
        return [dict(targets) for targets in self._adjacency]

    def topological_order(self) -> list[int]:
        """Return every node in topological order.

        Raises:
            CycleError: If the graph contains a cycle.

        """
        return topological_sort(self)

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        try:
            self.topological_order()
        except ValueError:
            return True
        return False

    def shortest_path(self, source: int, destination: int) -> PathResult:
        """Find the cheapest path from ``source`` to ``destination``.

        See :func:`dagpath.shortest_path`.
        """
        return shortest_path(self, source, destination)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return self.num_nodes

    def __contains__(self, node: object) -> bool:
        """Check if a node id is in the graph."""
        return isinstance(node, int) and 0 <= node < self.num_nodes
