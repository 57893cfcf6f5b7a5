"""Graph algorithms for weighted DAGs: topological sort and shortest paths."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from dagpath._errors import CycleError, PathReconstructionError
from dagpath._models import PathResult, WeightedPath

if TYPE_CHECKING:
    from ._digraph import DiGraph


def topological_sort(graph: DiGraph) -> list[int]:
    """Sort the nodes of a graph topologically using Kahn's algorithm.

    Works on a private copy of the adjacency structure, so the graph itself
    is left untouched. Nodes that become ready at the same time are emitted
    in the order they were discovered (FIFO), starting from the zero
    in-degree nodes in ascending id order.

    Args:
        graph: The graph to sort.

    Returns:
        Every node of the graph exactly once, each before all of its successors.

    Raises:
        CycleError: If edges remain once no node is left without predecessors.

    Example:
        >>> from dagpath import DiGraph
        >>> topological_sort(DiGraph.from_edges(3, [(0, 1, 1), (1, 2, 2), (0, 2, 3)]))
        [0, 1, 2]

    """
    remaining = graph.adjacency_copy()

    # Counted from the stored pairs: the graph's own counters include overwritten duplicates
    indegree = [0] * graph.num_nodes
    for targets in remaining:
        for target in targets:
            indegree[target] += 1

    queue = deque(node for node in graph.nodes if indegree[node] == 0)
    order: list[int] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        targets = remaining[node]
        for target in sorted(targets):
            del targets[target]
            indegree[target] -= 1
            if indegree[target] == 0:
                queue.append(target)

    leftover = sum(len(targets) for targets in remaining)
    if leftover:
        msg = f"Cycle detected in graph ({leftover} edge(s) could not be ordered)"
        raise CycleError(msg)

    return order


def _relax(graph: DiGraph, source: int) -> tuple[list[int | None], list[int | None]]:
    distance: list[int | None] = [None] * graph.num_nodes
    predecessor: list[int | None] = [None] * graph.num_nodes
    distance[source] = 0

    for node in topological_sort(graph):
        base = distance[node]
        if base is None:
            continue
        for neighbor in graph._successors(node):  # noqa: SLF001
            candidate = base + graph._weight(node, neighbor)  # noqa: SLF001
            current = distance[neighbor]
            if current is None or candidate < current:
                distance[neighbor] = candidate
                predecessor[neighbor] = node

    return distance, predecessor


def shortest_distances(graph: DiGraph, source: int) -> list[int | None]:
    """Return the cost of the cheapest path from ``source`` to every node.

    Unreachable nodes map to None.

    Raises:
        NodeIndexError: If ``source`` is not a node of the graph.
        CycleError: If the graph contains a cycle.

    """
    graph.check_node(source)
    distance, _ = _relax(graph, source)
    return distance


def shortest_path(graph: DiGraph, source: int, destination: int) -> PathResult:
    """Find the cheapest path between two nodes of a DAG.

    Distances are relaxed once per node in topological order, so every
    node's distance is final before its outgoing edges are relaxed.

    Args:
        graph: The graph to search.
        source: Start node.
        destination: End node.

    Returns:
        A PathResult whose ``path`` is None if ``destination`` is unreachable.

    Raises:
        NodeIndexError: If either endpoint is not a node of the graph.
        CycleError: If the graph contains a cycle.
        MissingEdgeError: If a listed neighbor has no stored weight.
        PathReconstructionError: If the predecessor chain does not lead back to ``source``.

    """
    graph.check_node(source)
    graph.check_node(destination)

    distance, predecessor = _relax(graph, source)
    cost = distance[destination]
    if cost is None:
        return PathResult(source=source, destination=destination)

    nodes = [destination]
    node = destination
    for _ in range(graph.num_nodes):
        if node == source:
            break
        previous = predecessor[node]
        if previous is None:
            msg = f"Node {node} has no predecessor on the path from {source} to {destination}"
            raise PathReconstructionError(msg)
        node = previous
        nodes.append(node)
    else:
        msg = f"Predecessor chain from {destination} did not reach {source} within {graph.num_nodes} steps"
        raise PathReconstructionError(msg)

    nodes.reverse()
    return PathResult(source=source, destination=destination, path=WeightedPath(nodes=tuple(nodes), cost=cost))
