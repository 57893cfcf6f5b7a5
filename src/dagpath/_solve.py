from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._io import build_graph

if TYPE_CHECKING:
    from ._models import PathResult, ShortestPathRequest

logger = logging.getLogger(__name__)


def solve(request: ShortestPathRequest, node_capacity: int | None = None) -> PathResult:
    """Answer a shortest-path request.

    Builds a fresh graph from the request's edge list and searches it for the
    cheapest path from ``request.source`` to ``request.destination``. The graph
    is discarded afterwards.

    Args:
        request: The decoded request.
        node_capacity: Optional number of nodes to allocate, see :func:`build_graph`.

    Returns:
        The shortest-path result. Its ``path`` is None if no path exists.

    Raises:
        NodeIndexError: If a node id exceeds ``node_capacity``.
        CycleError: If the edge list contains a cycle.

    """
    logger.debug(f"Solving {request.source} -> {request.destination} over {request.num_edges} edges")
    graph = build_graph(request, node_capacity)
    result = graph.shortest_path(request.source, request.destination)

    if result.path is None:
        logger.debug(f"  No path from {request.source} to {request.destination}")
    else:
        logger.debug(f"  Found path {list(result.path.nodes)} with cost {result.path.cost}")
    return result
