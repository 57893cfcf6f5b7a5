"""Exceptions raised by dagpath."""


class GraphError(Exception):
    """Base class for all dagpath errors."""


class CycleError(GraphError, ValueError):
    """The graph contains a cycle, so no topological order exists."""


class MissingEdgeError(GraphError, LookupError):
    """An edge was looked up that has no stored weight."""

    def __init__(self, source: int, target: int) -> None:
        self.source = source
        self.target = target
        super().__init__(f"Edge {source}->{target} does not exist")


class NodeIndexError(GraphError, IndexError):
    """A node id lies outside the graph's declared capacity."""

    def __init__(self, node: int, num_nodes: int) -> None:
        self.node = node
        self.num_nodes = num_nodes
        super().__init__(f"Node {node} is out of range for a graph with {num_nodes} nodes")


class PathReconstructionError(GraphError, RuntimeError):
    """The predecessor chain does not lead back to the source."""


class MalformedInputError(GraphError, ValueError):
    """A binary request is truncated or otherwise undecodable."""
