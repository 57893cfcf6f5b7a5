"""Shortest paths on weighted directed acyclic graphs."""

__all__ = [
    "CycleError",
    "DiGraph",
    "Edge",
    "GraphError",
    "MalformedInputError",
    "MissingEdgeError",
    "NodeIndexError",
    "PathReconstructionError",
    "PathResult",
    "ShortestPathRequest",
    "WeightedPath",
    "build_graph",
    "dump_request",
    "encode_request",
    "export_result_to_toml",
    "load_request",
    "load_request_from_toml",
    "parse_request",
    "parse_request_bytes",
    "result_to_dict",
    "shortest_distances",
    "shortest_path",
    "solve",
    "topological_sort",
]

from ._errors import (
    CycleError,
    GraphError,
    MalformedInputError,
    MissingEdgeError,
    NodeIndexError,
    PathReconstructionError,
)
from ._graph import DiGraph, shortest_distances, shortest_path, topological_sort
from ._io import (
    build_graph,
    dump_request,
    encode_request,
    export_result_to_toml,
    load_request,
    load_request_from_toml,
    parse_request,
    parse_request_bytes,
    result_to_dict,
)
from ._models import Edge, PathResult, ShortestPathRequest, WeightedPath
from ._solve import solve
