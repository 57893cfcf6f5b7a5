"""Graph module providing the weighted DAG store and its algorithms.

This module contains:
- DiGraph: A weighted directed graph over a fixed range of integer nodes
- topological_sort: Kahn's algorithm with cycle detection
- shortest_path / shortest_distances: Single-source relaxation in topological order
"""

from ._algorithms import shortest_distances, shortest_path, topological_sort
from ._digraph import DiGraph

__all__ = ["DiGraph", "shortest_distances", "shortest_path", "topological_sort"]
