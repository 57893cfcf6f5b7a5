"""Request and result types for shortest-path queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

UINT16_MAX = 0xFFFF

UInt16 = Annotated[int, Field(ge=0, le=UINT16_MAX)]
"""An unsigned 16-bit integer, the width of every field on the wire."""


class Edge(BaseModel):
    """A weighted directed edge as carried in a request."""

    model_config = ConfigDict(frozen=True)

    source: UInt16
    target: UInt16
    weight: UInt16

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.source, self.target, self.weight)


class ShortestPathRequest(BaseModel):
    """A decoded shortest-path query: endpoints plus the edge list.

    The request does not declare how many nodes the graph holds. The
    capacity is derived from the largest node id it mentions.
    """

    model_config = ConfigDict(frozen=True)

    source: UInt16
    destination: UInt16
    edges: tuple[Edge, ...] = ()

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def node_capacity(self) -> int:
        """Return the smallest node count that can hold every id in the request."""
        highest = max(self.source, self.destination)
        for edge in self.edges:
            highest = max(highest, edge.source, edge.target)
        return highest + 1


@dataclass(frozen=True, slots=True)
class WeightedPath:
    """An ordered walk from source to destination (inclusive) and its total weight."""

    nodes: tuple[int, ...]
    cost: int

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True, slots=True)
class PathResult:
    """Outcome of a shortest-path query.

    ``path`` is None when the destination cannot be reached from the source.
    That is a normal outcome, not an error.
    """

    source: int
    destination: int
    path: WeightedPath | None = None

    @property
    def reachable(self) -> bool:
        return self.path is not None

    @property
    def cost(self) -> int | None:
        return None if self.path is None else self.path.cost
