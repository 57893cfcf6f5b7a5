import io
import logging
import struct
import tomllib
from pathlib import Path
from typing import IO, Any

import tomli_w
from pydantic import ValidationError

from ._errors import MalformedInputError
from ._graph import DiGraph
from ._models import Edge, PathResult, ShortestPathRequest

logger = logging.getLogger(__name__)

# Header (source, destination, edge count) and edge records (source, target, weight)
# share the same layout: three little-endian uint16 values.
_TRIPLE = struct.Struct("<HHH")
HEADER_SIZE = _TRIPLE.size
RECORD_SIZE = _TRIPLE.size


# =============================================================================
# Binary Request Codec
# =============================================================================


def _read_exact(stream: IO[bytes], size: int, what: str) -> bytes:
    """Read exactly ``size`` bytes, tolerating streams that return short chunks."""
    buffer = bytearray()
    while len(buffer) < size:
        chunk = stream.read(size - len(buffer))
        if not chunk:
            break
        buffer += chunk
    if len(buffer) != size:
        msg = f"{what} expected to read {size} bytes but got {len(buffer)}"
        raise MalformedInputError(msg)
    return bytes(buffer)


def parse_request(stream: IO[bytes]) -> ShortestPathRequest:
    """Decode a binary shortest-path request from a byte stream.

    Layout (little-endian, all fields uint16)::

        source | destination | N | N x (source | target | weight)

    Bytes after the last edge record are not consumed.

    Args:
        stream: A binary stream positioned at the start of a request.

    Returns:
        The decoded request.

    Raises:
        MalformedInputError: If the stream ends before the header or any edge record is complete.

    """
    source, destination, count = _TRIPLE.unpack(_read_exact(stream, HEADER_SIZE, "header"))
    body = _read_exact(stream, count * RECORD_SIZE, f"{count} edge record(s)")
    edges = tuple(Edge(source=s, target=t, weight=w) for s, t, w in _TRIPLE.iter_unpack(body))
    logger.debug(f"Decoded request {source} -> {destination} with {count} edges")
    return ShortestPathRequest(source=source, destination=destination, edges=edges)


def parse_request_bytes(data: bytes) -> ShortestPathRequest:
    """Decode a binary shortest-path request held in memory."""
    return parse_request(io.BytesIO(data))


def load_request(input_path: Path | str) -> ShortestPathRequest:
    """Load a binary shortest-path request from a file."""
    input_path = Path(input_path)
    with input_path.open("rb") as f:
        request = parse_request(f)
    logger.debug(f"Loaded request from {input_path}")
    return request


def encode_request(request: ShortestPathRequest) -> bytes:
    """Encode a request into the binary wire format read by :func:`parse_request`."""
    parts = [_TRIPLE.pack(request.source, request.destination, request.num_edges)]
    parts.extend(_TRIPLE.pack(*edge.as_tuple()) for edge in request.edges)
    return b"".join(parts)


def dump_request(request: ShortestPathRequest, output_path: Path | str) -> None:
    """Write a request to a file in the binary wire format."""
    output_path = Path(output_path)
    output_path.write_bytes(encode_request(request))
    logger.debug(f"Wrote {request.num_edges} edges to {output_path}")


def toml_to_request(toml_contents: dict[str, Any]) -> ShortestPathRequest:
    """Validate TOML contents into a request.

    Edges may be given as ``[source, target, weight]`` arrays or as tables
    with ``source``, ``target`` and ``weight`` keys.

    Raises:
        MalformedInputError: If the contents do not describe a valid request.

    """
    raw_edges = toml_contents.get("edges", [])
    if not isinstance(raw_edges, list):
        msg = "'edges' must be an array"
        raise MalformedInputError(msg)

    edges: list[Any] = []
    for index, raw in enumerate(raw_edges):
        if isinstance(raw, list):
            if len(raw) != 3:  # noqa: PLR2004
                msg = f"Edge {index} must have exactly 3 values [source, target, weight], got {len(raw)}"
                raise MalformedInputError(msg)
            edges.append(dict(zip(("source", "target", "weight"), raw, strict=True)))
        else:
            edges.append(raw)

    try:
        return ShortestPathRequest.model_validate({**toml_contents, "edges": edges})
    except ValidationError as e:
        msg = f"Invalid request: {e}"
        raise MalformedInputError(msg) from e


def load_request_from_toml(input_path: Path | str) -> ShortestPathRequest:
    """Load a request described in a TOML file."""
    input_path = Path(input_path)
    with input_path.open("rb") as f:
        try:
            toml_contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise MalformedInputError(msg) from e
    return toml_to_request(toml_contents)


# =============================================================================
# Graph Construction
# =============================================================================


def build_graph(request: ShortestPathRequest, node_capacity: int | None = None) -> DiGraph:
    """Build the graph described by a request.

    Args:
        request: The decoded request.
        node_capacity: Number of nodes to allocate. Defaults to the largest
            node id in the request plus one.

    Raises:
        NodeIndexError: If an edge or endpoint lies outside ``node_capacity``.

    """
    if node_capacity is None:
        node_capacity = request.node_capacity()

    graph = DiGraph(node_capacity)
    for endpoint in (request.source, request.destination):
        graph.check_node(endpoint)
    graph.add_edges(edge.as_tuple() for edge in request.edges)

    logger.debug(f"Built graph with {graph.num_nodes} nodes and {graph.num_edges} edges")
    return graph


# =============================================================================
# Result Export
# =============================================================================


def result_to_dict(result: PathResult) -> dict[str, Any]:
    """Convert a result into plain data suitable for JSON or TOML.

    TOML has no null, so ``path`` and ``cost`` are omitted when the
    destination is unreachable.
    """
    data: dict[str, Any] = {
        "source": result.source,
        "destination": result.destination,
        "reachable": result.reachable,
    }
    if result.path is not None:
        data["path"] = list(result.path.nodes)
        data["cost"] = result.path.cost
    return data


def export_result_to_toml(result: PathResult, output_path: Path | str) -> None:
    """Export a shortest-path result to a TOML file."""
    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(result_to_dict(result), f)

    logger.debug(f"Exported result to {output_path}")

