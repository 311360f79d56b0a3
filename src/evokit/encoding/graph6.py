"""graph6 encoding of simple undirected graphs.

graph6 packs a graph into printable ASCII: the node count N(n) followed by
the upper triangle of the adjacency matrix R(x), six bits per character.
Edges are laid out column by column:

    (0,1),(0,2),(1,2),(0,3),(1,3),(2,3),...,(n-2,n-1)

Output is deterministic for a given node count and edge set, so encoded
strings work as cache and deduplication keys. Canonical labeling is not
done here: isomorphic graphs with different node orderings encode
differently.

Reference:
    https://users.cecs.anu.edu.au/~bdm/data/formats.txt
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from evokit.core.errors import ValidationError

_OFFSET = 63
_LONG = 126
_MAX_SHORT = 62
_MAX_MEDIUM = 258047
_MAX_LONG = 68719476735


def to_u8(bits: Sequence[bool]) -> int:
    """Convert six bits, most significant first, into an integer.

    Raises:
        ValidationError: If bits does not hold exactly six values.
    """
    if len(bits) != 6:
        raise ValidationError("expected exactly 6 bits", field="bits", value=len(bits))
    value = 0
    for b in bits:
        value = value * 2 + int(bool(b))
    return value


def graph6_repr_bits(bits: Sequence[bool]) -> bytes:
    """Pack a bit vector into graph6 bytes.

    The bits are split into groups of six, the last group padded on the
    right with zeros, and 63 is added to each group's value.
    """
    out = bytearray()
    for start in range(0, len(bits), 6):
        group = list(bits[start : start + 6])
        group.extend([False] * (6 - len(group)))
        out.append(to_u8(group) + _OFFSET)
    return bytes(out)


def _int_bits(n: int, width: int) -> list[bool]:
    return [c == "1" for c in format(n, f"0{width}b")]


def encode_nodes(n: int) -> bytes:
    """Encode a node count as N(n).

    One byte for n <= 62, 126 followed by 18 bits for n <= 258047, and
    126 126 followed by 36 bits beyond that.

    Raises:
        ValidationError: If n is negative or larger than 2**36 - 1.
    """
    if 0 <= n <= _MAX_SHORT:
        return bytes([n + _OFFSET])
    if _MAX_SHORT < n <= _MAX_MEDIUM:
        return bytes([_LONG]) + graph6_repr_bits(_int_bits(n, 18))
    if _MAX_MEDIUM < n <= _MAX_LONG:
        return bytes([_LONG, _LONG]) + graph6_repr_bits(_int_bits(n, 36))
    raise ValidationError("n is out of range", field="n", value=n)


def upper_triangle_index(i: int, j: int) -> int:
    """Position of the pair (i, j), i < j, in graph6 edge order.

    Raises:
        ValidationError: If the pair is not strictly upper triangular.
    """
    if not 0 <= i < j:
        raise ValidationError("invalid index", field="edge", value=(i, j))
    return j * (j - 1) // 2 + i


def encode_edges(n: int, edges: Iterable[tuple[int, int]]) -> bytes:
    """Encode the upper triangle of the adjacency matrix as R(x).

    Raises:
        ValidationError: If an edge is a self loop or names a missing node.
    """
    bits = [False] * (n * (n - 1) // 2)
    for a, b in edges:
        i, j = min(a, b), max(a, b)
        if j >= n or i < 0:
            raise ValidationError(
                f"edge refers to a node outside 0..{n - 1}",
                field="edge",
                value=(a, b),
            )
        bits[upper_triangle_index(i, j)] = True
    return graph6_repr_bits(bits)


def encode_graph(n: int, edges: Iterable[tuple[int, int]]) -> str:
    """Encode a graph with n nodes as a graph6 string.

    Example:
        >>> encode_graph(5, [(0, 2), (1, 3), (0, 4), (3, 4)])
        'DQc'
    """
    return (encode_nodes(n) + encode_edges(n, edges)).decode("ascii")


def _decode_nodes(data: bytes) -> tuple[int, int]:
    """Return the node count and the number of bytes it occupied."""

    def unpack(chunk: bytes) -> int:
        value = 0
        for byte in chunk:
            value = (value << 6) | (byte - _OFFSET)
        return value

    if not data:
        raise ValidationError("empty graph6 string", field="graph6", value="")
    if data[0] != _LONG:
        return data[0] - _OFFSET, 1
    if len(data) >= 2 and data[1] == _LONG:
        if len(data) < 8:
            raise ValidationError("truncated node count", field="graph6", value=data)
        return unpack(data[2:8]), 8
    if len(data) < 4:
        raise ValidationError("truncated node count", field="graph6", value=data)
    return unpack(data[1:4]), 4


def decode_graph(s: str) -> tuple[int, list[tuple[int, int]]]:
    """Decode a graph6 string into (n, edges).

    Edges come back as (i, j) pairs with i < j, in graph6 edge order.

    Raises:
        ValidationError: If s is not a well-formed graph6 string.
    """
    try:
        data = s.encode("ascii")
    except UnicodeEncodeError as e:
        raise ValidationError("graph6 must be ASCII", field="graph6", value=s) from e
    if any(not _OFFSET <= byte <= _LONG for byte in data):
        raise ValidationError("graph6 byte out of range 63..126", field="graph6", value=s)

    n, offset = _decode_nodes(data)
    m = n * (n - 1) // 2
    body = data[offset:]
    expected = (m + 5) // 6
    if len(body) != expected:
        raise ValidationError(
            f"expected {expected} edge bytes for {n} nodes, got {len(body)}",
            field="graph6",
            value=s,
        )

    bits: list[bool] = []
    for byte in body:
        bits.extend(_int_bits(byte - _OFFSET, 6))

    edges: list[tuple[int, int]] = []
    k = 0
    for j in range(1, n):
        for i in range(j):
            if bits[k]:
                edges.append((i, j))
            k += 1
    return n, edges
