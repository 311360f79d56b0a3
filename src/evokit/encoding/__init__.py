"""Genome encodings: bit strings and graph6 graph strings."""

from evokit.encoding.binary import Binary, OneMax
from evokit.encoding.graph6 import (
    decode_graph,
    encode_edges,
    encode_graph,
    encode_nodes,
    graph6_repr_bits,
    to_u8,
    upper_triangle_index,
)

__all__ = [
    # Binary
    "Binary",
    "OneMax",
    # graph6
    "decode_graph",
    "encode_edges",
    "encode_graph",
    "encode_nodes",
    "graph6_repr_bits",
    "to_u8",
    "upper_triangle_index",
]
