"""
vectorgen - generate decoder unit tests from canonical packet test vectors.

Pipeline: load_vectors -> select_vectors -> emit_tests.
"""

from __future__ import annotations

from vectorgen.emit import emit_test, emit_tests, field_assertions, hex_to_bytes, render_bytes
from vectorgen.errors import (
    EncodingError,
    GenerationError,
    IoError,
    NamingError,
    ParseError,
    VectorShapeError,
)
from vectorgen.naming import accessor_format, default_accessor, vector_test_name
from vectorgen.selection import DEFAULT_PACKETS, SelectedVector, effective_name, select_vectors
from vectorgen.vectors import PacketGroup, TestVector, load_vectors, parse_vectors

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PACKETS",
    "EncodingError",
    "GenerationError",
    "IoError",
    "NamingError",
    "PacketGroup",
    "ParseError",
    "SelectedVector",
    "TestVector",
    "VectorShapeError",
    "accessor_format",
    "default_accessor",
    "effective_name",
    "emit_test",
    "emit_tests",
    "field_assertions",
    "hex_to_bytes",
    "load_vectors",
    "parse_vectors",
    "render_bytes",
    "select_vectors",
    "vector_test_name",
]
