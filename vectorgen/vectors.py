"""
Canonical Test Vector Loader

Reads a vector document and builds the in-memory model the rest of the
generator works on. A document is an array of packet groups:

    [
      {
        "packet": "Packet_Scalar_Field",
        "tests": [
          {"packed": "0102", "unpacked": {"a": 1, "b": 2}},
          {"packed": "0304", "unpacked": {"c": 3}, "packet": "Other"}
        ]
      }
    ]

Documents are read with json5, so plain JSON and annotated JSON5 files are
both accepted. Object key order is preserved and integers keep full
precision; range checks happen at emission time.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import json5
import structlog

from vectorgen.errors import EncodingError, IoError, ParseError

log = structlog.get_logger()


# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class TestVector:
    """One canonical test case."""

    __test__ = False  # not a pytest test class

    packed: str  # hex digits, even length
    unpacked: Any  # expected to be a JSON object of field -> value
    packet: str | None = None  # overrides the group name for this vector


@dataclass(frozen=True)
class PacketGroup:
    """All test vectors declared under one packet name."""

    name: str
    tests: tuple[TestVector, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so groups stay immutable.
        object.__setattr__(self, "tests", tuple(self.tests))


# =============================================================================
# Loading
# =============================================================================


def load_vectors(path: str | Path) -> list[PacketGroup]:
    """Read and parse a vector document from disk.

    Args:
        path: Path to the JSON (or JSON5) vector file.

    Returns:
        Packet groups in document order.

    Raises:
        IoError: If the file cannot be read.
        ParseError: If the content is malformed or has the wrong shape.
        EncodingError: If a packed string has an odd number of digits.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(path, str(e)) from e

    return parse_vectors(text, source=str(path))


def parse_vectors(text: str, source: str = "<string>") -> list[PacketGroup]:
    """Parse a vector document already held in memory.

    Args:
        text: Document text.
        source: Label used in error messages (usually the file path).

    Returns:
        Packet groups in document order.

    Raises:
        ParseError: If the content is malformed or has the wrong shape.
        EncodingError: If a packed string has an odd number of digits.
    """
    try:
        document = json5.loads(text)
    except ValueError as e:
        raise ParseError(f"Could not parse JSON: {e}", source=source) from e

    groups = build_groups(document, source=source)
    log.debug(
        "vectors_loaded",
        source=source,
        packets=len(groups),
        vectors=sum(len(g.tests) for g in groups),
    )
    return groups


def build_groups(document: Any, source: str = "<string>") -> list[PacketGroup]:
    """Validate a decoded document and convert it to PacketGroups."""
    if not isinstance(document, list):
        raise ParseError(
            f"Expected an array of packets, found {_json_type(document)}", source=source
        )

    groups = []
    for position, entry in enumerate(document):
        groups.append(_build_group(entry, position, source))
    return groups


def _build_group(entry: Any, position: int, source: str) -> PacketGroup:
    if not isinstance(entry, dict):
        raise ParseError(
            f"Packet #{position} must be an object, found {_json_type(entry)}",
            source=source,
        )

    name = entry.get("packet")
    if not isinstance(name, str):
        raise ParseError(
            f"Packet #{position} needs a string 'packet' key, found {_json_type(name)}",
            source=source,
        )

    tests = entry.get("tests")
    if not isinstance(tests, list):
        raise ParseError(
            f"Expected a 'tests' array, found {_json_type(tests)}",
            source=source,
            packet=name,
        )

    return PacketGroup(
        name=name,
        tests=[_build_vector(test, name, index, source) for index, test in enumerate(tests)],
    )


def _build_vector(entry: Any, packet: str, index: int, source: str) -> TestVector:
    if not isinstance(entry, dict):
        raise ParseError(
            f"Test vector must be an object, found {_json_type(entry)}",
            source=source,
            packet=packet,
            index=index,
        )

    packed = entry.get("packed")
    if not isinstance(packed, str):
        raise ParseError(
            f"Expected a string 'packed' key, found {_json_type(packed)}",
            source=source,
            packet=packet,
            index=index,
        )
    if len(packed) % 2 != 0:
        raise EncodingError(packed, f"odd number of hex digits ({len(packed)})")

    if "unpacked" not in entry:
        raise ParseError("Missing 'unpacked' key", source=source, packet=packet, index=index)

    override = entry.get("packet")
    if override is not None and not isinstance(override, str):
        raise ParseError(
            f"Expected 'packet' override to be a string, found {_json_type(override)}",
            source=source,
            packet=packet,
            index=index,
        )

    return TestVector(packed=packed, unpacked=entry["unpacked"], packet=override)


def _json_type(value: Any) -> str:
    """Describe a decoded value with JSON vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Sequence):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
