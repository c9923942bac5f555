"""
Test Emitter

Turns selected vectors into pytest source. Each vector becomes one test
function:

    def test_Foo_vector_1_0x0102():
        packed = bytes([0x01, 0x02])
        actual = decoder.FooPacket.parse(packed)
        assert actual is not None
        assert actual.get_x() == 1

The whole module is assembled in memory and returned as a single string.
Any invalid vector aborts the batch with the first error found.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from vectorgen.errors import EncodingError, NamingError, VectorShapeError
from vectorgen.naming import (
    AccessorNaming,
    check_module,
    decoder_class,
    default_accessor,
    require_identifier,
    vector_test_name,
)
from vectorgen.selection import SelectedVector

log = structlog.get_logger()

U64_MAX = (1 << 64) - 1
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
INDENT = "    "


# =============================================================================
# Byte Conversion
# =============================================================================


def hex_to_bytes(packed: str) -> bytes:
    """Convert a string of hex digits to bytes.

    Every pair of characters is one byte, upper or lower case. Nothing else
    is accepted: no whitespace, no ``0x`` prefix, no odd trailing digit.

    Args:
        packed: Hex string such as ``"80038302"``.

    Returns:
        The decoded bytes, ``len(packed) // 2`` of them.

    Raises:
        EncodingError: If the length is odd or a character is not a hex digit.
    """
    if len(packed) % 2 != 0:
        raise EncodingError(packed, f"odd number of hex digits ({len(packed)})")

    bad = [c for c in packed if c not in HEX_DIGITS]
    if bad:
        raise EncodingError(packed, f"non-hexadecimal character {bad[0]!r}")

    return bytes(int(packed[i : i + 2], 16) for i in range(0, len(packed), 2))


def render_bytes(data: bytes) -> str:
    """Render bytes as a Python expression, e.g. ``bytes([0x80, 0x03])``."""
    return "bytes([" + ", ".join(f"0x{b:02x}" for b in data) + "])"


# =============================================================================
# Assertions
# =============================================================================


def check_u64(value: Any, packet: str, key: str) -> int:
    """Return value if it is an unsigned 64-bit integer.

    Raises:
        VectorShapeError: For booleans, non-integers and out-of-range values.
    """
    # bool is an int subclass but never a valid field value
    if isinstance(value, bool) or not isinstance(value, int):
        raise VectorShapeError(f"Expected u64, got {value!r}", packet=packet, key=key)
    if value < 0 or value > U64_MAX:
        raise VectorShapeError(
            f"Expected u64, got {value} (outside 0..{U64_MAX})", packet=packet, key=key
        )
    return value


def field_assertions(
    packet: str,
    unpacked: Any,
    accessor: AccessorNaming = default_accessor,
) -> list[str]:
    """Build one assertion line per expected field, in key order.

    Args:
        packet: Effective packet name (for error messages).
        unpacked: The vector's expected values; must be a JSON object.
        accessor: Maps a field name to the decoded object's accessor.

    Returns:
        Lines like ``assert actual.get_x() == 1``.

    Raises:
        VectorShapeError: If unpacked is not an object or a value is not a u64.
        NamingError: If an accessor name is not a valid identifier.
    """
    if not isinstance(unpacked, Mapping):
        raise VectorShapeError(f"Expected test vector object, found: {unpacked!r}", packet=packet)

    lines = []
    for key, value in unpacked.items():
        getter = require_identifier(accessor(key), packet=packet, key=key)
        literal = check_u64(value, packet, key)
        lines.append(f"assert actual.{getter}() == {literal}")
    return lines


# =============================================================================
# Test Units
# =============================================================================


def emit_test(
    selected: SelectedVector,
    module: str,
    accessor: AccessorNaming = default_accessor,
) -> str:
    """Emit the source of one test function.

    Args:
        selected: The vector, its effective name and ordinal.
        module: Dotted module qualifier the decoder types live in.
        accessor: Field-name to accessor-name strategy.

    Returns:
        Source text of a single ``def test_...():`` block.
    """
    vector = selected.vector
    packed = render_bytes(hex_to_bytes(vector.packed))
    name = vector_test_name(selected.name, selected.ordinal, vector.packed)
    decoder = decoder_class(selected.name)
    assertions = field_assertions(selected.name, vector.unpacked, accessor)

    body = [
        f"packed = {packed}",
        f"actual = {module}.{decoder}.parse(packed)",
        "assert actual is not None",
        *assertions,
    ]
    return f"def {name}():\n" + "".join(f"{INDENT}{line}\n" for line in body)


def emit_header(module: str, source: str | None = None) -> str:
    """Banner and import block placed at the top of a generated module."""
    lines = ["# Canonical packet tests generated by vectorgen"]
    if source is not None:
        lines.append(f"# Source: {source}")
    lines.append("# DO NOT EDIT - regenerate from the test vectors instead.")
    lines.append("")
    lines.append(f"import {module}")
    return "\n".join(lines) + "\n"


def emit_tests(
    selection: Iterable[SelectedVector],
    module: str,
    accessor: AccessorNaming = default_accessor,
    source: str | None = None,
) -> str:
    """Emit a complete test module for every selected vector.

    Args:
        selection: Vectors chosen by the selector, in document order.
        module: Dotted module qualifier the decoder types live in.
        accessor: Field-name to accessor-name strategy.
        source: Input path recorded in the banner.

    Returns:
        The full module text.

    Raises:
        ValueError: If module is not a dotted Python name.
        NamingError: If two vectors would produce the same test name.
        GenerationError: On the first vector that cannot be emitted.
    """
    check_module(module)

    units = []
    seen: set[str] = set()
    for selected in selection:
        units.append(emit_test(selected, module, accessor))
        name = vector_test_name(selected.name, selected.ordinal, selected.vector.packed)
        if name in seen:
            raise NamingError(f"duplicate test name {name!r}", packet=selected.name)
        seen.add(name)
    log.info("tests_emitted", count=len(units), module=module)

    return "\n\n".join([emit_header(module, source), *units])
