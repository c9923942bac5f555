"""
Name derivation for generated tests.

Packet names and field keys are used verbatim as identifier fragments. Names
are never transliterated: a fragment that does not produce a valid Python
identifier is rejected with NamingError.
"""

from __future__ import annotations

import keyword
from collections.abc import Callable

from vectorgen.errors import NamingError

AccessorNaming = Callable[[str], str]

TEST_PREFIX = "test_"
VECTOR_TOKEN = "vector"
PACKET_SUFFIX = "Packet"
DEFAULT_ACCESSOR_FORMAT = "get_{}"


def is_identifier(name: str) -> bool:
    """Check that name can be used as a Python identifier."""
    return name.isidentifier() and not keyword.iskeyword(name)


def require_identifier(name: str, packet: str, key: str | None = None) -> str:
    """Return name unchanged, or raise NamingError if it is not an identifier."""
    if not is_identifier(name):
        raise NamingError(f"{name!r} is not a valid Python identifier", packet=packet, key=key)
    return name


def vector_test_name(packet: str, ordinal: int, packed: str) -> str:
    """Derive the test function name for one vector.

    The packed string is appended verbatim so two vectors sharing a packet
    name and ordinal across different selections still get distinct names,
    and regenerating the same input yields the same names.

    Args:
        packet: Effective packet name.
        ordinal: 1-based position in the enclosing group's test list.
        packed: Hex string of the vector.

    Returns:
        A name such as ``test_Foo_vector_1_0x0102``.

    Raises:
        NamingError: If the result is not a valid identifier.
    """
    name = f"{TEST_PREFIX}{packet}_{VECTOR_TOKEN}_{ordinal}_0x{packed}"
    return require_identifier(name, packet=packet)


def decoder_class(packet: str) -> str:
    """Name of the decoder type for a packet, e.g. ``FooPacket``."""
    return require_identifier(f"{packet}{PACKET_SUFFIX}", packet=packet)


def accessor_format(fmt: str = DEFAULT_ACCESSOR_FORMAT) -> AccessorNaming:
    """Build an accessor naming strategy from a format string.

    Args:
        fmt: str.format template with one positional slot for the field name.

    Returns:
        Callable mapping a field name to its accessor name.

    Raises:
        ValueError: If fmt does not contain exactly one ``{}`` slot.
    """
    try:
        valid = fmt.count("{}") == 1 and fmt.format("") == fmt.replace("{}", "")
    except (IndexError, KeyError, ValueError):
        valid = False
    if not valid:
        raise ValueError(f"Accessor format must contain exactly one '{{}}' slot: {fmt!r}")

    def naming(field_name: str) -> str:
        return fmt.format(field_name)

    return naming


default_accessor: AccessorNaming = accessor_format()


def check_module(module: str) -> str:
    """Validate a dotted module qualifier such as ``pdl.canonical``.

    Raises:
        ValueError: If any component is not a valid identifier.
    """
    parts = module.split(".")
    if not module or not all(is_identifier(part) for part in parts):
        raise ValueError(f"Module qualifier must be a dotted Python name: {module!r}")
    return module
