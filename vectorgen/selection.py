"""
Vector selection.

Decides which vectors get a generated test. A vector is addressed by its
effective name: its own "packet" override when present, otherwise the name
of the group it is declared in.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass

import structlog

from vectorgen.vectors import PacketGroup, TestVector

log = structlog.get_logger()

# Packets the decoder under test currently supports.
DEFAULT_PACKETS: tuple[str, ...] = ("Packet_Scalar_Field",)


@dataclass(frozen=True)
class SelectedVector:
    """A vector chosen for emission."""

    name: str  # effective packet name
    vector: TestVector
    ordinal: int  # 1-based position within the enclosing group


def effective_name(group: PacketGroup, vector: TestVector) -> str:
    """Resolve the packet name a vector is filtered and emitted under."""
    return vector.packet if vector.packet is not None else group.name


def select_vectors(
    groups: Iterable[PacketGroup],
    allowed: Collection[str] | None,
) -> list[SelectedVector]:
    """Pick the vectors to generate tests for.

    Document order is preserved. Ordinals count every vector in the group,
    including the ones that are skipped, so a test keeps its name when the
    allow-list changes.

    Args:
        groups: Loaded packet groups.
        allowed: Packet names to keep (exact, case-sensitive match).
            None keeps every vector.

    Returns:
        Selected vectors in document order.
    """
    selected = []
    for group in groups:
        for ordinal, vector in enumerate(group.tests, start=1):
            name = effective_name(group, vector)
            if allowed is not None and name not in allowed:
                log.info("skipping_packet", packet=name, group=group.name, ordinal=ordinal)
                continue
            selected.append(SelectedVector(name=name, vector=vector, ordinal=ordinal))

    log.debug("vectors_selected", count=len(selected))
    return selected
