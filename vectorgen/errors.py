"""
Generator errors.

Every failure the generator can report derives from GenerationError. Errors
carry the context needed to locate the offending input (path, packet name,
test index, field key) as attributes and render it into the message.

There is no recovery: the first error raised aborts the whole batch.
"""

from __future__ import annotations

from typing import Any


class GenerationError(Exception):
    """Base class for all fatal generator errors."""


class IoError(GenerationError):
    """Raised when the vector file cannot be read or the output cannot be written."""

    def __init__(self, path: Any, reason: str, action: str = "read") -> None:
        """Initialize I/O error.

        Args:
            path: Path of the file that could not be accessed.
            reason: Underlying OS error text.
            action: What was attempted ("read" or "write").
        """
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not {action} {self.path}: {reason}")


class ParseError(GenerationError):
    """Raised when the vector document is not valid JSON or has the wrong shape."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        packet: str | None = None,
        index: int | None = None,
    ) -> None:
        """Initialize parse error.

        Args:
            message: What is wrong.
            source: Path (or label) of the document.
            packet: Name of the enclosing packet group, when known.
            index: 0-based position of the offending test vector, when known.
        """
        self.source = source
        self.packet = packet
        self.index = index

        location = []
        if source is not None:
            location.append(source)
        if packet is not None:
            location.append(f"packet {packet!r}")
        if index is not None:
            location.append(f"test #{index}")

        if location:
            message = f"{', '.join(location)}: {message}"
        super().__init__(message)


class VectorShapeError(GenerationError):
    """Raised when a selected vector cannot be turned into assertions."""

    def __init__(self, message: str, packet: str, key: str | None = None) -> None:
        self.packet = packet
        self.key = key
        prefix = f"packet {packet!r}"
        if key is not None:
            prefix += f", key {key!r}"
        super().__init__(f"{prefix}: {message}")


class NamingError(VectorShapeError):
    """Raised when a derived name is not a valid Python identifier."""


class EncodingError(GenerationError):
    """Raised when a packed string is not an even-length run of hex digits."""

    def __init__(self, packed: str, reason: str) -> None:
        self.packed = packed
        self.reason = reason
        super().__init__(f"Invalid packed string {packed!r}: {reason}")
