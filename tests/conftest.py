"""
Pytest configuration and fixtures for the vectorgen test suite.

This module provides:
- Paths to the canonical vector fixtures
- A factory for writing ad-hoc vector documents to a temporary directory
- The reference decoder registered under an importable module name, so
  generated code can be compiled and executed

Generated tests are run in-process: the emitted source is compiled and its
test functions are called directly against tests/lib/reference.py.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest
import structlog

from lib import reference


def configure_test_logging() -> None:
    """Configure structlog for tests: everything at debug, to stderr."""
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        # sys.stderr is looked up on every call
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
    )


configure_test_logging()

VECTORS_DIR = Path(__file__).parent / "vectors"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo logging configuration done by the CLI under test."""
    yield
    configure_test_logging()


# =============================================================================
# Vector fixtures
# =============================================================================


@pytest.fixture(scope="session")
def vectors_dir() -> Path:
    """Directory holding the checked-in vector documents."""
    return VECTORS_DIR


@pytest.fixture(scope="session")
def canonical_vectors_path(vectors_dir: Path) -> Path:
    """Canonical vectors matching the reference decoder."""
    return vectors_dir / "canonical_vectors.json"


@pytest.fixture
def write_vectors(tmp_path: Path) -> Callable[[Any], Path]:
    """Factory writing a vector document to a temporary file.

    Strings are written verbatim (for malformed input), anything else is
    serialized as JSON.

    Returns:
        Callable taking the document and returning the file path.
    """
    counter = 0

    def _write(document: Any, name: str | None = None) -> Path:
        nonlocal counter
        counter += 1
        path = tmp_path / (name or f"vectors_{counter}.json")
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# =============================================================================
# Decoder fixtures
# =============================================================================


@pytest.fixture
def decoder_module(monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    """Reference decoder importable as reference.MODULE_NAME for generated code."""
    monkeypatch.setitem(sys.modules, reference.MODULE_NAME, reference)
    return reference


@pytest.fixture
def run_generated(decoder_module: ModuleType) -> Callable[[str], dict[str, Callable[[], None]]]:
    """Compile generated source and return its test functions by name."""

    def _run(code: str) -> dict[str, Callable[[], None]]:
        namespace: dict[str, Any] = {}
        exec(compile(code, "<generated>", "exec"), namespace)
        return {
            name: obj
            for name, obj in namespace.items()
            if name.startswith("test_") and callable(obj)
        }

    return _run


# =============================================================================
# Pytest hooks and configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "cli: tests that drive the command line entry point")
    config.addinivalue_line("markers", "generated: tests that compile and run generated code")


def pytest_report_header(config):
    """Add information to the pytest header."""
    return [
        "vectorgen test suite",
        f"  Vectors dir: {VECTORS_DIR}",
        f"  Reference decoder: {reference.__file__}",
    ]
